"""Per-language extractors.

Each extractor takes raw file text and returns a FileRecord. They are pure
functions of (text, path): running one twice on the same input gives the
same record. Matching is regex based and deliberately approximate.
"""

from __future__ import annotations

from typing import Callable, Dict, Sequence

from ..fs_scan import Family, detect_family
from ..model import FileRecord
from .css import extract_css
from .js import extract_js
from .py import extract_py
from .rust import extract_rust


Extractor = Callable[[str, str, str, Sequence[str], str], FileRecord]

EXTRACTORS: Dict[Family, Extractor] = {
	Family.ESM: extract_js,
	Family.CSS: extract_css,
	Family.PYTHON: extract_py,
	Family.RUST: extract_rust,
}


def extract(
	content: str,
	file_path: str,
	root_path: str,
	extensions: Sequence[str],
	relative: str,
) -> FileRecord:
	return EXTRACTORS[detect_family(file_path)](content, file_path, root_path, extensions, relative)


__all__ = ["extract", "extract_css", "extract_js", "extract_py", "extract_rust", "EXTRACTORS"]
