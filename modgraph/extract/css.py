from __future__ import annotations

from typing import Sequence

from ..model import FileRecord, ImportEntry, ImportKind
from ..patterns import CSS_IMPORT
from ..resolve import resolve_specifier


def extract_css(
	content: str,
	file_path: str,
	root_path: str,
	extensions: Sequence[str],
	relative: str,
) -> FileRecord:
	imports = [
		ImportEntry(
			source=m.group(1),
			kind=ImportKind.STATIC,
			resolved=resolve_specifier(file_path, root_path, m.group(1), extensions),
		)
		for m in CSS_IMPORT.finditer(content)
	]
	return FileRecord(path=relative, loc=len(content.splitlines()), imports=imports)
