from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .aggregate import (
	build_export_index,
	find_cascades,
	find_duplicates,
	rank_duplicates,
	summarize_dynamic_imports,
)
from .commands import match_commands
from .extract import extract
from .fs_scan import scan_repository, to_relative
from .model import AnalysisError, FileRecord, Options, RootAnalysis


logger = logging.getLogger(__name__)


def read_source(path: str) -> str:
	try:
		with open(path, "r", encoding="utf-8") as fh:
			return fh.read()
	except (OSError, UnicodeDecodeError) as e:
		raise AnalysisError(path, str(e)) from e


def analyze_file(path: str, root: str, options: Options) -> FileRecord:
	return extract(read_source(path), path, root, options.extensions, to_relative(root, path))


def aggregate_records(root: str, records: List[FileRecord], options: Options) -> RootAnalysis:
	index = build_export_index(records)
	duplicates = find_duplicates(index, options.dev_markers, options.prod_weight, options.dev_weight)
	return RootAnalysis(
		root=root,
		records=records,
		export_index=index,
		duplicates=duplicates,
		ranked_duplicates=rank_duplicates(duplicates),
		cascades=find_cascades(records),
		dynamic_imports=summarize_dynamic_imports(records),
		coverage=match_commands(records),
	)


def analyze_root(root: str, files: Optional[Sequence[str]] = None, options: Optional[Options] = None) -> RootAnalysis:
	"""Analyze one root. Files are processed strictly in the order given.

	Raises AnalysisError on the first unreadable file.
	"""
	options = options or Options()
	if files is None:
		files = scan_repository(root, options)
	logger.debug("Analyzing %d files under %s", len(files), root)
	records = [analyze_file(path, root, options) for path in files]
	return aggregate_records(root, records, options)
