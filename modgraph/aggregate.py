from __future__ import annotations

from typing import Dict, List, Sequence

from .model import (
	DEFAULT_DEV_MARKERS,
	CascadeEdge,
	DuplicateGroup,
	DynamicImportSummary,
	FileRecord,
)


MANY_DYNAMIC_SOURCES = 5


def is_dev_file(path: str, markers: Sequence[str] = DEFAULT_DEV_MARKERS) -> bool:
	return any(marker in path for marker in markers)


def build_export_index(records: Sequence[FileRecord]) -> Dict[str, List[str]]:
	index: Dict[str, List[str]] = {}
	for record in records:
		for symbol in record.exports:
			index.setdefault(symbol.name, []).append(record.path)
	return index


def score_duplicate(
	name: str,
	files: Sequence[str],
	markers: Sequence[str] = DEFAULT_DEV_MARKERS,
	prod_weight: int = 2,
	dev_weight: int = 1,
) -> DuplicateGroup:
	dev_count = sum(1 for f in files if is_dev_file(f, markers))
	prod_count = len(files) - dev_count
	canonical = next((f for f in files if not is_dev_file(f, markers)), files[0])
	return DuplicateGroup(
		name=name,
		files=list(files),
		score=prod_weight * prod_count + dev_weight * dev_count,
		prod_count=prod_count,
		dev_count=dev_count,
		canonical=canonical,
		refactor_targets=sorted(f for f in files if f != canonical),
	)


def find_duplicates(
	index: Dict[str, List[str]],
	markers: Sequence[str] = DEFAULT_DEV_MARKERS,
	prod_weight: int = 2,
	dev_weight: int = 1,
) -> List[DuplicateGroup]:
	groups: List[DuplicateGroup] = []
	for name, owners in index.items():
		files = list(dict.fromkeys(owners))
		if len(files) < 2:
			continue
		groups.append(score_duplicate(name, files, markers, prod_weight, dev_weight))
	return groups


def rank_duplicates(groups: Sequence[DuplicateGroup]) -> List[DuplicateGroup]:
	return sorted(groups, key=lambda g: (-g.score, -len(g.files)))


def find_cascades(records: Sequence[FileRecord]) -> List[CascadeEdge]:
	"""Re-export edges whose target re-exports something itself."""
	reexport_files = {r.path for r in records if r.reexports}
	cascades: List[CascadeEdge] = []
	for record in records:
		for entry in record.reexports:
			if entry.resolved is not None and entry.resolved in reexport_files:
				cascades.append(CascadeEdge(from_file=record.path, to_file=entry.resolved))
	return cascades


def summarize_dynamic_imports(records: Sequence[FileRecord]) -> List[DynamicImportSummary]:
	summaries: List[DynamicImportSummary] = []
	for record in records:
		sources = record.dynamic_imports
		if not sources:
			continue
		summaries.append(
			DynamicImportSummary(
				file=record.path,
				sources=list(sources),
				many_sources=len(sources) > MANY_DYNAMIC_SOURCES,
				self_import=len(set(sources)) < len(sources),
			)
		)
	return summaries
