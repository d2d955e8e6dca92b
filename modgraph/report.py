from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

from .model import CommandGap, FileRecord, ReexportKind, RootAnalysis


def _gap_payload(gap: CommandGap) -> Dict[str, Any]:
	return {
		"name": gap.name,
		"locations": [{"file": f, "line": line} for f, line in gap.locations],
	}


def file_payload(record: FileRecord) -> Dict[str, Any]:
	reexports: List[Dict[str, Any]] = []
	for r in record.reexports:
		item: Dict[str, Any] = {"source": r.source, "kind": r.kind.value}
		if r.kind is ReexportKind.NAMED:
			item["names"] = list(r.names)
		item["resolved"] = r.resolved
		reexports.append(item)
	return {
		"path": record.path,
		"loc": record.loc,
		"imports": [{"source": i.source, "kind": i.kind.value, "resolved": i.resolved} for i in record.imports],
		"reexports": reexports,
		"dynamicImports": list(record.dynamic_imports),
		"exports": [{"name": e.name, "kind": e.kind} for e in record.exports],
		"commandCalls": [{"name": c.name, "line": c.line} for c in record.command_calls],
		"commandHandlers": [{"name": c.name, "line": c.line} for c in record.command_handlers],
	}


def build_payload(analysis: RootAnalysis) -> Dict[str, Any]:
	"""Machine-readable view of one root. Key names are stable."""
	return {
		"root": analysis.root,
		"filesAnalyzed": len(analysis.records),
		"duplicateExports": [{"name": g.name, "files": list(g.files)} for g in analysis.duplicates],
		"duplicateExportsRanked": [
			{
				"name": g.name,
				"files": list(g.files),
				"score": g.score,
				"nonDevCount": g.prod_count,
				"devCount": g.dev_count,
				"canonical": g.canonical,
				"refactorTargets": list(g.refactor_targets),
			}
			for g in analysis.ranked_duplicates
		],
		"reexportCascades": [{"from": c.from_file, "to": c.to_file} for c in analysis.cascades],
		"dynamicImports": [
			{
				"file": d.file,
				"sources": list(d.sources),
				"manySources": d.many_sources,
				"selfImport": d.self_import,
			}
			for d in analysis.dynamic_imports
		],
		"commandCoverage": {
			"missingHandlers": [_gap_payload(g) for g in analysis.coverage.missing_handlers],
			"unusedHandlers": [_gap_payload(g) for g in analysis.coverage.unused_handlers],
		},
		"files": [file_payload(r) for r in analysis.records],
	}


def dumps_combined(payloads: Sequence[Dict[str, Any]]) -> str:
	if len(payloads) == 1:
		return json.dumps(payloads[0], indent=2)
	return json.dumps(list(payloads), indent=2)


def dumps_line(payload: Dict[str, Any]) -> str:
	return json.dumps(payload, separators=(",", ":"))
