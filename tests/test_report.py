import json

from modgraph.model import (
	CommandRef,
	ExportSymbol,
	FileRecord,
	ImportEntry,
	ImportKind,
	Options,
	ReexportEntry,
	ReexportKind,
)
from modgraph.pipeline import aggregate_records
from modgraph.report import build_payload, dumps_combined, dumps_line
from modgraph.summarize import summarize_root


def _analysis(root="/repo"):
	records = [
		FileRecord(
			path="a.ts",
			loc=3,
			imports=[ImportEntry(source="./b", kind=ImportKind.STATIC, resolved="b.ts"), ImportEntry(source="./x.css", kind=ImportKind.SIDE_EFFECT)],
			reexports=[ReexportEntry(source="./b", kind=ReexportKind.NAMED, names=["X"], resolved="b.ts")],
			exports=[ExportSymbol(name="X", kind="reexport")],
			dynamic_imports=["./lazy", "./lazy"],
			command_calls=[CommandRef(name="ping", line=2)],
		),
		FileRecord(
			path="b.ts",
			loc=1,
			reexports=[ReexportEntry(source="./c", kind=ReexportKind.STAR)],
			exports=[ExportSymbol(name="X", kind="decl")],
		),
	]
	return aggregate_records(root, records, Options())


def test_payload_shape():
	payload = build_payload(_analysis())
	assert payload["root"] == "/repo"
	assert payload["filesAnalyzed"] == 2
	assert payload["duplicateExports"] == [{"name": "X", "files": ["a.ts", "b.ts"]}]
	assert payload["duplicateExportsRanked"] == [
		{
			"name": "X",
			"files": ["a.ts", "b.ts"],
			"score": 4,
			"nonDevCount": 2,
			"devCount": 0,
			"canonical": "a.ts",
			"refactorTargets": ["b.ts"],
		}
	]
	assert payload["reexportCascades"] == [{"from": "a.ts", "to": "b.ts"}]
	assert payload["dynamicImports"] == [
		{"file": "a.ts", "sources": ["./lazy", "./lazy"], "manySources": False, "selfImport": True}
	]
	assert payload["commandCoverage"]["missingHandlers"] == [
		{"name": "ping", "locations": [{"file": "a.ts", "line": 2}]}
	]


def test_file_entries_are_name_stable():
	first = build_payload(_analysis())["files"][0]
	assert set(first) == {
		"path",
		"loc",
		"imports",
		"reexports",
		"dynamicImports",
		"exports",
		"commandCalls",
		"commandHandlers",
	}
	assert first["imports"][1] == {"source": "./x.css", "kind": "side-effect", "resolved": None}
	assert first["reexports"][0] == {"source": "./b", "kind": "named", "names": ["X"], "resolved": "b.ts"}
	second = build_payload(_analysis())["files"][1]
	assert second["reexports"][0] == {"source": "./c", "kind": "star", "resolved": None}


def test_single_root_is_an_object_and_many_are_an_array():
	one = json.loads(dumps_combined([build_payload(_analysis())]))
	assert isinstance(one, dict)
	many = json.loads(dumps_combined([build_payload(_analysis("/a")), build_payload(_analysis("/b"))]))
	assert [p["root"] for p in many] == ["/a", "/b"]


def test_line_output_is_compact():
	line = dumps_line(build_payload(_analysis()))
	assert "\n" not in line
	assert json.loads(line)["filesAnalyzed"] == 2


def test_human_summary():
	text = summarize_root(_analysis(), limit=5)
	assert text.startswith("Import/export analysis for /repo/")
	assert "Files analyzed: 2" in text
	assert "X (score 4, 2 files: 2 prod, 0 dev) canonical: a.ts | refs: b.ts" in text
	assert "a.ts -> b.ts" in text
	assert "ping (a.ts:2)" in text
