from modgraph.aggregate import (
	build_export_index,
	find_cascades,
	find_duplicates,
	is_dev_file,
	rank_duplicates,
	score_duplicate,
	summarize_dynamic_imports,
)
from modgraph.model import ExportSymbol, FileRecord, ReexportEntry, ReexportKind


def _record(path, *names, **kwargs):
	exports = [ExportSymbol(name=n, kind="decl") for n in names]
	return FileRecord(path=path, exports=exports, **kwargs)


def test_same_symbol_in_two_files():
	records = [_record("a.ts", "X"), _record("b.ts", "X")]
	groups = find_duplicates(build_export_index(records))
	assert len(groups) == 1
	group = groups[0]
	assert group.name == "X"
	assert group.score == 4
	assert group.canonical == "a.ts"
	assert group.refactor_targets == ["b.ts"]


def test_export_index_keeps_processing_order():
	records = [_record("z.ts", "A"), _record("a.ts", "A", "B"), _record("m.ts", "A")]
	index = build_export_index(records)
	assert index["A"] == ["z.ts", "a.ts", "m.ts"]
	assert index["B"] == ["a.ts"]


def test_one_file_exporting_twice_is_not_a_duplicate():
	records = [_record("a.ts", "X", "X"), _record("b.ts", "Y")]
	assert find_duplicates(build_export_index(records)) == []


def test_dev_files_score_lower_and_are_never_canonical():
	files = ["src/__tests__/Button.test.tsx", "src/Button.stories.tsx", "src/Button.tsx"]
	group = score_duplicate("Button", files)
	assert (group.prod_count, group.dev_count) == (1, 2)
	assert group.score == 4
	assert group.canonical == "src/Button.tsx"
	assert group.refactor_targets == ["src/Button.stories.tsx", "src/__tests__/Button.test.tsx"]


def test_all_dev_files_fall_back_to_first():
	group = score_duplicate("X", ["b/__tests__/x.ts", "a/__tests__/x.ts"])
	assert group.canonical == "b/__tests__/x.ts"
	assert group.score == 2


def test_dev_markers():
	assert is_dev_file("src/__tests__/a.ts")
	assert is_dev_file("src/stories/a.tsx")
	assert is_dev_file("src/a.stories.tsx")
	assert is_dev_file("src/a.test.ts")
	assert not is_dev_file("src/Button.tsx")
	assert is_dev_file("src/util.ts", markers=["util"])


def test_weights_are_configurable():
	group = score_duplicate("X", ["a.ts", "b.test.ts"], prod_weight=5, dev_weight=0)
	assert group.score == 5


def test_score_is_monotone_in_counts():
	base = score_duplicate("X", ["a.ts", "b.ts"]).score
	assert score_duplicate("X", ["a.ts", "b.ts", "c.ts"]).score >= base
	assert score_duplicate("X", ["a.ts", "b.ts", "c.test.ts"]).score >= base


def test_ranking_by_score_then_size():
	small = score_duplicate("Small", ["a.ts", "b.ts"])
	wide = score_duplicate("Wide", ["a.ts", "a.test.ts", "b.test.ts"])
	top = score_duplicate("Top", ["a.ts", "b.ts", "c.ts"])
	ranked = rank_duplicates([small, wide, top])
	assert [g.name for g in ranked] == ["Top", "Wide", "Small"]
	assert small.score == wide.score


def test_cascade_only_for_reexporting_targets():
	records = [
		FileRecord(
			path="a.ts",
			reexports=[ReexportEntry(source="./mid", kind=ReexportKind.NAMED, names=["y"], resolved="mid.ts")],
		),
		FileRecord(
			path="mid.ts",
			reexports=[ReexportEntry(source="./leaf", kind=ReexportKind.NAMED, names=["z"], resolved="leaf.ts")],
		),
		FileRecord(path="leaf.ts"),
		FileRecord(
			path="b.ts",
			reexports=[ReexportEntry(source="pkg", kind=ReexportKind.STAR)],
		),
	]
	cascades = find_cascades(records)
	assert [(c.from_file, c.to_file) for c in cascades] == [("a.ts", "mid.ts")]


def test_dynamic_import_flags():
	records = [
		FileRecord(path="a.ts", dynamic_imports=["./lazy", "./lazy", "./other"]),
		FileRecord(path="b.ts"),
		FileRecord(path="c.ts", dynamic_imports=[f"./m{i}" for i in range(6)]),
	]
	summaries = summarize_dynamic_imports(records)
	assert [s.file for s in summaries] == ["a.ts", "c.ts"]
	assert summaries[0].self_import is True
	assert summaries[0].many_sources is False
	assert summaries[1].self_import is False
	assert summaries[1].many_sources is True
