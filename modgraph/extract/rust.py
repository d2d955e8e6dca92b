from __future__ import annotations

from typing import List, Sequence, Tuple

from ..model import (
	CommandRef,
	ExportSymbol,
	FileRecord,
	ImportEntry,
	ImportKind,
	ReexportEntry,
	ReexportKind,
)
from ..patterns import (
	RUST_COMMAND_HANDLER,
	RUST_PUB_CONSTS,
	RUST_PUB_ITEMS,
	RUST_PUB_USE,
	RUST_USE,
	offset_to_line,
)


def _last_segment(path: str) -> str:
	return path.rsplit("::", 1)[-1].strip()


def parse_brace_names(raw: str) -> List[str]:
	names: List[str] = []
	for item in raw.split(","):
		# nested groups flatten to their leaf paths
		item = " ".join(item.replace("{", "").replace("}", "").split())
		if " as " in item:
			name = item.split(" as ", 1)[1].strip()
		else:
			name = _last_segment(item)
		if name and name != "self":
			names.append(name)
	return names


def classify_pub_use(raw: str) -> Tuple[ReexportEntry, List[str]]:
	"""Turn the body of a `pub use ...;` into a re-export and its exported names."""
	if "{" in raw and "}" in raw:
		braces = raw.split("{", 1)[1].rsplit("}", 1)[0]
		names = parse_brace_names(braces)
		return ReexportEntry(source=raw, kind=ReexportKind.NAMED, names=names), names
	if raw.endswith("::*"):
		return ReexportEntry(source=raw, kind=ReexportKind.STAR), []
	if " as " in raw:
		path_part, alias = raw.split(" as ", 1)
		path_part, name = path_part.strip(), alias.strip()
	else:
		path_part, name = raw, _last_segment(raw)
	return ReexportEntry(source=path_part, kind=ReexportKind.NAMED, names=[name]), [name]


def extract_rust(
	content: str,
	file_path: str,
	root_path: str,
	extensions: Sequence[str],
	relative: str,
) -> FileRecord:
	imports: List[ImportEntry] = []
	for m in RUST_USE.finditer(content):
		source = m.group(1).strip()
		if source:
			imports.append(ImportEntry(source=source, kind=ImportKind.STATIC))

	reexports: List[ReexportEntry] = []
	exports: List[ExportSymbol] = []
	for m in RUST_PUB_USE.finditer(content):
		raw = " ".join(m.group(1).split())
		if not raw:
			continue
		entry, names = classify_pub_use(raw)
		reexports.append(entry)
		exports.extend(ExportSymbol(name=name, kind="reexport") for name in names)

	for pattern in RUST_PUB_ITEMS + RUST_PUB_CONSTS:
		exports.extend(ExportSymbol(name=m.group(1), kind="decl") for m in pattern.finditer(content))

	handlers = [
		CommandRef(name=m.group(2), line=offset_to_line(content, m.start(2)))
		for m in RUST_COMMAND_HANDLER.finditer(content)
	]

	return FileRecord(
		path=relative,
		loc=len(content.splitlines()),
		imports=imports,
		reexports=reexports,
		exports=exports,
		command_handlers=handlers,
	)
