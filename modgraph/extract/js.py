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
	JS_COMMAND_CALLS,
	JS_DYNAMIC_IMPORT,
	JS_EXPORT_BRACE,
	JS_EXPORT_DECL,
	JS_EXPORT_DEFAULT,
	JS_IMPORT,
	JS_REEXPORT_NAMED,
	JS_REEXPORT_STAR,
	JS_SIDE_EFFECT_IMPORT,
	brace_list_to_names,
	offset_to_line,
)
from ..resolve import resolve_specifier


def extract_command_calls(content: str) -> List[CommandRef]:
	found: List[Tuple[int, str]] = []
	for pattern in JS_COMMAND_CALLS:
		for m in pattern.finditer(content):
			found.append((m.start(1), m.group(1)))
	found.sort()
	return [CommandRef(name=name, line=offset_to_line(content, offset)) for offset, name in found]


def extract_js(
	content: str,
	file_path: str,
	root_path: str,
	extensions: Sequence[str],
	relative: str,
) -> FileRecord:
	imports: List[ImportEntry] = []
	for m in JS_IMPORT.finditer(content):
		source = m.group(2)
		imports.append(
			ImportEntry(
				source=source,
				kind=ImportKind.STATIC,
				resolved=resolve_specifier(file_path, root_path, source, extensions),
			)
		)
	for m in JS_SIDE_EFFECT_IMPORT.finditer(content):
		source = m.group(1)
		imports.append(
			ImportEntry(
				source=source,
				kind=ImportKind.SIDE_EFFECT,
				resolved=resolve_specifier(file_path, root_path, source, extensions),
			)
		)

	reexports: List[ReexportEntry] = []
	for m in JS_REEXPORT_STAR.finditer(content):
		source = m.group(1)
		reexports.append(
			ReexportEntry(
				source=source,
				kind=ReexportKind.STAR,
				resolved=resolve_specifier(file_path, root_path, source, extensions),
			)
		)
	for m in JS_REEXPORT_NAMED.finditer(content):
		source = m.group(2)
		reexports.append(
			ReexportEntry(
				source=source,
				kind=ReexportKind.NAMED,
				names=brace_list_to_names(m.group(1)),
				resolved=resolve_specifier(file_path, root_path, source, extensions),
			)
		)

	dynamic_imports = [m.group(1) for m in JS_DYNAMIC_IMPORT.finditer(content)]

	exports: List[ExportSymbol] = []
	for m in JS_EXPORT_DECL.finditer(content):
		exports.append(ExportSymbol(name=m.group(1), kind="decl"))
	for m in JS_EXPORT_DEFAULT.finditer(content):
		exports.append(ExportSymbol(name=m.group(1) or "default", kind="default"))
	for m in JS_EXPORT_BRACE.finditer(content):
		for name in brace_list_to_names(m.group(1)):
			exports.append(ExportSymbol(name=name, kind="named"))
	for re_entry in reexports:
		for name in re_entry.names:
			exports.append(ExportSymbol(name=name, kind="reexport"))

	return FileRecord(
		path=relative,
		loc=len(content.splitlines()),
		imports=imports,
		reexports=reexports,
		dynamic_imports=dynamic_imports,
		exports=exports,
		command_calls=extract_command_calls(content),
	)
