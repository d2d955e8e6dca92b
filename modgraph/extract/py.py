from __future__ import annotations

import re
from typing import List, Sequence

from ..model import ExportSymbol, FileRecord, ImportEntry, ImportKind, ReexportEntry, ReexportKind
from ..patterns import PY_ALL, PY_CLASS, PY_DEF, PY_DYNAMIC_IMPORTS
from ..resolve import resolve_python_module


def _all_names(body: str) -> List[str]:
	names: List[str] = []
	for item in re.sub(r"#[^\n]*", "", body).split(","):
		name = item.strip().strip("'\"").strip()
		if name:
			names.append(name)
	return names


def extract_py(
	content: str,
	file_path: str,
	root_path: str,
	extensions: Sequence[str],
	relative: str,
) -> FileRecord:
	imports: List[ImportEntry] = []
	reexports: List[ReexportEntry] = []

	for line in content.splitlines():
		stripped = line.split("#", 1)[0].strip()
		if stripped.startswith("import "):
			for part in stripped[len("import "):].split(","):
				name = part.split(" as ", 1)[0].strip()
				if name:
					imports.append(ImportEntry(source=name, kind=ImportKind.STATIC))
		elif stripped.startswith("from ") and " import " in stripped:
			raw_module, names_raw = stripped[len("from "):].split(" import ", 1)
			raw_module = raw_module.strip()
			module = raw_module.rstrip(".")
			names_clean = names_raw.strip().strip("()").strip()
			resolved = resolve_python_module(raw_module, file_path, root_path, extensions)
			if module:
				imports.append(ImportEntry(source=module, kind=ImportKind.STATIC, resolved=resolved))
			if names_clean == "*":
				reexports.append(
					ReexportEntry(source=module or raw_module, kind=ReexportKind.STAR, resolved=resolved)
				)

	dynamic_imports: List[str] = []
	for pattern in PY_DYNAMIC_IMPORTS:
		dynamic_imports.extend(m.group(1) for m in pattern.finditer(content))

	exports: List[ExportSymbol] = []
	for m in PY_ALL.finditer(content):
		exports.extend(ExportSymbol(name=name, kind="__all__") for name in _all_names(m.group(1)))
	for m in PY_DEF.finditer(content):
		if not m.group(1).startswith("_"):
			exports.append(ExportSymbol(name=m.group(1), kind="def"))
	for m in PY_CLASS.finditer(content):
		if not m.group(1).startswith("_"):
			exports.append(ExportSymbol(name=m.group(1), kind="class"))

	return FileRecord(
		path=relative,
		loc=len(content.splitlines()),
		imports=imports,
		reexports=reexports,
		dynamic_imports=dynamic_imports,
		exports=exports,
	)
