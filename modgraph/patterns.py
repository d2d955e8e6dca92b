"""Regular expressions for every construct the extractors recognise.

None of these parse the languages they target. They match the common
spellings of each construct and silently ignore everything else.
"""

from __future__ import annotations

import re
from typing import List


# ES modules (js, jsx, ts, tsx, mjs, cjs)

JS_IMPORT = re.compile(r"""^\s*import\s+([^;]+?)\s+from\s+["']([^"']+)["']""", re.MULTILINE)
JS_SIDE_EFFECT_IMPORT = re.compile(r"""^\s*import\s+["']([^"']+)["']""", re.MULTILINE)
JS_REEXPORT_STAR = re.compile(r"""^\s*export\s+\*\s+from\s+["']([^"']+)["']""", re.MULTILINE)
JS_REEXPORT_NAMED = re.compile(
	r"""^\s*export\s+\{([^}]+)\}\s+from\s+["']([^"']+)["']""", re.MULTILINE
)
JS_DYNAMIC_IMPORT = re.compile(r"""import\s*\(\s*["']([^"']+)["']\s*\)""")
JS_EXPORT_DECL = re.compile(
	r"^\s*export\s+(?:async\s+)?(?:function|const|let|var|class|interface|type|enum)\s+([A-Za-z0-9_.$]+)",
	re.MULTILINE,
)
JS_EXPORT_DEFAULT = re.compile(
	r"^\s*export\s+default(?:\s+(?:async\s+)?(?:function|class)\s+([A-Za-z0-9_.$]+))?",
	re.MULTILINE,
)
# Local brace exports only; a trailing `from` clause makes it a re-export.
JS_EXPORT_BRACE = re.compile(r"""^\s*export\s+\{([^}]+)\}(?!\s*from\s*["'])\s*;?""", re.MULTILINE)

# Cross-boundary invocation helpers: name, optional generic, then a string literal.
_GENERIC = r"\s*(?:<[^)]*>)?\(\s*[\"']([^\"']+)[\"']"
JS_COMMAND_CALLS: List[re.Pattern] = [
	re.compile(r"safeInvoke" + _GENERIC),
	re.compile(r"invokeSnake" + _GENERIC),
	re.compile(r"invokeAudio(?:Camel)?" + _GENERIC),
	# bare invoke(), not obj.invoke()
	re.compile(r"(?:^|[^A-Za-z0-9_.])invoke" + _GENERIC, re.MULTILINE),
]


# Stylesheets

CSS_IMPORT = re.compile(r"""@import\s+(?:url\()?['"]?([^"'()\s;]+)['"]?\)?""")


# Python

PY_DYNAMIC_IMPORTS: List[re.Pattern] = [
	re.compile(r"""importlib\.import_module\(\s*["']([^"']+)["']"""),
	re.compile(r"""__import__\(\s*["']([^"']+)["']"""),
]
PY_ALL = re.compile(r"__all__\s*=\s*\[([^\]]*)\]", re.DOTALL)
PY_DEF = re.compile(r"^(?:async\s+)?def\s+([A-Za-z_][A-Za-z0-9_]*)", re.MULTILINE)
PY_CLASS = re.compile(r"^class\s+([A-Za-z_][A-Za-z0-9_]*)", re.MULTILINE)


# Rust

_RUST_VIS = r"^\s*pub(?:\s*\([^)]*\))?\s+"

RUST_USE = re.compile(r"^\s*(?:pub(?:\s*\([^)]*\))?\s+)?use\s+([^;]+);", re.MULTILINE)
RUST_PUB_USE = re.compile(_RUST_VIS + r"use\s+([^;]+);", re.MULTILINE)
RUST_PUB_FN = re.compile(
	_RUST_VIS + r"""(?:const\s+)?(?:async\s+)?(?:unsafe\s+)?(?:extern\s+(?:"[^"]*"\s+)?)?fn\s+([A-Za-z0-9_]+)""",
	re.MULTILINE,
)
RUST_PUB_ITEMS: List[re.Pattern] = [RUST_PUB_FN] + [
	re.compile(_RUST_VIS + kind + r"\s+([A-Za-z0-9_]+)", re.MULTILINE)
	for kind in ("struct", "enum", "trait", "type", "union", "mod")
]
RUST_PUB_CONSTS: List[re.Pattern] = [
	re.compile(_RUST_VIS + r"const\s+(?!fn\b|unsafe\b|async\b|extern\b)([A-Za-z0-9_]+)", re.MULTILINE),
	re.compile(_RUST_VIS + r"static\s+(?:mut\s+)?([A-Za-z0-9_]+)", re.MULTILINE),
]
RUST_COMMAND_HANDLER = re.compile(
	r"#\s*\[\s*tauri::command([^\]]*)\]\s*(?:pub(?:\s*\([^)]*\))?\s+)?(?:async\s+)?fn\s+([A-Za-z0-9_]+)"
)


def offset_to_line(content: str, offset: int) -> int:
	return content.count("\n", 0, offset) + 1


def brace_list_to_names(raw: str) -> List[str]:
	"""`a, b as c` -> ["a", "c"]; the alias wins."""
	names: List[str] = []
	for item in raw.split(","):
		item = item.strip()
		if not item:
			continue
		if " as " in item:
			item = item.split(" as ", 1)[1].strip()
		elif item.startswith("type "):
			item = item[len("type "):].strip()
		if item:
			names.append(item)
	return names
