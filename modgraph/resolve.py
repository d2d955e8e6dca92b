from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Sequence


logger = logging.getLogger(__name__)


def _to_root_relative(path: Path, root: Path) -> Optional[str]:
	try:
		canon = path.resolve(strict=True)
	except (OSError, RuntimeError):
		return None
	try:
		return canon.relative_to(root.resolve()).as_posix()
	except (OSError, RuntimeError, ValueError):
		return str(canon)


def resolve_specifier(
	importing_file: str | os.PathLike,
	root: str | os.PathLike,
	specifier: str,
	extensions: Sequence[str],
) -> Optional[str]:
	"""Resolve a relative import specifier to a root-relative file path.

	Package specifiers, directories and missing files all resolve to None:
	those are external dependencies or broken references, not errors.
	"""
	if not specifier.startswith("."):
		return None
	root_path = Path(root)
	candidate = Path(importing_file).parent / specifier
	if candidate.is_dir():
		return None
	if not candidate.suffix:
		for ext in extensions:
			with_ext = candidate.with_name(f"{candidate.name}.{ext.lstrip('.')}")
			if with_ext.is_file():
				return _to_root_relative(with_ext, root_path)
	if candidate.exists():
		return _to_root_relative(candidate, root_path)
	logger.debug("Unresolved specifier %r from %s", specifier, importing_file)
	return None


def python_module_to_specifier(module: str) -> Optional[str]:
	"""`.a.b` -> `./a/b`, `..a` -> `../a`; absolute modules have no specifier."""
	if not module.startswith("."):
		return None
	dots = len(module) - len(module.lstrip("."))
	remainder = module[dots:].replace(".", "/")
	prefix = "./" if dots == 1 else "../" * (dots - 1)
	return prefix + remainder


def resolve_python_module(
	module: str,
	importing_file: str | os.PathLike,
	root: str | os.PathLike,
	extensions: Sequence[str] = ("py",),
) -> Optional[str]:
	specifier = python_module_to_specifier(module)
	if specifier is None:
		return None
	return resolve_specifier(importing_file, root, specifier, extensions)
