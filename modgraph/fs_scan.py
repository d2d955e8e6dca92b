from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .model import Options


class Family(str, Enum):
	ESM = "esm"
	CSS = "css"
	PYTHON = "python"
	RUST = "rust"


EXTENSION_FAMILY: Dict[str, Family] = {
	"ts": Family.ESM,
	"tsx": Family.ESM,
	"js": Family.ESM,
	"jsx": Family.ESM,
	"mjs": Family.ESM,
	"cjs": Family.ESM,
	"css": Family.CSS,
	"py": Family.PYTHON,
	"rs": Family.RUST,
}

SKIP_DIRS = {".git", "node_modules", "dist", "build", "target", "__pycache__", ".venv", "venv"}


def extension_of(filename: str) -> str:
	_, ext = os.path.splitext(filename)
	return ext.lstrip(".").lower()


def detect_family(filename: str) -> Family:
	# anything else the caller allowed is treated as an ES-module script
	return EXTENSION_FAMILY.get(extension_of(filename), Family.ESM)


def to_relative(root: str, file_path: str) -> str:
	try:
		return Path(file_path).resolve().relative_to(Path(root).resolve()).as_posix()
	except (OSError, ValueError):
		return Path(os.path.relpath(file_path, root)).as_posix()


def is_ignored(root: str, path: str, ignore: Sequence[str]) -> bool:
	"""Ignore entries match a bare name, a root-relative path or an absolute path."""
	name = os.path.basename(path)
	rel = Path(os.path.relpath(path, root)).as_posix()
	for pattern in ignore:
		pattern = pattern.rstrip("/\\")
		if os.path.isabs(pattern):
			if os.path.abspath(path) == os.path.abspath(pattern):
				return True
		elif pattern in (name, rel):
			return True
	return False


def scan_repository(root: str, options: Optional[Options] = None) -> List[str]:
	"""Return candidate files under root in a stable, sorted walk order."""
	options = options or Options()
	allowed = set(options.extensions)
	ignore = [Path(p).as_posix() if not os.path.isabs(p) else p for p in options.ignore]
	files: List[str] = []
	for dirpath, dirnames, filenames in os.walk(root):
		dirnames[:] = sorted(
			d
			for d in dirnames
			if d not in SKIP_DIRS and not d.startswith(".") and not is_ignored(root, os.path.join(dirpath, d), ignore)
		)
		for filename in sorted(filenames):
			path = os.path.join(dirpath, filename)
			if filename.startswith(".") or is_ignored(root, path, ignore):
				continue
			if extension_of(filename) in allowed:
				files.append(path)
	return files
