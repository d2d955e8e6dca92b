from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from .model import CommandCoverage, CommandGap, FileRecord


def _locations(records: Sequence[FileRecord], handlers: bool) -> Dict[str, List[Tuple[str, int]]]:
	found: Dict[str, List[Tuple[str, int]]] = {}
	for record in records:
		refs = record.command_handlers if handlers else record.command_calls
		for ref in refs:
			found.setdefault(ref.name, []).append((record.path, ref.line))
	return found


def match_commands(records: Sequence[FileRecord]) -> CommandCoverage:
	"""Pair frontend command calls with backend handlers by literal name."""
	calls = _locations(records, handlers=False)
	handlers = _locations(records, handlers=True)
	missing = [CommandGap(name=name, locations=calls[name]) for name in sorted(calls) if name not in handlers]
	unused = [CommandGap(name=name, locations=handlers[name]) for name in sorted(handlers) if name not in calls]
	return CommandCoverage(
		missing_handlers=missing,
		unused_handlers=unused,
		call_count=len(calls),
		handler_count=len(handlers),
	)
