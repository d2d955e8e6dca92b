from __future__ import annotations

from typing import List

from .model import CommandGap, RootAnalysis


def _format_gap(gap: CommandGap) -> str:
	locations = ", ".join(f"{f}:{line}" for f, line in gap.locations)
	return f"  - {gap.name} ({locations})"


def summarize_root(analysis: RootAnalysis, limit: int = 8) -> str:
	parts: List[str] = []
	parts.append(f"Import/export analysis for {analysis.root.rstrip('/')}/")
	parts.append(f"  Files analyzed: {len(analysis.records)}")
	parts.append(f"  Duplicate exports: {len(analysis.duplicates)}")
	parts.append(f"  Files with re-exports: {len(analysis.reexport_files)}")
	parts.append(f"  Dynamic imports: {len(analysis.dynamic_imports)}")

	if analysis.ranked_duplicates:
		parts.append(f"\nTop duplicate exports (showing up to {limit}):")
		for g in analysis.ranked_duplicates[:limit]:
			parts.append(
				f"  - {g.name} (score {g.score}, {len(g.files)} files: {g.prod_count} prod, {g.dev_count} dev) "
				f"canonical: {g.canonical} | refs: {', '.join(g.refactor_targets)}"
			)

	if analysis.cascades:
		parts.append("\nRe-export cascades:")
		for c in analysis.cascades:
			parts.append(f"  - {c.from_file} -> {c.to_file}")

	if analysis.dynamic_imports:
		parts.append(f"\nDynamic imports (showing up to {limit}):")
		by_count = sorted(analysis.dynamic_imports, key=lambda d: -len(d.sources))
		for d in by_count[:limit]:
			marker = "  [many sources]" if d.many_sources else ""
			parts.append(f"  - {d.file}: {', '.join(d.sources)}{marker}")

	coverage = analysis.coverage
	if coverage.missing_handlers:
		parts.append("\nCommands called without a handler:")
		parts.extend(_format_gap(g) for g in coverage.missing_handlers)
	if coverage.unused_handlers:
		parts.append("\nHandlers never called:")
		parts.extend(_format_gap(g) for g in coverage.unused_handlers)

	parts.append("\nTip: rerun with --json for machine-readable output.")
	return "\n".join(parts)
