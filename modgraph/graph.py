from __future__ import annotations

from typing import List, Set, Tuple

from .model import GraphData, GraphEdge, GraphNode, RootAnalysis


def build_graph(analysis: RootAnalysis) -> GraphData:
	"""Files as nodes; resolved imports and re-exports inside the root as edges."""
	known = {r.path for r in analysis.records}
	nodes = [GraphNode(id=r.path, label=f"{r.path} ({r.loc})", loc=r.loc) for r in analysis.records]
	edges: List[GraphEdge] = []
	seen: Set[Tuple[str, str, str]] = set()

	def add(source: str, target: str, kind: str) -> None:
		key = (source, target, kind)
		if target in known and key not in seen:
			seen.add(key)
			edges.append(GraphEdge(source=source, target=target, kind=kind))

	for record in analysis.records:
		for imp in record.imports:
			if imp.resolved:
				add(record.path, imp.resolved, "import")
		for re_entry in record.reexports:
			if re_entry.resolved:
				add(record.path, re_entry.resolved, "reexport")
	return GraphData(nodes=nodes, edges=edges)
