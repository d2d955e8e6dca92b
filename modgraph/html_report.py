from __future__ import annotations

import re
from typing import List, Optional, Sequence
from urllib.parse import quote

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup, escape

from .graph import build_graph
from .model import CommandGap, RootAnalysis
from .open_server import OpenServerHandle


CYTOSCAPE_URL = "https://unpkg.com/cytoscape@3.26.0/dist/cytoscape.min.js"

_env = Environment(
	loader=PackageLoader("modgraph", "templates"),
	autoescape=select_autoescape(["html"]),
	trim_blocks=True,
	lstrip_blocks=True,
)


def open_link(base_url: Optional[str], file: str, line: int) -> Markup:
	if base_url:
		href = f"{base_url}/open?f={quote(file, safe='')}&l={line}"
		return Markup('<a href="{}">{}:{}</a>').format(href, file, line)
	return escape(f"{file}:{line}")


def gap_entry(base_url: Optional[str], gap: CommandGap) -> Markup:
	links = Markup("; ").join(open_link(base_url, f, line) for f, line in gap.locations)
	return Markup("<code>{}</code> ({})").format(gap.name, links)


def graph_id(index: int, root: str) -> str:
	return f"graph-{index}-" + re.sub(r"[^A-Za-z0-9]", "_", root)


class ReportRenderer:
	"""Renders analyzed roots into a single self-contained HTML page.

	Links to the open server are only emitted when the handle carries a base
	URL at render time.
	"""

	def __init__(self, handle: Optional[OpenServerHandle] = None, limit: int = 8):
		self.handle = handle or OpenServerHandle()
		self.limit = limit

	def section(self, analysis: RootAnalysis, index: int = 0) -> dict:
		base_url = self.handle.base_url
		graph = build_graph(analysis)
		coverage = analysis.coverage
		return {
			"root": analysis.root,
			"files_analyzed": len(analysis.records),
			"duplicates": analysis.ranked_duplicates[: self.limit],
			"cascades": analysis.cascades,
			"dynamic": analysis.dynamic_imports[: self.limit],
			"missing": [gap_entry(base_url, g) for g in coverage.missing_handlers],
			"unused": [gap_entry(base_url, g) for g in coverage.unused_handlers],
			"has_commands": bool(coverage.call_count or coverage.handler_count),
			"graph_id": graph_id(index, analysis.root),
			"graph": {
				"nodes": [n.model_dump() for n in graph.nodes],
				"edges": [e.model_dump() for e in graph.edges],
			},
		}

	def render(self, analyses: Sequence[RootAnalysis]) -> str:
		template = _env.get_template("report.html")
		sections: List[dict] = [self.section(a, idx) for idx, a in enumerate(analyses)]
		return template.render(sections=sections, cytoscape_url=CYTOSCAPE_URL)

	def write(self, path: str, analyses: Sequence[RootAnalysis]) -> None:
		with open(path, "w", encoding="utf-8") as fh:
			fh.write(self.render(analyses))
