"""Module-graph analyzer for mixed-language source trees.

Modules:
- fs_scan.py: File gathering and language-family classification.
- patterns.py: Compiled regular expressions shared by the extractors.
- extract/: One extractor per language family (esm, css, python, rust).
- resolve.py: Relative specifier resolution against the filesystem.
- aggregate.py: Export index, duplicate ranking, cascades, dynamic imports.
- commands.py: Frontend call / backend handler coverage.
- pipeline.py: Per-root analysis pass.
- report.py, summarize.py, html_report.py, graph.py: Output surfaces.
- open_server.py: Loopback "open in editor" server for report links.
"""

__version__ = "0.3.0"

__all__ = [
	"fs_scan",
	"patterns",
	"extract",
	"resolve",
	"aggregate",
	"commands",
	"pipeline",
	"report",
	"summarize",
	"html_report",
	"graph",
	"open_server",
]
