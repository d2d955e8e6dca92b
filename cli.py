from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Dict, List

from modgraph import __version__
from modgraph.fs_scan import scan_repository
from modgraph.html_report import ReportRenderer
from modgraph.model import ModgraphError, Options, OutputMode, RootAnalysis
from modgraph.open_server import OpenServer, OpenServerHandle, open_in_browser
from modgraph.pipeline import analyze_root
from modgraph.report import build_payload, dumps_combined, dumps_line
from modgraph.summarize import summarize_root


logger = logging.getLogger("modgraph")


def _positive_int(raw: str) -> int:
	try:
		value = int(raw)
	except ValueError:
		raise argparse.ArgumentTypeError("expects a positive integer")
	if value < 1:
		raise argparse.ArgumentTypeError("expects a positive integer")
	return value


def options_from_args(args: argparse.Namespace) -> Options:
	output = OutputMode.HUMAN
	if args.jsonl:
		output = OutputMode.JSONL
	elif args.json:
		output = OutputMode.JSON
	values: Dict[str, object] = {
		"ignore": args.ignore,
		"output": output,
		"analyze_limit": args.limit,
		"report_path": args.html_report,
		"editor_cmd": args.editor_cmd,
		"serve": args.serve,
		"open_report": args.open,
	}
	if args.ext:
		values["extensions"] = args.ext
	return Options(**values)


def run_analysis(roots: List[str], options: Options) -> List[RootAnalysis]:
	analyses: List[RootAnalysis] = []
	payloads = []
	for idx, root in enumerate(roots):
		files = scan_repository(root, options)
		analysis = analyze_root(root, files, options)
		analyses.append(analysis)
		if options.output is OutputMode.JSONL:
			print(dumps_line(build_payload(analysis)), flush=True)
		elif options.output is OutputMode.JSON:
			payloads.append(build_payload(analysis))
		else:
			if idx > 0:
				print()
			print(summarize_root(analysis, options.analyze_limit))
	if options.output is OutputMode.JSON:
		print(dumps_combined(payloads))
	return analyses


def cmd_analyze(args: argparse.Namespace) -> int:
	roots = [os.path.abspath(p) for p in args.paths] or [os.path.abspath(".")]
	for root in roots:
		if not os.path.isdir(root):
			logger.error("Not a directory: %s", root)
			return 2
	options = options_from_args(args)

	handle = OpenServerHandle()
	server = None
	if options.report_path and options.serve:
		server = OpenServer(roots, options.editor_cmd, handle)
		server.start()

	try:
		analyses = run_analysis(roots, options)
	except ModgraphError as e:
		logger.error("%s", e)
		return 1

	if options.report_path:
		ReportRenderer(handle, options.analyze_limit).write(options.report_path, analyses)
		logger.info("HTML report written to %s", options.report_path)
		if options.open_report:
			open_in_browser(options.report_path)
		if server is not None:
			print(f"Serving editor links on {handle.base_url} (Ctrl+C to stop)", file=sys.stderr)
			try:
				server.wait()
			except KeyboardInterrupt:
				server.stop()
	return 0


def cmd_serve(args: argparse.Namespace) -> int:
	roots = [os.path.abspath(p) for p in args.paths] or [os.path.abspath(".")]
	server = OpenServer(roots, args.editor_cmd)
	base_url = server.start()
	print(base_url, flush=True)
	try:
		server.wait()
	except KeyboardInterrupt:
		server.stop()
	return 0


def main(argv: List[str] | None = None) -> int:
	parser = argparse.ArgumentParser(prog="modgraph")
	parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
	sub = parser.add_subparsers(dest="cmd", required=True)

	editor_default = os.environ.get("MODGRAPH_EDITOR")

	pa = sub.add_parser("analyze", help="Analyze imports, exports and commands under one or more roots")
	pa.add_argument("paths", nargs="*", help="Root directories (default: current directory)")
	pa.add_argument("--ext", help="Comma-separated extension allow-list, e.g. ts,tsx,py")
	pa.add_argument("-I", "--ignore", action="append", default=[], help="Path or name to skip (repeatable)")
	out = pa.add_mutually_exclusive_group()
	out.add_argument("--json", action="store_true", help="Print one JSON payload")
	out.add_argument("--jsonl", action="store_true", help="Print one JSON line per root")
	pa.add_argument("--limit", type=_positive_int, default=8, help="How many ranked items to show")
	pa.add_argument("--html-report", "--report", dest="html_report", help="Write an HTML report to this path")
	pa.add_argument("--editor-cmd", default=editor_default, help="Editor template with {file} and {line}")
	pa.add_argument("--serve", action="store_true", help="Keep the open-in-editor server running for report links")
	pa.add_argument("--open", action="store_true", help="Open the HTML report when done")
	pa.set_defaults(func=cmd_analyze)

	ps = sub.add_parser("serve", help="Run only the open-in-editor server")
	ps.add_argument("paths", nargs="*", help="Roots that links may point into")
	ps.add_argument("--editor-cmd", default=editor_default)
	ps.set_defaults(func=cmd_serve)

	args = parser.parse_args(argv)
	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.INFO,
		format="[%(name)s][%(levelname)s] %(message)s",
		stream=sys.stderr,
	)
	return args.func(args)


if __name__ == "__main__":
	sys.exit(main())
