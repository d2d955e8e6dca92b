from __future__ import annotations

import logging
import shlex
import socket
import subprocess
import sys
import threading
import time
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse


logger = logging.getLogger(__name__)

Launcher = Callable[[Path, int, Optional[str]], bool]


class OpenServerHandle:
	"""Holds the open server's base URL. The first published value sticks."""

	def __init__(self) -> None:
		self._base_url: Optional[str] = None

	@property
	def base_url(self) -> Optional[str]:
		return self._base_url

	def publish(self, base_url: str) -> bool:
		if self._base_url is not None:
			return False
		self._base_url = base_url
		return True


def platform_open_command(target: str) -> List[str]:
	if sys.platform == "darwin":
		return ["open", target]
	if sys.platform.startswith("win"):
		return ["cmd", "/C", "start", "", target]
	return ["xdg-open", target]


def editor_commands(full_path: Path, line: int, editor_cmd: Optional[str] = None) -> List[List[str]]:
	"""Candidate invocations, tried in order until one exits with status 0."""
	file_arg = str(full_path)
	line = max(line, 1)
	commands: List[List[str]] = []
	if editor_cmd:
		argv = [
			token.replace("{file}", file_arg).replace("{line}", str(line))
			for token in shlex.split(editor_cmd)
		]
		if argv:
			commands.append(argv)
	else:
		commands.append(["code", "-g", f"{file_arg}:{line}"])
	commands.append(platform_open_command(file_arg))
	return commands


def _run(argv: List[str]) -> bool:
	try:
		return subprocess.run(argv, check=False).returncode == 0
	except OSError as e:
		logger.debug("Could not run %s: %s", argv[0], e)
		return False


def open_in_editor(full_path: Path, line: int, editor_cmd: Optional[str] = None) -> bool:
	for argv in editor_commands(full_path, line, editor_cmd):
		if _run(argv):
			return True
	logger.warning("Could not open %s:%d in any editor", full_path, line)
	return False


def open_in_browser(path: str) -> bool:
	try:
		target = str(Path(path).resolve(strict=True))
	except (OSError, RuntimeError):
		logger.warning("Could not resolve report path for auto-open: %s", path)
		return False
	if any(ord(ch) < 0x20 for ch in target):
		logger.warning("Skipping auto-open for suspicious path: %r", target)
		return False
	try:
		subprocess.Popen(platform_open_command(target))
	except OSError as e:
		logger.warning("Could not open report automatically: %s (%s)", target, e)
		return False
	return True


def resolve_target(spec: str, roots: Sequence[Path]) -> Optional[Path]:
	"""Map a report link target onto a real file inside one of the roots.

	Roots must already be canonical. Anything that escapes every root, or
	does not exist, is rejected.
	"""
	try:
		candidate = Path(spec)
		if candidate.is_absolute():
			canon = candidate.resolve(strict=True)
			if any(canon.is_relative_to(root) for root in roots):
				return canon
			return None
		for root in roots:
			try:
				canon = (root / candidate).resolve(strict=True)
			except (OSError, RuntimeError):
				continue
			if canon.is_relative_to(root):
				return canon
	except (OSError, RuntimeError, ValueError):
		return None
	return None


def _parse_line(raw: Optional[str]) -> int:
	try:
		return max(int(raw or 1), 1)
	except ValueError:
		return 1


def create_app(
	roots: Sequence[str],
	editor_cmd: Optional[str] = None,
	launcher: Launcher = open_in_editor,
) -> FastAPI:
	canonical_roots = [Path(r).resolve() for r in roots]
	app = FastAPI(title="modgraph open server")

	# async handler without awaits: requests run on the event loop one at a time
	@app.get("/open", response_class=PlainTextResponse)
	async def open_file(f: Optional[str] = None, l: Optional[str] = None) -> PlainTextResponse:
		if not f:
			logger.warning("Open request without a file parameter")
			return PlainTextResponse("missing f", status_code=400)
		target = resolve_target(f, canonical_roots)
		if target is None:
			logger.warning("Rejected open request for %r: not inside any analyzed root", f)
			return PlainTextResponse("not found", status_code=404)
		line = _parse_line(l)
		if launcher(target, line, editor_cmd):
			return PlainTextResponse("opened")
		return PlainTextResponse("open failed", status_code=500)

	return app


class OpenServer:
	"""Loopback server on an OS-assigned port, running on a daemon thread."""

	def __init__(
		self,
		roots: Sequence[str],
		editor_cmd: Optional[str] = None,
		handle: Optional[OpenServerHandle] = None,
		launcher: Launcher = open_in_editor,
	):
		self.app = create_app(roots, editor_cmd, launcher)
		self.handle = handle or OpenServerHandle()
		self._server: Optional[uvicorn.Server] = None
		self._thread: Optional[threading.Thread] = None

	def start(self, timeout: float = 5.0) -> str:
		sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
		sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
		sock.bind(("127.0.0.1", 0))
		base_url = f"http://127.0.0.1:{sock.getsockname()[1]}"

		config = uvicorn.Config(self.app, log_level="warning", access_log=False)
		self._server = uvicorn.Server(config)
		self._thread = threading.Thread(
			target=self._server.run,
			kwargs={"sockets": [sock]},
			name="modgraph-open-server",
			daemon=True,
		)
		self._thread.start()

		deadline = time.monotonic() + timeout
		while not self._server.started and self._thread.is_alive() and time.monotonic() < deadline:
			time.sleep(0.01)
		self.handle.publish(base_url)
		logger.info("Open server listening on %s", base_url)
		return base_url

	def wait(self) -> None:
		if self._thread is not None:
			self._thread.join()

	def stop(self) -> None:
		if self._server is not None:
			self._server.should_exit = True
		if self._thread is not None:
			self._thread.join(timeout=5)
