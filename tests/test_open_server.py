import os
import sys

import httpx
import pytest
from fastapi.testclient import TestClient

from modgraph import open_server
from modgraph.open_server import (
	OpenServer,
	OpenServerHandle,
	create_app,
	editor_commands,
	open_in_editor,
	resolve_target,
)


class FakeLauncher:
	def __init__(self, result=True):
		self.result = result
		self.calls = []

	def __call__(self, path, line, editor_cmd):
		self.calls.append((path, line, editor_cmd))
		return self.result


@pytest.fixture
def root(tmp_path):
	root = tmp_path / "root"
	(root / "src").mkdir(parents=True)
	(root / "src" / "app.ts").write_text("export const a = 1;\n")
	(tmp_path / "secret.txt").write_text("nope")
	return root


def _client(root, launcher, editor_cmd=None):
	return TestClient(create_app([str(root)], editor_cmd, launcher))


def test_missing_file_parameter(root):
	launcher = FakeLauncher()
	response = _client(root, launcher).get("/open")
	assert response.status_code == 400
	assert launcher.calls == []


def test_relative_path_inside_root_opens(root):
	launcher = FakeLauncher()
	response = _client(root, launcher, "vim +{line} {file}").get("/open", params={"f": "src/app.ts", "l": "12"})
	assert response.status_code == 200
	assert response.text == "opened"
	assert launcher.calls == [((root / "src" / "app.ts").resolve(), 12, "vim +{line} {file}")]


def test_bad_line_defaults_to_one(root):
	launcher = FakeLauncher()
	_client(root, launcher).get("/open", params={"f": "src/app.ts", "l": "abc"})
	_client(root, launcher).get("/open", params={"f": "src/app.ts", "l": "-4"})
	assert [c[1] for c in launcher.calls] == [1, 1]


def test_traversal_outside_root_is_rejected(root):
	launcher = FakeLauncher()
	client = _client(root, launcher)
	assert client.get("/open", params={"f": "../secret.txt"}).status_code == 404
	assert client.get("/open", params={"f": str(root.parent / "secret.txt")}).status_code == 404
	assert client.get("/open", params={"f": "src/missing.ts"}).status_code == 404
	assert launcher.calls == []


def test_absolute_path_inside_root_opens(root):
	launcher = FakeLauncher()
	response = _client(root, launcher).get("/open", params={"f": str(root / "src" / "app.ts")})
	assert response.status_code == 200
	assert len(launcher.calls) == 1


@pytest.mark.skipif(sys.platform.startswith("win"), reason="symlinks need privileges on Windows")
def test_symlink_escaping_root_is_rejected(root):
	os.symlink(root.parent / "secret.txt", root / "src" / "link.txt")
	launcher = FakeLauncher()
	assert _client(root, launcher).get("/open", params={"f": "src/link.txt"}).status_code == 404
	assert launcher.calls == []


def test_failed_launch_is_500(root):
	response = _client(root, FakeLauncher(result=False)).get("/open", params={"f": "src/app.ts"})
	assert response.status_code == 500


def test_unknown_route_is_404(root):
	assert _client(root, FakeLauncher()).get("/elsewhere").status_code == 404


def test_resolve_target_rejects_nul(root):
	assert resolve_target("src/app.ts\x00", [root.resolve()]) is None


def test_editor_command_template(tmp_path):
	target = tmp_path / "my file.ts"
	commands = editor_commands(target, 7, "subl {file}:{line}")
	assert commands[0] == ["subl", f"{target}:7"]
	assert len(commands) == 2


def test_default_editor_then_platform_fallback(tmp_path):
	commands = editor_commands(tmp_path / "a.ts", 0, None)
	assert commands[0] == ["code", "-g", f"{tmp_path / 'a.ts'}:1"]
	assert commands[1][-1] == str(tmp_path / "a.ts")


def test_open_in_editor_tries_strategies_in_order(monkeypatch, tmp_path):
	seen = []

	def fake_run(argv):
		seen.append(argv[0])
		return len(seen) == 2

	monkeypatch.setattr(open_server, "_run", fake_run)
	assert open_in_editor(tmp_path / "a.ts", 3, None) is True
	assert seen[0] == "code"
	assert len(seen) == 2


def test_open_in_editor_reports_failure(monkeypatch, tmp_path):
	monkeypatch.setattr(open_server, "_run", lambda argv: False)
	assert open_in_editor(tmp_path / "a.ts", 3, "myeditor {file}") is False


def test_handle_is_write_once():
	handle = OpenServerHandle()
	assert handle.base_url is None
	assert handle.publish("http://127.0.0.1:1") is True
	assert handle.publish("http://127.0.0.1:2") is False
	assert handle.base_url == "http://127.0.0.1:1"


def test_server_binds_loopback_and_publishes(root):
	handle = OpenServerHandle()
	launcher = FakeLauncher()
	server = OpenServer([str(root)], handle=handle, launcher=launcher)
	base_url = server.start()
	try:
		assert base_url.startswith("http://127.0.0.1:")
		assert handle.base_url == base_url
		assert httpx.get(f"{base_url}/open", trust_env=False).status_code == 400
		ok = httpx.get(f"{base_url}/open", params={"f": "src/app.ts", "l": "2"}, trust_env=False)
		assert ok.status_code == 200
		assert launcher.calls[0][1] == 2
	finally:
		server.stop()
