import asyncio
import logging
import sys
from pathlib import Path

import pytest
import uvicorn

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from pdfdrop import main  # noqa: E402


@pytest.fixture
def configured(tmp_path, monkeypatch):
    upload_dir = tmp_path / "uploads"
    monkeypatch.setattr(main.config, "upload_dir", str(upload_dir))
    monkeypatch.setattr(main.config, "port", 4321)
    monkeypatch.setattr(main.config, "host", "127.0.0.1")
    monkeypatch.setattr(main, "setup_logging", lambda level, log_file: None)
    return upload_dir


def test_main_prepares_directory_and_runs_server(configured, monkeypatch):
    started = []

    def fake_run(self, sockets=None):
        started.append((self.config.app, self.config.host, self.config.port, self.config.log_config))

    monkeypatch.setattr(main.ListeningServer, "run", fake_run)

    main.main()

    assert configured.is_dir()
    assert started == [(main.app, "127.0.0.1", 4321, None)]


def test_main_exits_when_server_fails(configured, monkeypatch, caplog):
    def boom(self, sockets=None):
        raise RuntimeError("address in use")

    monkeypatch.setattr(main.ListeningServer, "run", boom)

    with caplog.at_level(logging.ERROR), pytest.raises(SystemExit) as excinfo:
        main.main()

    assert excinfo.value.code == 1
    assert "address in use" in caplog.text
    assert "Server is running" not in caplog.text


def _fake_startup(bound: bool):
    async def startup(self, sockets=None):
        self.started = bound

    return startup


def test_running_message_logged_after_bind(configured, monkeypatch, caplog):
    monkeypatch.setattr(uvicorn.Server, "startup", _fake_startup(True))
    server = main.build_server()

    with caplog.at_level(logging.INFO):
        asyncio.run(server.startup())

    assert "Server is running on http://localhost:4321" in caplog.text


def test_running_message_skipped_when_startup_fails(configured, monkeypatch, caplog):
    monkeypatch.setattr(uvicorn.Server, "startup", _fake_startup(False))
    server = main.build_server()

    with caplog.at_level(logging.INFO):
        asyncio.run(server.startup())

    assert "Server is running" not in caplog.text


def test_prepare_upload_dir_keeps_existing_files(tmp_path):
    upload_dir = tmp_path / "uploads"
    upload_dir.mkdir()
    (upload_dir / "1-a.pdf").write_bytes(b"x")

    assert main.prepare_upload_dir(upload_dir) == upload_dir
    assert (upload_dir / "1-a.pdf").read_bytes() == b"x"
