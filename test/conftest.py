import tempfile
from pathlib import Path

import pytest

from passenger_cli.daemon.controller import DaemonController
from passenger_cli.errors import StopError


class FakeDaemonController(DaemonController):
    """Simulates a daemon without touching real processes."""

    def __init__(self, *, running: bool = False, probe_error: OSError | None = None,
                 stop_error: StopError | None = None, **kwargs):
        super().__init__(**kwargs)
        self.running = running
        self.probe_error = probe_error
        self.stop_error = stop_error
        self.probe_calls = 0
        self.stop_calls = 0

    def is_running(self) -> bool:
        self.probe_calls += 1
        if self.probe_error is not None:
            raise self.probe_error
        return self.running

    def stop(self) -> None:
        self.stop_calls += 1
        if self.stop_error is not None:
            raise self.stop_error
        self.running = False


class FakeControllerFactory:
    def __init__(self):
        self.running = False
        self.probe_error = None
        self.stop_error = None
        self.created: list[FakeDaemonController] = []

    def __call__(self, **kwargs) -> FakeDaemonController:
        controller = FakeDaemonController(
            running=self.running,
            probe_error=self.probe_error,
            stop_error=self.stop_error,
            **kwargs,
        )
        self.created.append(controller)
        return controller


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def isolated_config(temp_dir, monkeypatch):
    cache_dir = temp_dir / "cache"
    config_dir = temp_dir / "config"
    cache_dir.mkdir()
    config_dir.mkdir()

    monkeypatch.setenv("XDG_CACHE_HOME", str(cache_dir))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_dir))

    return {"cache": cache_dir, "config": config_dir}


@pytest.fixture
def app_dir(temp_dir, monkeypatch):
    app = (temp_dir / "app").resolve()
    app.mkdir()
    monkeypatch.chdir(app)
    return app


@pytest.fixture
def controllers():
    return FakeControllerFactory()


@pytest.fixture
def write_pid_file():
    def write(path: Path, pid: int | str = 12345) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"{pid}\n")
        return path
    return write
