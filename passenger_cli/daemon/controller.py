"""Daemon controllers: probe and stop a process referenced by a PID file."""

import logging
import os
import signal
import time
from pathlib import Path

from ..errors import StopError, StopTimeout
from .pidfile import is_process_running, read_pid

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.1
KILL_GRACE = 2.0


class DaemonController:
    """Handle to a background daemon.

    Subclasses implement `is_running` and `stop`. `is_running` may raise
    OSError for environment-level faults. `stop` waits at most `timeout`
    seconds and raises StopError (or StopTimeout) when the daemon could not
    be stopped.
    """

    def __init__(
        self,
        identifier: str,
        start_command: str,
        ping_command: str,
        pid_file: Path,
        log_file: str,
        timeout: float,
    ):
        self.identifier = identifier
        self.start_command = start_command
        self.ping_command = ping_command
        self.pid_file = Path(pid_file)
        self.log_file = log_file
        self.timeout = timeout

    def is_running(self) -> bool:
        raise NotImplementedError

    def stop(self) -> None:
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}({self.identifier!r}, pid_file={str(self.pid_file)!r})"


class ProcessDaemonController(DaemonController):
    """Controls a real OS process through signals. Never touches the PID file."""

    def is_running(self) -> bool:
        pid = read_pid(self.pid_file)
        if pid is None:
            return False
        return is_process_running(pid)

    def stop(self) -> None:
        pid = read_pid(self.pid_file)
        if pid is None:
            raise StopError(f"Invalid PID file {self.pid_file}")

        logger.info(f"Sending SIGTERM to {self.identifier} (PID {pid})")
        if not self._signal(pid, signal.SIGTERM):
            return

        if self._wait_for_exit(pid, self.timeout):
            logger.info(f"{self.identifier} (PID {pid}) stopped")
            return

        logger.warning(f"{self.identifier} (PID {pid}) did not exit in {self.timeout}s, sending SIGKILL")
        if self._signal(pid, signal.SIGKILL):
            self._wait_for_exit(pid, KILL_GRACE)
        raise StopTimeout(f"Daemon '{self.identifier}' did not exit in time")

    def _signal(self, pid: int, signum: int) -> bool:
        """Send `signum`; return False if the process was already gone."""
        try:
            os.kill(pid, signum)
            return True
        except ProcessLookupError:
            logger.info(f"Process {pid} already exited")
            return False
        except OSError as e:
            raise StopError(f"Cannot send {signal.Signals(signum).name} to PID {pid}: {e}") from e

    def _wait_for_exit(self, pid: int, timeout: float) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if not is_process_running(pid):
                return True
            time.sleep(POLL_INTERVAL)
        return not is_process_running(pid)
