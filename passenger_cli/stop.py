"""Stop a running Standalone instance identified by a PID file."""

import logging
import os
from typing import Callable, Literal

from pydantic import BaseModel

from .daemon.controller import DaemonController
from .daemon.pidfile import find_pid_file
from .errors import PidFileNotFound, StopError
from .utils.config import PROGRAM_NAME, StopOptions

logger = logging.getLogger(__name__)

ControllerFactory = Callable[..., DaemonController]

# Probe faults that count as "the daemon is not running", most specific first.
PROBE_FAULTS: dict[type[OSError], str] = {
    PermissionError: "permission denied",
    FileNotFoundError: "PID file disappeared",
    ProcessLookupError: "process vanished",
    IsADirectoryError: "PID file is a directory",
    OSError: "system error",
}


class StopResult(BaseModel):
    outcome: Literal["stopped", "not_found", "not_running", "ignored", "failed"]
    exit_code: int
    message: str | None = None


def pid_file_not_found_message(options: StopOptions) -> str:
    if options.pid_file is not None:
        return (
            f"*** ERROR: {PROGRAM_NAME} Standalone is not running on PID file {options.pid_file}\n"
            f"The PID file does not exist or the process it names has exited."
        )
    searched = ", ".join(options.search_dirs)
    return (
        f"*** ERROR: Cannot find the PID file for port {options.port} "
        f"(looked for passenger.{options.port}.pid in: {searched})\n"
        f"Is {PROGRAM_NAME} Standalone running on port {options.port}? "
        f"If it is, specify its PID file with --pid-file."
    )


def classify_probe_fault(error: OSError) -> str:
    for fault_type, reason in PROBE_FAULTS.items():
        if isinstance(error, fault_type):
            return reason
    return PROBE_FAULTS[OSError]


def probe_liveness(controller: DaemonController) -> bool:
    """Return whether the daemon runs, treating PROBE_FAULTS as not running."""
    try:
        return controller.is_running()
    except tuple(PROBE_FAULTS) as e:
        reason = classify_probe_fault(e)
        logger.warning(f"Cannot probe {controller.identifier} ({reason}): {e}")
        return False


def create_controller(options: StopOptions, factory: ControllerFactory) -> DaemonController:
    return factory(
        identifier=options.identifier,
        start_command="true",
        ping_command="true",
        pid_file=options.pid_file,
        log_file=os.devnull,
        timeout=options.timeout,
    )


def _not_running(options: StopOptions, outcome: str) -> StopResult:
    if options.ignore_pid_not_found:
        return StopResult(outcome="ignored", exit_code=0)
    return StopResult(outcome=outcome, exit_code=1, message=pid_file_not_found_message(options))


def run_stop(options: StopOptions, factory: ControllerFactory) -> StopResult:
    """Locate, probe and stop the daemon described by `options`.

    A missing PID file and a daemon that is not running produce the same
    result, so stopping twice behaves like stopping once.
    """
    try:
        resolved = find_pid_file(options)
    except PidFileNotFound as e:
        logger.info(str(e))
        return _not_running(options, "not_found")

    controller = create_controller(resolved, factory)
    if not probe_liveness(controller):
        logger.info(f"{resolved.identifier} is not running (PID file {resolved.pid_file})")
        return _not_running(options, "not_running")

    try:
        controller.stop()
    except StopError as e:
        logger.error(f"Failed to stop {resolved.identifier}: {e}")
        return StopResult(outcome="failed", exit_code=1, message=f"*** ERROR: {e}")

    return StopResult(outcome="stopped", exit_code=0)
