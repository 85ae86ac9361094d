import logging
import os
from pathlib import Path

from ..errors import PidFileNotFound
from ..utils.config import StopOptions

logger = logging.getLogger(__name__)

# Largest value a pid_t can hold; kill(2) rejects anything beyond it
PID_MAX = 2**31 - 1


def absolute_path_no_resolve(path: str | Path) -> Path:
    """Make `path` absolute against the cwd without following symlinks."""
    return Path(os.path.abspath(path))


def pid_file_candidate(directory: str, port: int) -> Path:
    return absolute_path_no_resolve(f"{directory}/passenger.{port}.pid")


def find_pid_file(options: StopOptions) -> StopOptions:
    """Return `options` with `pid_file` resolved.

    An explicit PID file is taken as-is, without checking that it exists.
    Otherwise the search directories are tried in order and the first
    existing candidate wins.

    Raises:
        PidFileNotFound if no candidate exists
    """
    if options.pid_file is not None:
        return options.model_copy(update={"pid_file": absolute_path_no_resolve(options.pid_file)})

    for directory in options.search_dirs:
        path = pid_file_candidate(directory, options.port)
        if path.exists():
            logger.debug(f"Found PID file {path}")
            return options.model_copy(update={"pid_file": path})

    raise PidFileNotFound(options.port, options.search_dirs)


def read_pid(pid_path: Path) -> int | None:
    """Read the PID stored in `pid_path`.

    Missing or unreadable files raise OSError; garbage contents give None.
    """
    try:
        pid = int(pid_path.read_text().strip())
    except ValueError:
        return None
    # 0 and negative values address process groups in kill(2); larger values overflow pid_t
    if pid <= 0 or pid > PID_MAX:
        return None
    return pid


def is_process_running(pid: int) -> bool:
    try:
        os.kill(pid, 0)
        return True
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
