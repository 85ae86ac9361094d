class PassengerError(Exception):
    """Base class for errors raised by passenger-cli."""


class PidFileNotFound(PassengerError):
    """No candidate PID file exists in any search directory."""

    def __init__(self, port: int, search_dirs: tuple[str, ...]):
        self.port = port
        self.search_dirs = search_dirs
        super().__init__(f"No PID file found for port {port} in {', '.join(search_dirs)}")


class StopError(PassengerError):
    """The daemon could not be stopped."""


class StopTimeout(StopError):
    """The daemon did not exit within the controller's timeout."""
