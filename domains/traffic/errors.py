"""Errors raised by the traffic domain."""


class TrafficGuardError(Exception):
    """Base class for traffic monitor errors."""


class FetchError(TrafficGuardError):
    """Listing servers for one API token failed."""


class ShutdownError(TrafficGuardError):
    """A shutdown request for one server failed."""

    def __init__(self, server_id: int, message: str):
        super().__init__(f"Shutdown of server {server_id} failed: {message}")
        self.server_id = server_id


class PersistenceError(TrafficGuardError):
    """The summary message pointer could not be read or written."""
