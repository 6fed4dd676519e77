"""Test utilities and shared doubles."""

from unittest.mock import Mock


class MockLogger:
    """Mock logger that implements the Litestar Logger protocol."""

    def debug(self, *args, **kwargs): pass
    def info(self, *args, **kwargs): pass
    def warning(self, *args, **kwargs): pass
    def warn(self, *args, **kwargs): pass
    def error(self, *args, **kwargs): pass
    def exception(self, *args, **kwargs): pass
    def critical(self, *args, **kwargs): pass
    def fatal(self, *args, **kwargs): pass
    def setLevel(self, *args, **kwargs): pass


class MockRequest:
    def __init__(self):
        self.logger = Mock()


def broken_pool() -> Mock:
    """A pool whose every connection attempt fails."""
    pool = Mock()
    pool.connection.side_effect = RuntimeError("database is unavailable")
    return pool
