"""
Progress Indicators - Spinners shown while a stage is waiting on the network.
"""

from contextlib import contextmanager
from typing import Iterator

from rich.status import Status

from kaiscrape.ui.console import get_console


@contextmanager
def status_spinner(message: str, spinner: str = "dots") -> Iterator[Status]:
    """Simple status spinner context manager."""
    status = Status(message, spinner=spinner, console=get_console())

    try:
        status.start()
        yield status
    finally:
        status.stop()


# Export components
__all__ = ["status_spinner"]
