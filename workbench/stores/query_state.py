"""
Loading flags and error slots for store operations
"""
from contextlib import contextmanager
from typing import Iterator, Optional


class ErrorSlot:
    """Holds the last user-facing error message of one or more operations"""

    def __init__(self):
        self.message: Optional[str] = None

    def clear(self) -> None:
        self.message = None

    def record(self, message: str) -> None:
        self.message = message


class QueryStatus:
    """
    Loading flag plus error slot of one retrieval path

    Several statuses may share an ErrorSlot (SLA summary and SLA alerts do).
    """

    def __init__(self, errors: Optional[ErrorSlot] = None):
        self.loading = False
        self._errors = errors if errors is not None else ErrorSlot()

    @property
    def error(self) -> Optional[str]:
        return self._errors.message

    @contextmanager
    def track(self, fallback_message: str, silent: bool = False) -> Iterator[None]:
        """
        Hold the loading flag for the duration of the block

        The flag is released on every exit path. A failure is recorded into
        the error slot and re-raised. A silent block leaves the flag and any
        previous error alone unless it fails.

        Args:
            fallback_message: Recorded when the error carries no message
            silent: Do not toggle the loading flag
        """
        if not silent:
            self.loading = True
            self._errors.clear()
        try:
            yield
        except Exception as e:
            self._errors.record(str(e) or fallback_message)
            raise
        finally:
            if not silent:
                self.loading = False
