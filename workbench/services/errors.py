"""
Error taxonomy for remote calls
"""
from typing import Optional


class WorkbenchError(Exception):
    """Base class for every failure surfaced by the gateways"""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class Unauthenticated(WorkbenchError):
    """No credential available; raised before any network call"""


class RemoteError(WorkbenchError):
    """The server answered with a non-2xx status or an unsuccessful envelope"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"RemoteError(message={self.message!r}, status_code={self.status_code})"


class TransportError(WorkbenchError):
    """Network-level failure; no response was received"""
