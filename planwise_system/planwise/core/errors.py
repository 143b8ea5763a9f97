"""
Error kinds raised by the service client and the draft storage.

Pathways turn these into user-facing failure messages; the history cache and
the draft store log them and carry on.
"""

from typing import Optional


class PlanwiseError(RuntimeError):
    pass


class ServerError(PlanwiseError):
    """Non-success HTTP status. ``message`` is the server's ``error`` field, if any."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        super().__init__(message or f"Server responded with status {status_code}")


class NetworkError(PlanwiseError):
    pass


class MalformedResponse(PlanwiseError):
    pass


class MalformedSuggestions(MalformedResponse):
    pass


class StorageCorrupt(PlanwiseError):
    pass
