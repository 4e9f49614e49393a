"""Caller-facing error types

Every error carries the HTTP status it maps to. None of them are retried:
the caller corrects the input and resubmits.
"""

from typing import Optional


class APIError(Exception):
    """Base error rendered as ``{"error": message}``"""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __eq__(self, other):
        return (
            type(self) is type(other)
            and self.status_code == other.status_code
            and self.message == other.message
        )

    def __hash__(self):
        return hash((type(self), self.status_code, self.message))

    def __repr__(self):
        return f"{type(self).__name__}({self.status_code}, {self.message!r})"


class ValidationError(APIError):
    """Malformed or rule-violating input"""

    status_code = 400


class NotFoundError(APIError):
    """Referenced reservation or table does not exist"""

    status_code = 404


class ConflictError(APIError):
    """Table occupied, party already seated, or table under capacity"""

    status_code = 400
