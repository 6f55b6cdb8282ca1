"""
Application error taxonomy.

Layers raise `AppError` tagged with an `ErrorKind`; only the HTTP layer
(`main.py`) turns a kind into a status code. Callers branch on `err.kind`,
never on the identity of a shared error instance.
"""

from __future__ import annotations

import enum


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORE = "store"


class AppError(RuntimeError):
    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        # Client-safe text. Internal causes travel on __cause__ only.
        self.message = message

    def __repr__(self) -> str:
        return f"AppError(kind={self.kind.value!r}, message={self.message!r})"


def invalid(message: str) -> AppError:
    return AppError(ErrorKind.VALIDATION, message)


def not_found(message: str = "Data not found.") -> AppError:
    return AppError(ErrorKind.NOT_FOUND, message)


def store(message: str = "Database operation failed.") -> AppError:
    return AppError(ErrorKind.STORE, message)
