from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OperationResult:
    success: bool
    message: str | None = None
    token: str | None = None


def succeeded(message: str | None = None, *, token: str | None = None) -> OperationResult:
    return OperationResult(success=True, message=message, token=token)


def failed(message: str) -> OperationResult:
    return OperationResult(success=False, message=message)
