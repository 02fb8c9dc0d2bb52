from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from navpage_core.db.results import OperationResult


class ActionResult(BaseModel):
    success: bool
    message: str | None = None


def ok(message: str | None = None) -> ActionResult:
    return ActionResult(success=True, message=message)


def fail(message: str) -> ActionResult:
    return ActionResult(success=False, message=message)


def from_operation(result: OperationResult) -> ActionResult:
    # Tokens travel in the cookie only, never in the body.
    return ActionResult(success=result.success, message=result.message)


class SaveRequest(BaseModel):
    categories: list[str]
    # Site objects are kept as sent (unknown fields included) and shape-checked
    # by the navigation store.
    sites: list[dict[str, Any]]


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: str | None = Field(default=None, alias="currentPassword")
    new_password: str | None = Field(default=None, alias="newPassword")
    confirm_password: str | None = Field(default=None, alias="confirmPassword")
