"""Transient user-facing notifications (toasts)."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class Notification(BaseModel):
    """One toast: shown once, then dropped."""

    title: str
    description: str
    color: Literal["success", "danger"] = Field(..., description="success | danger")


def success(title: str, description: str) -> Notification:
    return Notification(title=title, description=description, color="success")


def failure(description: str, title: str = "Error") -> Notification:
    return Notification(title=title, description=description, color="danger")
