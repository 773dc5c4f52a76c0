"""Back office schemas."""

from typing import Any

from pydantic import BaseModel, Field


class BulkDeleteRequest(BaseModel):
    ids: list[int] = Field(..., min_length=1)


class BulkDeleteResponse(BaseModel):
    deleted: int


class UrlCheckRequest(BaseModel):
    """Whether to write URL fixes back, or only report them."""

    fix: bool = False


class UrlCheckResult(BaseModel):
    id: int
    slug: str
    fixed: bool
    changes: dict[str, str] | None
    issues: list[str] = []


class TaskQueuedResponse(BaseModel):
    task_id: str
    status: str = "queued"


class TaskStatusResponse(BaseModel):
    task_id: str
    status: str
    result: Any | None = None


class SyncResponse(BaseModel):
    ok: bool
    status: int | None = None
    detail: str | None = None
