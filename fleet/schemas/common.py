from pydantic import BaseModel
from typing import TypeVar, Generic, Any

T = TypeVar("T")


# ─── Pagination Meta ───────────────────────────────────────────────────────────
class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int
    hasNext: bool
    hasPrev: bool


# ─── Error Detail (per field) ──────────────────────────────────────────────────
class ErrorDetail(BaseModel):
    field: str
    message: str


# ─── Error Body ───────────────────────────────────────────────────────────────
class ErrorBody(BaseModel):
    code: str
    details: list[ErrorDetail] | None = None
    field: str | None = None


# ─── Standard Success Response ────────────────────────────────────────────────
class SuccessResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: T | None = None
    demoMode: bool | None = None
    durable: bool | None = None


# ─── Error Response ───────────────────────────────────────────────────────────
class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: ErrorBody


# ─── Helper Functions ─────────────────────────────────────────────────────────
def success_response(message: str, data: Any = None, **extra: Any) -> dict:
    """
    Return a standardized success dict (used in route handlers).
    Extra keyword arguments (demoMode, durable, ...) are added at top level.
    """
    return {"success": True, "message": message, "data": data, **extra}


def paginated_response(
    message: str,
    data: list,
    total: int,
    page: int,
    limit: int,
    **extra: Any,
) -> dict:
    """Return a standardized paginated dict."""
    total_pages = (total + limit - 1) // limit if limit > 0 else 0
    meta = PaginationMeta(
        page=page, limit=limit, total=total, totalPages=total_pages,
        hasNext=page < total_pages, hasPrev=page > 1,
    )
    return {"success": True, "message": message, "data": data, "meta": meta.model_dump(), **extra}


def paginate(items: list, page: int, limit: int) -> list:
    offset = (page - 1) * limit
    return items[offset:offset + limit]


def facade_response(message: str, result, data: Any = None, **extra: Any) -> dict:
    """
    success_response for a FacadeResult: reports whether the data came from
    sample data (demoMode) and whether a write is durable.
    """
    return success_response(
        message,
        result.data if data is None else data,
        demoMode=result.source.value == "sample",
        durable=result.durable,
        **extra,
    )
