"""
Response envelopes shared by all endpoints
"""
from typing import Any, Optional, List, Dict
from fastapi import status
from fastapi.responses import JSONResponse

from goodwill.schemas.common import ErrorResponse, PaginationMeta


def error_response(
    error: str,
    detail: Optional[str] = None,
    status_code: int = status.HTTP_400_BAD_REQUEST
) -> JSONResponse:
    """
    Build the {"ok": false, "error": ...} envelope

    Args:
        error: Error message shown to the client
        detail: Optional extra information
        status_code: HTTP status code
    """
    body = ErrorResponse(error=error, detail=detail)
    return JSONResponse(
        content=body.model_dump(exclude_none=True),
        status_code=status_code
    )


def paginated_response(
    data: List[Any],
    page: int,
    per_page: int,
    total: int
) -> Dict:
    """
    Build the {"ok": true, "data": [...], "meta": {...}} envelope for a page
    """
    total_pages = (total + per_page - 1) // per_page  # Ceiling division

    meta = PaginationMeta(
        current_page=page,
        per_page=per_page,
        total=total,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1
    )

    return {
        "ok": True,
        "data": data,
        "meta": meta.model_dump()
    }
