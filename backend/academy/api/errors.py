"""Maps failed Results onto HTTP errors."""
from __future__ import annotations

from fastapi import HTTPException, status

from academy.domain.common.result import Result, CONFLICT, FORBIDDEN, INVALID_STATE, NOT_FOUND

_STATUS_BY_CODE = {
    FORBIDDEN: status.HTTP_403_FORBIDDEN,
    NOT_FOUND: status.HTTP_404_NOT_FOUND,
    CONFLICT: status.HTTP_409_CONFLICT,
    INVALID_STATE: status.HTTP_409_CONFLICT,
}


def raise_for_failure(result: Result) -> None:
    """No-op on success; otherwise an HTTPException carrying the message and offending fields."""
    if result.is_success:
        return
    detail = {"message": result.error, "fields": result.details} if result.details else result.error
    raise HTTPException(
        status_code=_STATUS_BY_CODE.get(result.code, status.HTTP_400_BAD_REQUEST),
        detail=detail,
    )
