from collections.abc import Iterable
from typing import Any

from fastapi import HTTPException


def error_detail(errors: Iterable[Any]) -> list[dict[str, Any]]:
    return [{"code": err.code, "message": err.message, "field": err.field} for err in errors]


def raise_for_errors(errors: tuple[Any, ...]) -> None:
    """404 when the target is missing, 400 for any other validation failure."""
    if not errors:
        raise HTTPException(status_code=400, detail="Request failed")
    status_code = 404 if all(err.code == "not_found" and not err.field for err in errors) else 400
    raise HTTPException(status_code=status_code, detail=error_detail(errors))
