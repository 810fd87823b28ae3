"""
Validate loosely-typed JSON payloads against pydantic models.

Used where a body is accepted as a plain dict and the model is chosen at
runtime (tagged variants, the generic records endpoint).
"""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException
from pydantic import BaseModel, TypeAdapter, ValidationError


def error_details(exc: ValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": str(err.get("msg") or "")}
        for err in exc.errors()
    ]


def parse_payload(schema: type[BaseModel] | TypeAdapter, data: Any) -> Any:
    try:
        if isinstance(schema, TypeAdapter):
            return schema.validate_python(data)
        return schema.model_validate(data)
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail={"error": "Invalid request.", "details": error_details(exc)},
        ) from exc
