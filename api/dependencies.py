"""
FastAPI dependencies: per-request session, store gateway and body parsing
"""

import json
from typing import Any, AsyncIterator, Dict, Type, TypeVar
from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from core.database import database
from core.exceptions import ValidationError
from store.gateway import StoreGateway

ModelT = TypeVar("ModelT", bound=BaseModel)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def get_db() -> AsyncIterator[AsyncSession]:
    """One pooled session per request, returned to the pool afterwards"""
    async with database.session() as session:
        yield session


async def get_gateway(db: AsyncSession = Depends(get_db)) -> StoreGateway:
    return StoreGateway(db)


async def read_payload(request: Request) -> Dict[str, Any]:
    """
    Read a JSON, urlencoded or multipart body into a flat dict.

    Uploaded files in a multipart body are ignored.
    """
    content_type = request.headers.get("content-type", "").lower()

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return {k: v for k, v in form.items() if isinstance(v, str)}

    body = await request.body()
    if not body.strip():
        return {}
    try:
        data = json.loads(body)
    except ValueError:
        raise ValidationError("Request body must be valid JSON")
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def parse_payload(schema: Type[ModelT], payload: Dict[str, Any]) -> ModelT:
    """Validate a payload, reporting the offending fields as a 400"""
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise ValidationError(
            f"Missing or invalid field(s): {', '.join(fields)}",
            context={"fields": fields, "schema": schema.__name__}
        )
