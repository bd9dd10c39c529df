"""
Request-body dependencies.

Endpoints behind the API-key gate read their bodies through these instead of
declaring body parameters, because FastAPI parses declared bodies before it
solves any dependency.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, TypeVar

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from starlette.datastructures import UploadFile as StarletteUploadFile

ModelT = TypeVar("ModelT", bound=BaseModel)


async def json_object(request: Request) -> dict[str, Any]:
    # Anything that is not a JSON object reads as an empty payload.
    try:
        data = await request.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def json_body(model: type[ModelT]) -> Callable[[Request], Awaitable[ModelT]]:
    async def dependency(request: Request) -> ModelT:
        payload = await json_object(request)
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise RequestValidationError(exc.errors()) from exc

    return dependency


def form_file(field: str) -> Callable[[Request], Awaitable[StarletteUploadFile | None]]:
    async def dependency(request: Request) -> StarletteUploadFile | None:
        # Non-form content types parse to an empty form.
        form = await request.form()
        value = form.get(field)
        return value if isinstance(value, StarletteUploadFile) else None

    return dependency
