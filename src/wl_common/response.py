"""Error response body shared by every endpoint.

Failures return:
{
    "error": "Insufficient balance",
    "code": 2001,
    "requestId": "req_..."
}

Success bodies are endpoint-specific models (see each module's schemas).
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for wire models — camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(CamelModel):
    error: str
    code: int
    request_id: str = Field(default_factory=lambda: f"req_{uuid.uuid4().hex[:12]}")


def error_response(code: int, message: str, request_id: str | None = None) -> ErrorResponse:
    if request_id is None:
        return ErrorResponse(error=message, code=code)
    return ErrorResponse(error=message, code=code, request_id=request_id)
