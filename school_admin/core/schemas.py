from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response models serialized with camelCase keys for the web client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    error: str
    field: Optional[str] = None
    value: Optional[Any] = None
    details: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
    success: bool = True
