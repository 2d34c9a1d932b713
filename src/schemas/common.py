from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class BaseSchema(BaseModel):
    # Python attributes stay snake_case; the wire format is camelCase
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
    )


class SuccessResponse(BaseSchema, Generic[DataT]):
    success: bool = True
    data: DataT


class ErrorResponse(BaseSchema):
    success: bool = False
    message: str
    error: Any = None
