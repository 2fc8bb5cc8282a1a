from typing import Any, Type, TypeVar
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

M = TypeVar("M", bound=BaseModel)


class CamelModel(BaseModel):
    """Wire models: camelCase on the wire, snake_case in python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def to_out(schema: Type[M], obj: Any) -> dict:
    return schema.model_validate(obj).model_dump(by_alias=True, mode="json")


def to_out_list(schema: Type[M], objs) -> list:
    return [to_out(schema, o) for o in objs]
