from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


class MessageResponse(CamelModel):
    message: str
