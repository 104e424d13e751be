from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys; snake_case is accepted on input too."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
