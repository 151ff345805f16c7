from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for every wire schema: snake_case attributes in Python, camelCase keys in JSON.
    Either spelling is accepted on input.
    """

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class MessageResponse(CamelModel):
    message: str
