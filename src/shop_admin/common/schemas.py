"""Base pydantic models shared by the feature schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase keys on the wire.

    Input is accepted under either name so services can build responses
    with keyword arguments while clients keep the JSON contract.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        protected_namespaces=(),
    )


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
