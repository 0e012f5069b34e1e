"""
Pydantic base models for request/response validation.

Stored records and the JSON wire format both use camelCase field names
(lastUpdate, reportsCount, dateSubmitted...). Models keep snake_case
attributes and map them with an alias generator.
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, Optional


class CamelModel(BaseModel):
    """Base for every model that is stored or sent over the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        use_enum_values = True
        validate_default = True

    @classmethod
    def from_record(cls, record: Dict[str, Any]):
        """Build a model from a stored camelCase dict."""
        return cls.model_validate(record)

    def to_record(self, **kwargs) -> Dict[str, Any]:
        """Dump to the camelCase dict shape kept in the store."""
        return self.model_dump(by_alias=True, **kwargs)


class SuccessResponse(CamelModel):
    """
    Base response model for mutating endpoints.
    Endpoints that return a payload extend this for consistency.
    """
    success: bool = True
    message: Optional[str] = Field(None, description="Optional human-readable detail")
