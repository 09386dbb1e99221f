"""Shared base for stored entities."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StoredModel(BaseModel):
    """
    Entity persisted in the document store.

    Stored documents use snake_case field names; the JSON API exposes the
    same fields in camelCase (``foodType``, ``createdAt``, ...).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_firestore(self) -> dict:
        """Convert to Firestore document."""
        return self.model_dump(mode="json")

    def to_api(self) -> dict:
        """Convert to camelCase JSON for API responses."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_firestore(cls, doc_id: str, data: dict):
        """Create from Firestore document."""
        data = dict(data)
        data["id"] = doc_id
        return cls.model_validate(data)


class ApiModel(BaseModel):
    """Request body accepting camelCase (or snake_case) keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
