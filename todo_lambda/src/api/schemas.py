from __future__ import annotations

from typing import Any, Dict, List

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
    model_serializer,
    model_validator,
)


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.

    There is deliberately no ``id`` field: identifiers are assigned by the
    storage layer, so an ``id`` key in the request body is ignored along with
    any other unknown key.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
            }
        },
    )

    title: str = Field(default="", description="Short title for the todo item")
    description: str = Field(default="", description="Free-text detail")

    @model_validator(mode="before")
    @classmethod
    def null_body_is_empty(cls, data: Any) -> Any:
        """A JSON ``null`` body creates an empty item rather than failing."""
        return {} if data is None else data

    @field_validator("title", "description", mode="before")
    @classmethod
    def null_is_empty_string(cls, v: Any) -> Any:
        """JSON ``null`` leaves the field empty."""
        return "" if v is None else v


# PUBLIC_INTERFACE
class Todo(BaseModel):
    """
    A Todo item as stored and returned by the API.

    The zero value (all fields empty) is the "not found" sentinel returned by
    read-one lookups for unknown ids. An empty ``id`` is left out of the JSON
    encoding.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "2f0c7e0e-8d5b-4b43-9d0e-2f6d3c1a9b7e",
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
            }
        }
    )

    id: str = Field(default="", description="Unique identifier of the todo item")
    title: str = Field(default="", description="Short title for the todo item")
    description: str = Field(default="", description="Free-text detail")

    @model_serializer(mode="wrap")
    def _omit_empty_id(self, handler: Any) -> Dict[str, Any]:
        data = handler(self)
        if not data.get("id"):
            data.pop("id", None)
        return data

    def exists(self) -> bool:
        """Return True unless this is the not-found sentinel."""
        return bool(self.id)


TodoList = TypeAdapter(List[Todo])
