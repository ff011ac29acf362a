"""Recursive JSON-Schema-like tree used for payloads and parameters."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

COMPONENTS_PREFIX = "#/components/schemas/"


class Schema(BaseModel):
    """One schema node.

    A node's shape is its primitive `type`, its `properties` (objects) or its
    `items` (arrays). A node with `ref` points at a component schema instead.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: str | None = None
    format: str | None = None
    description: str | None = None
    properties: dict[str, "Schema"] | None = None
    items: "Schema | None" = None
    required: list[str] | None = None
    enum: list[Any] | None = None
    default: Any = None
    example: Any = None
    pattern: str | None = None
    ref: str | None = Field(default=None, alias="$ref")

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def primitive(cls, kind: str, format: str | None = None) -> "Schema":
        return cls(type=kind, format=format)

    @classmethod
    def array_of(cls, items: "Schema") -> "Schema":
        return cls(type="array", items=items)

    @classmethod
    def object_of(
        cls, properties: dict[str, "Schema"], required: list[str] | None = None
    ) -> "Schema":
        """Object schema; every property is required unless `required` is given."""
        if required is None:
            required = list(properties)
        return cls(type="object", properties=dict(properties), required=required or None)

    @classmethod
    def reference(cls, name: str) -> "Schema":
        return cls(ref=COMPONENTS_PREFIX + name)
