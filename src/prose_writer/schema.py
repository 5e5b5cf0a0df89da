"""Schema embedding options."""

from typing import Any, Literal

from pydantic import BaseModel, Field

SchemaFormat = Literal["json", "yaml"]


class SchemaEmbedOptions(BaseModel):
    """How ProseWriter.schema() presents a schema.

    Without a tag the schema is emitted as a fenced json/yaml block;
    with a tag the block is wrapped in ``<tag>...</tag>``.
    """

    format: SchemaFormat = Field(default="json", description="Serialization format")
    title: str | None = Field(default=None, description="Optional heading text")
    level: int = Field(default=2, description="Heading level for the title")
    tag: str | None = Field(default=None, description="Wrap the block in this XML-style tag")


def resolve_schema(schema: Any) -> Any:
    """Return a JSON-Schema mapping for schema.

    Pydantic model classes are converted with model_json_schema();
    anything else is returned unchanged.
    """
    if isinstance(schema, type) and issubclass(schema, BaseModel):
        return schema.model_json_schema()
    return schema
