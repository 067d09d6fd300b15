"""Declarative response schemas shared by prompt composition and decoding.

A schema describes the JSON shape the LLM is constrained to emit. The same
descriptor is rendered into a JSON Schema for the upstream request and used
by the decoder to validate what comes back.
"""

from dataclasses import dataclass, field

from models.enums import FieldType


@dataclass(frozen=True)
class SchemaField:
    name: str
    type: FieldType
    description: str = ""


@dataclass(frozen=True)
class ResponseSchema:
    """Expected JSON shape: either a bare array of strings or an object.

    ``fields`` is empty for the array form.
    """
    root: FieldType | str
    fields: tuple[SchemaField, ...] = field(default_factory=tuple)

    @classmethod
    def string_array(cls) -> "ResponseSchema":
        return cls(root=FieldType.STRING_ARRAY)

    @classmethod
    def object(cls, *fields: SchemaField) -> "ResponseSchema":
        return cls(root="object", fields=tuple(fields))

    @property
    def is_array(self) -> bool:
        return self.root == FieldType.STRING_ARRAY

    def to_json_schema(self) -> dict:
        """Render as a JSON Schema dict for structured output requests."""
        if self.is_array:
            return _type_schema(FieldType.STRING_ARRAY)
        properties = {}
        for f in self.fields:
            prop = _type_schema(f.type)
            if f.description:
                prop["description"] = f.description
            properties[f.name] = prop
        return {
            "type": "object",
            "properties": properties,
            "required": [f.name for f in self.fields],
        }


def _type_schema(field_type: FieldType) -> dict:
    if field_type == FieldType.STRING_ARRAY:
        return {"type": "array", "items": {"type": "string"}}
    return {"type": "string"}


STRING_LIST_SCHEMA = ResponseSchema.string_array()


def bundle_schema(creation_label: str, min_chars: int, max_chars: int) -> ResponseSchema:
    """Schema for the all-in-one bundle request."""
    return ResponseSchema.object(
        SchemaField(
            "content",
            FieldType.STRING,
            f"The main {creation_label}. It MUST be between {min_chars} and {max_chars} "
            f"characters long and be a complete, coherent work with a beginning, "
            f"middle and end.",
        ),
        SchemaField("titles", FieldType.STRING_ARRAY, "A list of 5 suggested titles."),
        SchemaField("description", FieldType.STRING, "A description for social media."),
        SchemaField("tags", FieldType.STRING_ARRAY, "A list of SEO tags."),
        SchemaField("cta", FieldType.STRING, "A call to action."),
        SchemaField("thumbnailPrompt", FieldType.STRING, "An English prompt for an image generator."),
    )
