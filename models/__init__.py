"""Models package: data model, schemas, enums, and the history store."""

from models.creation import ArtifactBundle, Creation, GenerationParams
from models.database import HistoryStore
from models.enums import ArtifactKind, CreationType, FieldType, RefineDirection
from models.schemas import ResponseSchema, SchemaField, STRING_LIST_SCHEMA, bundle_schema

__all__ = [
    "ArtifactBundle",
    "Creation",
    "GenerationParams",
    "HistoryStore",
    "ArtifactKind",
    "CreationType",
    "FieldType",
    "RefineDirection",
    "ResponseSchema",
    "SchemaField",
    "STRING_LIST_SCHEMA",
    "bundle_schema",
]
