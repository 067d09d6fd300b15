"""Enumerations for generation parameters and artifact tracking."""

from enum import Enum


class CreationType(str, Enum):
    STORY = "story"
    PRAYER = "prayer"

    @property
    def label(self) -> str:
        """Human-readable name used inside prompts."""
        return "biblical story" if self is CreationType.STORY else "prayer"


class ArtifactKind(str, Enum):
    CONTENT = "content"
    TITLES = "titles"
    DESCRIPTION = "description"
    TAGS = "tags"
    CTA = "cta"
    THUMBNAIL = "thumbnail"


class RefineDirection(str, Enum):
    SHRINK = "shrink"
    GROW = "grow"


class FieldType(str, Enum):
    STRING = "string"
    STRING_ARRAY = "array<string>"
