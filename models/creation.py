"""Generation parameters, artifact bundle and history record models."""

import dataclasses
import time
import uuid
from dataclasses import dataclass, field
from typing import Optional

from config.exceptions import InvalidParamsError
from models.enums import ArtifactKind, CreationType


@dataclass(frozen=True)
class GenerationParams:
    """Immutable snapshot of the user's inputs for one generation call."""
    main_prompt: str
    creation_type: CreationType = CreationType.STORY
    character_count: int = 1500
    language: str = "pt-BR"
    title_prompt: str = ""
    description_prompt: str = ""
    thumbnail_prompt: str = ""
    name: str = ""

    def __post_init__(self):
        # bool is an int subclass; reject it explicitly
        if (
            not isinstance(self.character_count, int)
            or isinstance(self.character_count, bool)
            or self.character_count < 1
        ):
            raise InvalidParamsError(
                "Character count must be a positive integer",
                {"character_count": self.character_count},
            )
        if not isinstance(self.creation_type, CreationType):
            try:
                creation_type = CreationType(self.creation_type)
            except ValueError:
                raise InvalidParamsError(
                    f"Unknown creation type: {self.creation_type}",
                    {"creation_type": self.creation_type},
                ) from None
            object.__setattr__(self, "creation_type", creation_type)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "creationType": self.creation_type.value,
            "mainPrompt": self.main_prompt,
            "titlePrompt": self.title_prompt,
            "descriptionPrompt": self.description_prompt,
            "thumbnailPrompt": self.thumbnail_prompt,
            "characterCount": self.character_count,
            "language": self.language,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GenerationParams":
        return cls(
            name=data.get("name", "") or "",
            creation_type=CreationType(data.get("creationType", CreationType.STORY.value)),
            main_prompt=data.get("mainPrompt", ""),
            title_prompt=data.get("titlePrompt", "") or "",
            description_prompt=data.get("descriptionPrompt", "") or "",
            thumbnail_prompt=data.get("thumbnailPrompt", "") or "",
            character_count=int(data.get("characterCount", 1500)),
            language=data.get("language", "pt-BR"),
        )


# Field names on ArtifactBundle for each artifact kind
_BUNDLE_FIELDS = {
    ArtifactKind.CONTENT: "content",
    ArtifactKind.TITLES: "titles",
    ArtifactKind.DESCRIPTION: "description",
    ArtifactKind.TAGS: "tags",
    ArtifactKind.CTA: "cta",
    ArtifactKind.THUMBNAIL: "thumbnail_prompt",
}


@dataclass
class ArtifactBundle:
    """The six generated pieces of one creation."""
    content: str = ""
    titles: list[str] = field(default_factory=list)
    description: str = ""
    tags: list[str] = field(default_factory=list)
    cta: str = ""
    thumbnail_prompt: str = ""

    def replace(self, kind: ArtifactKind, value) -> "ArtifactBundle":
        """Return a copy with one artifact swapped."""
        return dataclasses.replace(self, **{_BUNDLE_FIELDS[kind]: value})

    def to_dict(self) -> dict:
        return {
            "content": self.content,
            "titles": list(self.titles),
            "description": self.description,
            "tags": list(self.tags),
            "cta": self.cta,
            "thumbnailPrompt": self.thumbnail_prompt,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ArtifactBundle":
        return cls(
            content=data.get("content", ""),
            titles=list(data.get("titles") or []),
            description=data.get("description", ""),
            tags=list(data.get("tags") or []),
            cta=data.get("cta", ""),
            thumbnail_prompt=data.get("thumbnailPrompt", ""),
        )


def new_creation_id() -> str:
    return f"creation-{uuid.uuid4().hex[:12]}"


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class Creation:
    """Persisted history record: params + bundle, identified by a stable id."""
    id: str
    params: GenerationParams
    bundle: ArtifactBundle
    created_at: int = field(default_factory=now_ms)
    updated_at: Optional[int] = None

    def to_record(self) -> dict:
        """Flatten into the JSON-able record handed to the history store.

        Params and bundle stay nested since both carry a ``thumbnailPrompt``.
        """
        return {
            "id": self.id,
            "timestamp": self.created_at,
            "updatedAt": self.updated_at or self.created_at,
            "params": self.params.to_dict(),
            "bundle": self.bundle.to_dict(),
        }

    @classmethod
    def from_record(cls, record: dict) -> "Creation":
        return cls(
            id=record["id"],
            params=GenerationParams.from_dict(record.get("params", {})),
            bundle=ArtifactBundle.from_dict(record.get("bundle", {})),
            created_at=int(record.get("timestamp") or now_ms()),
            updated_at=record.get("updatedAt"),
        )
