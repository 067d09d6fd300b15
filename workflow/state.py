"""Session state owned by the generation controller."""

from dataclasses import dataclass, field
from typing import Any, Optional

from models.creation import ArtifactBundle, Creation, GenerationParams
from models.enums import CreationType


@dataclass
class SessionInputs:
    """Editable form inputs; snapshotted into GenerationParams per action."""
    name: str = ""
    creation_type: CreationType = CreationType.STORY
    main_prompt: str = ""
    title_prompt: str = ""
    description_prompt: str = ""
    thumbnail_prompt: str = ""
    character_count: int = 1500
    language: str = "pt-BR"

    def snapshot(self) -> GenerationParams:
        """Freeze the current inputs (raises InvalidParamsError on bad values)."""
        return GenerationParams(
            name=self.name,
            creation_type=self.creation_type,
            main_prompt=self.main_prompt,
            title_prompt=self.title_prompt,
            description_prompt=self.description_prompt,
            thumbnail_prompt=self.thumbnail_prompt,
            character_count=self.character_count,
            language=self.language,
        )

    @classmethod
    def from_params(cls, params: GenerationParams) -> "SessionInputs":
        return cls(
            name=params.name,
            creation_type=params.creation_type,
            main_prompt=params.main_prompt,
            title_prompt=params.title_prompt,
            description_prompt=params.description_prompt,
            thumbnail_prompt=params.thumbnail_prompt,
            character_count=params.character_count,
            language=params.language,
        )


@dataclass
class SessionState:
    """Everything one session knows: inputs, current bundle, history and notices.

    Fields are grouped logically:
    - Inputs: inputs
    - Output: bundle, current_creation_id
    - History: history (newest first, mirrors the store)
    - Notices: error, warning, status
    - Control: in_flight (name of the running action, if any)
    """
    inputs: SessionInputs = field(default_factory=SessionInputs)
    bundle: ArtifactBundle = field(default_factory=ArtifactBundle)
    current_creation_id: Optional[str] = None
    history: list[Creation] = field(default_factory=list)
    error: Optional[str] = None
    warning: Optional[str] = None
    status: Optional[str] = None
    in_flight: Optional[str] = None

    def find_creation(self, creation_id: str) -> tuple[int, Optional[Creation]]:
        for index, creation in enumerate(self.history):
            if creation.id == creation_id:
                return index, creation
        return -1, None


@dataclass
class ActionResult:
    """Outcome of one controller action.

    ``ok`` is True when the action's results were committed. A committed
    action may still carry an ``error`` (content left too short) or a
    ``warning`` (content refined or truncated).
    """
    ok: bool
    value: Any = None
    error: Optional[str] = None
    warning: Optional[str] = None
