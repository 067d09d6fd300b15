"""Prompt composition for every artifact kind.

All composers are pure: ``(params, modification, context) -> PromptRequest``.
Templates are ``## `` sections of ``config/prompts/generation.md``.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from models.creation import GenerationParams
from models.enums import RefineDirection
from models.schemas import ResponseSchema, STRING_LIST_SCHEMA, bundle_schema
from tools.text_utils import WINDOW_FLOOR, WINDOW_PADDING, preview, target_window

_PROMPTS_DIR = Path(__file__).parent.parent / "config" / "prompts"
_TEMPLATE_NAME = "generation"

DESCRIPTION_MAX_CHARS = 250
CONTENT_PREVIEW_CHARS = 500


@dataclass(frozen=True)
class PromptRequest:
    """Request text plus the JSON shape the response must follow (None = free text)."""
    text: str
    schema: Optional[ResponseSchema] = None


@lru_cache(maxsize=32)
def _read_prompt_file(path: str) -> str:
    """Read and cache a prompt file by absolute path string."""
    return Path(path).read_text(encoding="utf-8")


def load_prompt(template_name: str) -> str:
    """Load a prompt template from config/prompts/ (cached after first read)."""
    path = _PROMPTS_DIR / f"{template_name}.md"
    if not path.exists():
        raise FileNotFoundError(f"Prompt template not found: {path}")
    return _read_prompt_file(str(path))


def extract_section(template: str, section_header: str) -> str:
    """Extract the body of the ``## <section_header>`` section (exact header match)."""
    result = []
    capturing = False
    for line in template.split("\n"):
        stripped = line.strip()
        if stripped.startswith("## "):
            if capturing:
                break
            capturing = stripped[3:].strip() == section_header
            continue
        if capturing:
            result.append(line)
    return "\n".join(result).strip()


def _section(name: str) -> str:
    return extract_section(load_prompt(_TEMPLATE_NAME), name)


def _note(label: str, value: Optional[str]) -> str:
    return f'{label}: "{value}"' if value else ""


def _wish(value: Optional[str]) -> str:
    return f"(Wish: {value})" if value else ""


def _window(params: GenerationParams, floor: int, padding: int):
    return target_window(params.character_count, floor=floor, padding=padding)


def compose_preamble(params: GenerationParams) -> str:
    return _section("Preamble").format(
        language=params.language,
        creation_label=params.creation_type.label,
        main_prompt=params.main_prompt,
    )


def compose_enhance_idea(params: GenerationParams) -> PromptRequest:
    return PromptRequest(_section("Enhance Idea").format(main_prompt=params.main_prompt))


def compose_content(
    params: GenerationParams,
    modification: Optional[str] = None,
    floor: int = WINDOW_FLOOR,
    padding: int = WINDOW_PADDING,
) -> PromptRequest:
    window = _window(params, floor, padding)
    text = _section("Content").format(
        preamble=compose_preamble(params),
        creation_label=params.creation_type.label,
        min_chars=window.min_chars,
        max_chars=window.max_chars,
        modification_note=_note("Requested modification", modification),
    )
    return PromptRequest(text)


def compose_refinement(
    params: GenerationParams,
    text: str,
    direction: RefineDirection,
    floor: int = WINDOW_FLOOR,
    padding: int = WINDOW_PADDING,
) -> PromptRequest:
    """Ask the model to summarize (shrink) or expand (grow) existing text."""
    window = _window(params, floor, padding)
    task = "Summarize" if direction == RefineDirection.SHRINK else "Expand"
    task_instruction = _section(task).format(creation_label=params.creation_type.label)
    prompt = _section("Refine").format(
        task_instruction=task_instruction,
        creation_label=params.creation_type.label,
        main_prompt=params.main_prompt,
        language=params.language,
        current_length=len(text),
        text=text,
        min_chars=window.min_chars,
        max_chars=window.max_chars,
    )
    return PromptRequest(prompt)


def compose_titles(params: GenerationParams, modification: Optional[str] = None) -> PromptRequest:
    text = _section("Titles").format(
        preamble=compose_preamble(params),
        title_note=_note("Take into account the following wish for the title", params.title_prompt),
        modification_note=_note("Requested modification", modification),
    )
    return PromptRequest(text, STRING_LIST_SCHEMA)


def compose_description(
    params: GenerationParams,
    modification: Optional[str] = None,
    max_chars: int = DESCRIPTION_MAX_CHARS,
) -> PromptRequest:
    text = _section("Description").format(
        preamble=compose_preamble(params),
        description_max_chars=max_chars,
        description_note=_note(
            "Take into account the following wish for the description", params.description_prompt
        ),
        modification_note=_note("Requested modification", modification),
    )
    return PromptRequest(text)


def compose_tags(params: GenerationParams, modification: Optional[str] = None) -> PromptRequest:
    text = _section("Tags").format(
        preamble=compose_preamble(params),
        modification_note=_note("Requested modification", modification),
    )
    return PromptRequest(text, STRING_LIST_SCHEMA)


def compose_cta(params: GenerationParams, modification: Optional[str] = None) -> PromptRequest:
    text = _section("Call To Action").format(
        preamble=compose_preamble(params),
        modification_note=_note("Requested modification", modification),
    )
    return PromptRequest(text)


def compose_thumbnail(
    params: GenerationParams,
    modification: Optional[str] = None,
    content: str = "",
    preview_chars: int = CONTENT_PREVIEW_CHARS,
) -> PromptRequest:
    """Image-generation prompt request; ``content`` is the current main content."""
    text = _section("Thumbnail Prompt").format(
        preamble=compose_preamble(params),
        content_preview=preview(content, preview_chars),
        thumbnail_note=_note(
            "Take into account the following wish for the thumbnail", params.thumbnail_prompt
        ),
        modification_note=_note("Requested modification", modification),
    )
    return PromptRequest(text)


def compose_all_content(
    params: GenerationParams,
    floor: int = WINDOW_FLOOR,
    padding: int = WINDOW_PADDING,
    description_max_chars: int = DESCRIPTION_MAX_CHARS,
) -> PromptRequest:
    window = _window(params, floor, padding)
    label = params.creation_type.label
    text = _section("All Content").format(
        preamble=compose_preamble(params),
        creation_label=label,
        min_chars=window.min_chars,
        max_chars=window.max_chars,
        description_max_chars=description_max_chars,
        title_wish=_wish(params.title_prompt),
        description_wish=_wish(params.description_prompt),
        thumbnail_wish=_wish(params.thumbnail_prompt),
    )
    return PromptRequest(text, bundle_schema(label, window.min_chars, window.max_chars))
