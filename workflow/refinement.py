"""Length-refinement loop: fit generated content into its target window.

The loop asks the model to summarize or expand the text at most
``max_attempts`` times. Overlong text that still does not fit is cut with
:func:`tools.text_utils.smart_truncate`; text that stays too short is kept
and reported, since lengthening cannot be done mechanically.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from config.exceptions import ContentLengthError
from models.enums import RefineDirection
from tools.text_utils import TargetWindow, count_chars, smart_truncate
from workflow.conditions import refinement_direction, route_after_attempt

logger = logging.getLogger(__name__)

MAX_REFINEMENT_ATTEMPTS = 2

RefineFn = Callable[[str, RefineDirection], Awaitable[str]]


@dataclass
class RefinementState:
    text: str
    min_chars: int
    max_chars: int
    attempts: int = 0
    direction: Optional[RefineDirection] = None


@dataclass
class RefinementOutcome:
    """Final text of a refinement run plus the user-facing notice, if any."""
    text: str
    attempts: int
    final_length: int
    truncated: bool = False
    warning: Optional[str] = None
    error: Optional[str] = None


async def refine_to_window(
    text: str,
    window: TargetWindow,
    refine: RefineFn,
    max_attempts: int = MAX_REFINEMENT_ATTEMPTS,
    on_status: Optional[Callable[[str], None]] = None,
) -> RefinementOutcome:
    """Refine ``text`` until its length falls inside ``window``.

    Args:
        text: Generated content.
        window: Accepted character range (inclusive).
        refine: One upstream summarize/expand call.
        max_attempts: Maximum number of ``refine`` calls.
        on_status: Optional sink for per-attempt progress messages.
    """
    state = RefinementState(text=text, min_chars=window.min_chars, max_chars=window.max_chars)

    while route_after_attempt(count_chars(state.text), window, state.attempts, max_attempts) == "refine":
        state.attempts += 1
        state.direction = refinement_direction(count_chars(state.text), window)
        verb = "Summarizing" if state.direction == RefineDirection.SHRINK else "Expanding"
        message = (
            f"Attempt {state.attempts}/{max_attempts}: content out of target range "
            f"({count_chars(state.text)} chars, target {window}). {verb}..."
        )
        logger.info(message)
        if on_status:
            on_status(message)
        state.text = await refine(state.text, state.direction)

    final_length = count_chars(state.text)
    route = route_after_attempt(final_length, window, state.attempts, max_attempts)
    outcome = RefinementOutcome(text=state.text, attempts=state.attempts, final_length=final_length)

    if route == "truncate":
        outcome.text = smart_truncate(state.text, window.max_chars)
        outcome.truncated = True
        outcome.warning = (
            f"The AI could not adjust the text in {max_attempts} attempts. "
            f"The result ({final_length} characters) was adjusted automatically."
        )
        logger.warning("Content truncated: %d -> %d chars", final_length, count_chars(outcome.text))
    elif route == "too_short":
        outcome.error = ContentLengthError(final_length, window.min_chars, window.max_chars).message
        logger.warning("Content still too short after %d attempts: %d chars", state.attempts, final_length)
    elif state.attempts > 0:
        outcome.warning = (
            f"The content was refined by the AI in {state.attempts} attempt(s) "
            f"to fit the requested length."
        )

    return outcome
