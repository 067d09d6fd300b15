"""Routing decisions for the length-refinement loop."""

from typing import Optional

from models.enums import RefineDirection
from tools.text_utils import TargetWindow


def refinement_direction(length: int, window: TargetWindow) -> Optional[RefineDirection]:
    """SHRINK above the window, GROW below it, None inside it."""
    if length > window.max_chars:
        return RefineDirection.SHRINK
    if length < window.min_chars:
        return RefineDirection.GROW
    return None


def route_after_attempt(length: int, window: TargetWindow, attempts: int, max_attempts: int) -> str:
    """Route after each check of the current text.

    Returns one of ``"refine"``, ``"accept"``, ``"truncate"`` or ``"too_short"``.
    """
    direction = refinement_direction(length, window)
    if direction is None:
        return "accept"
    if attempts < max_attempts:
        return "refine"
    if direction == RefineDirection.SHRINK:
        return "truncate"
    return "too_short"
