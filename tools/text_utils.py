"""Text utilities: character counting, target windows, smart truncation.

Lengths are measured in Unicode code points (``len(str)``) throughout.
"""

from typing import NamedTuple

# Target window: [max(WINDOW_FLOOR, count - WINDOW_PADDING), count + WINDOW_PADDING]
WINDOW_FLOOR = 100
WINDOW_PADDING = 500

ELLIPSIS = "..."
_SENTENCE_ENDS = (".", "!", "?")


class TargetWindow(NamedTuple):
    """Inclusive character-count range accepted for main content."""
    min_chars: int
    max_chars: int

    def contains(self, length: int) -> bool:
        return self.min_chars <= length <= self.max_chars

    def __str__(self) -> str:
        return f"{self.min_chars}-{self.max_chars}"


def count_chars(text: str) -> int:
    """Count characters as code points, the unit used by the length window."""
    return len(text or "")


def target_window(
    character_count: int,
    floor: int = WINDOW_FLOOR,
    padding: int = WINDOW_PADDING,
) -> TargetWindow:
    """Derive the acceptance window for a requested character count.

    The lower bound never drops below ``floor``, so small targets get a
    window wider on the upper side than on the lower one.
    """
    return TargetWindow(max(floor, character_count - padding), character_count + padding)


def smart_truncate(text: str, max_length: int) -> str:
    """Shorten text to ``max_length``, preferring natural boundaries.

    Cuts right after the last sentence terminator in the allowed prefix;
    failing that, at the last space with an ellipsis appended; failing that,
    hard-cuts at ``max_length`` with an ellipsis appended. A boundary at
    index 0 does not count.

    Text whose body fits and which already ends with the ellipsis is left
    alone, so truncating a truncated text is a no-op.
    """
    if len(text) <= max_length:
        return text
    if text.endswith(ELLIPSIS) and len(text) - len(ELLIPSIS) <= max_length:
        return text

    search_area = text[:max_length]

    last_sentence_end = max(search_area.rfind(mark) for mark in _SENTENCE_ENDS)
    if last_sentence_end > 0:
        return search_area[:last_sentence_end + 1]

    last_space = search_area.rfind(" ")
    if last_space > 0:
        return search_area[:last_space] + ELLIPSIS

    return search_area + ELLIPSIS


def preview(text: str, limit: int = 500) -> str:
    """Return the first ``limit`` characters of text followed by an ellipsis."""
    return f"{(text or '')[:limit]}{ELLIPSIS}"
