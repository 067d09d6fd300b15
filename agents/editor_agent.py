"""Editor Agent: summarizes or expands content toward the target length."""

import logging
from typing import Optional

from agents.base_agent import BaseAgent, StatusCallback
from agents.prompts import compose_refinement
from models.creation import GenerationParams
from models.enums import RefineDirection

logger = logging.getLogger(__name__)


class EditorAgent(BaseAgent):
    """Adjusts content length while keeping the story complete."""

    async def refine_length(
        self,
        params: GenerationParams,
        text: str,
        direction: RefineDirection,
        on_status: Optional[StatusCallback] = None,
    ) -> str:
        """Ask the model to shrink (summarize) or grow (expand) ``text``.

        Args:
            params: Parameters of the creation being refined.
            text: Current content.
            direction: SHRINK when the text is too long, GROW when too short.
            on_status: Optional sink for retry notices.

        Returns:
            The refined text (its length is checked by the caller).
        """
        request = compose_refinement(
            params,
            text,
            direction,
            floor=self.settings.window_floor,
            padding=self.settings.window_padding,
        )
        logger.info("Refining content (%s): %d chars", direction.value, len(text))
        refined = await self._run(request, on_status)
        logger.info("Refinement complete: %d -> %d chars", len(text), len(refined))
        return refined
