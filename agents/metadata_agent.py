"""Metadata Agent: titles, description, tags, call-to-action and thumbnail prompt."""

import logging
from typing import Optional

from agents.base_agent import BaseAgent, StatusCallback
from agents.prompts import (
    compose_cta,
    compose_description,
    compose_tags,
    compose_thumbnail,
    compose_titles,
)
from models.creation import GenerationParams

logger = logging.getLogger(__name__)


class MetadataAgent(BaseAgent):
    """Generates the publishing metadata around the main content."""

    async def generate_titles(
        self,
        params: GenerationParams,
        modification: Optional[str] = None,
        on_status: Optional[StatusCallback] = None,
    ) -> list[str]:
        titles = await self._run(compose_titles(params, modification), on_status)
        logger.info("Generated %d titles", len(titles))
        return titles

    async def generate_description(
        self,
        params: GenerationParams,
        modification: Optional[str] = None,
        on_status: Optional[StatusCallback] = None,
    ) -> str:
        request = compose_description(
            params, modification, max_chars=self.settings.description_max_chars
        )
        return await self._run(request, on_status)

    async def generate_tags(
        self,
        params: GenerationParams,
        modification: Optional[str] = None,
        on_status: Optional[StatusCallback] = None,
    ) -> list[str]:
        tags = await self._run(compose_tags(params, modification), on_status)
        logger.info("Generated %d tags", len(tags))
        return tags

    async def generate_cta(
        self,
        params: GenerationParams,
        modification: Optional[str] = None,
        on_status: Optional[StatusCallback] = None,
    ) -> str:
        return await self._run(compose_cta(params, modification), on_status)

    async def generate_thumbnail_prompt(
        self,
        params: GenerationParams,
        content: str,
        modification: Optional[str] = None,
        on_status: Optional[StatusCallback] = None,
    ) -> str:
        """English image prompt built from a preview of the current content."""
        request = compose_thumbnail(
            params,
            modification,
            content=content,
            preview_chars=self.settings.thumbnail_context_chars,
        )
        return await self._run(request, on_status)
