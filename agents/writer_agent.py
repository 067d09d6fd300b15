"""Writer Agent: idea enhancement, main content and the all-in-one bundle."""

import logging
from typing import Optional

from agents.base_agent import BaseAgent, StatusCallback
from agents.prompts import compose_all_content, compose_content, compose_enhance_idea
from models.creation import ArtifactBundle, GenerationParams
from models.enums import CreationType

logger = logging.getLogger(__name__)


class WriterAgent(BaseAgent):
    """Generates the main story or prayer text."""

    async def enhance_idea(
        self,
        params: GenerationParams,
        on_status: Optional[StatusCallback] = None,
    ) -> str:
        """Return a richer version of the main idea.

        Only stories are enhanced; a prayer idea is returned unchanged
        without contacting the service.
        """
        if params.creation_type != CreationType.STORY:
            return params.main_prompt
        logger.info("Enhancing story idea (%d chars)", len(params.main_prompt))
        return await self._run(compose_enhance_idea(params), on_status)

    async def write_content(
        self,
        params: GenerationParams,
        modification: Optional[str] = None,
        on_status: Optional[StatusCallback] = None,
    ) -> str:
        request = compose_content(
            params,
            modification,
            floor=self.settings.window_floor,
            padding=self.settings.window_padding,
        )
        logger.info("Writing %s (target %d chars)", params.creation_type.value, params.character_count)
        content = await self._run(request, on_status)
        logger.info("Content written: %d chars", len(content))
        return content

    async def write_bundle(
        self,
        params: GenerationParams,
        on_status: Optional[StatusCallback] = None,
    ) -> ArtifactBundle:
        """Generate every artifact in one structured request.

        The content length is not enforced here; see workflow.refinement.
        """
        request = compose_all_content(
            params,
            floor=self.settings.window_floor,
            padding=self.settings.window_padding,
            description_max_chars=self.settings.description_max_chars,
        )
        logger.info("Generating full bundle for %s", params.creation_type.value)
        data = await self._run(request, on_status)
        bundle = ArtifactBundle(
            content=data["content"],
            titles=data["titles"],
            description=data["description"],
            tags=data["tags"],
            cta=data["cta"],
            thumbnail_prompt=data["thumbnailPrompt"],
        )
        logger.info(
            "Bundle generated: content=%d chars, %d titles, %d tags",
            len(bundle.content), len(bundle.titles), len(bundle.tags),
        )
        return bundle
