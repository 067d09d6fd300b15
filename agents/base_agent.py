"""Base agent class: LLM access, retry and response decoding."""

import logging
from typing import Any, Callable, Optional

from agents.prompts import PromptRequest
from config.settings import Settings
from tools.agent_sdk_client import AgentSDKClient
from tools.llm_client import decode_response
from tools.retry import generate_with_retry

logger = logging.getLogger(__name__)

StatusCallback = Callable[[str], None]


class BaseAgent:
    """Base class for all generation agents."""

    def __init__(
        self,
        llm_client: Optional[AgentSDKClient] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or Settings()
        self.llm = llm_client or AgentSDKClient(self.settings)

    async def _run(self, request: PromptRequest, on_status: Optional[StatusCallback] = None) -> Any:
        """Execute one retry-wrapped upstream request and decode its response."""
        text = await generate_with_retry(
            lambda: self.llm.generate(request.text, schema=request.schema),
            on_status=on_status,
            max_retries=self.settings.max_retries,
        )
        return decode_response(text, request.schema)
