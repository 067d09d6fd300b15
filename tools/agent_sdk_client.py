"""Claude Agent SDK wrapper used for every upstream generation call."""

import json
import logging
from typing import Optional

from claude_agent_sdk import (
    query,
    ClaudeAgentOptions,
    ResultMessage,
    AssistantMessage,
)

from config.exceptions import CredentialRequiredError, LLMError, LLMOverloadedError
from config.settings import Settings
from models.schemas import ResponseSchema

logger = logging.getLogger(__name__)

# HTTP statuses the API uses for temporary capacity exhaustion
_OVERLOAD_STATUSES = {503, 529}


def _is_overload_status(status) -> bool:
    return isinstance(status, int) and status in _OVERLOAD_STATUSES


class AgentSDKClient:
    """Single-turn text/JSON generation through ``claude_agent_sdk.query()``.

    The API key is passed to the bundled CLI through its environment; a
    missing key fails before any request is attempted.
    """

    def __init__(self, settings: Optional[Settings] = None, api_key: Optional[str] = None):
        self.settings = settings or Settings()
        self.api_key = api_key if api_key is not None else self.settings.anthropic_api_key
        self.total_calls = 0

    def _require_credential(self) -> str:
        key = (self.api_key or "").strip()
        if not key:
            raise CredentialRequiredError()
        return key

    async def generate(
        self,
        prompt: str,
        schema: Optional[ResponseSchema] = None,
        model: Optional[str] = None,
    ) -> str:
        """Send one request and return the response text.

        Args:
            prompt: Request text.
            schema: Optional JSON shape; structured output is returned
                re-serialized as JSON text.
            model: Model name override.

        Returns:
            The model's text (or JSON text) response.

        Raises:
            CredentialRequiredError: No API key configured.
            LLMOverloadedError: The service reported overload (503/529).
            LLMError: Any other failure.
        """
        api_key = self._require_credential()
        model = model or self.settings.llm_model
        self.total_calls += 1

        logger.debug("AgentSDK call: model=%s, schema=%s, prompt=%d chars",
                      model, bool(schema), len(prompt))

        options_kwargs = {
            "model": model,
            "max_turns": 1,
            "env": {"ANTHROPIC_API_KEY": api_key},
        }
        if schema is not None:
            options_kwargs["output_format"] = {
                "type": "json_schema",
                "schema": schema.to_json_schema(),
            }

        result_message: Optional[ResultMessage] = None
        streamed_text = ""
        try:
            # query() must be exhausted; leaving the async for early trips
            # anyio's cancel scope.
            async for message in query(
                prompt=prompt,
                options=ClaudeAgentOptions(**options_kwargs),
            ):
                if isinstance(message, ResultMessage):
                    result_message = message
                elif isinstance(message, AssistantMessage):
                    for block in message.content:
                        text = getattr(block, "text", None)
                        if text:
                            streamed_text += text
        except Exception as e:
            status = getattr(e, "api_error_status", None)
            if _is_overload_status(status) or "overloaded" in str(e).lower():
                raise LLMOverloadedError(f"Model overloaded: {e}", status=status) from e
            raise LLMError(f"Agent SDK query failed: {e}") from e

        return self._result_text(result_message, streamed_text)

    @staticmethod
    def _result_text(result: Optional[ResultMessage], streamed_text: str) -> str:
        if result is None:
            if not streamed_text:
                logger.warning("AgentSDK returned no content")
            return streamed_text

        if result.is_error:
            status = getattr(result, "api_error_status", None)
            detail = result.result or "; ".join(getattr(result, "errors", None) or []) or "unknown error"
            if _is_overload_status(status) or "overloaded" in detail.lower():
                raise LLMOverloadedError(f"Model overloaded: {detail}", status=status)
            raise LLMError(detail, {"status": status} if status else None)

        logger.debug("AgentSDK result: %d chars, cost=$%s",
                     len(result.result or streamed_text), result.total_cost_usd)

        if result.structured_output is not None:
            return json.dumps(result.structured_output, ensure_ascii=False)
        return result.result or streamed_text
