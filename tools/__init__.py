"""Tools package: Agent SDK client, retry wrapper, decoding, and text utilities."""

from tools.text_utils import (
    TargetWindow,
    count_chars,
    target_window,
    smart_truncate,
    preview,
)
from tools.llm_client import decode_response, decode_text, parse_json_response
from tools.retry import generate_with_retry, is_overloaded, backoff_delay
from tools.agent_sdk_client import AgentSDKClient

__all__ = [
    "AgentSDKClient",
    "TargetWindow",
    "count_chars",
    "target_window",
    "smart_truncate",
    "preview",
    "decode_response",
    "decode_text",
    "parse_json_response",
    "generate_with_retry",
    "is_overloaded",
    "backoff_delay",
]
