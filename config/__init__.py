"""Configuration package: settings, logging, and exceptions."""

from config.exceptions import (
    VerseCraftError,
    ConfigurationError,
    CredentialRequiredError,
    LLMError,
    LLMOverloadedError,
    LLMResponseParseError,
    DatabaseError,
    WorkflowError,
    ActionInProgressError,
    ValidationError,
    InvalidParamsError,
    ContentLengthError,
)
from config.logging_config import setup_logging
from config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "VerseCraftError",
    "ConfigurationError",
    "CredentialRequiredError",
    "LLMError",
    "LLMOverloadedError",
    "LLMResponseParseError",
    "DatabaseError",
    "WorkflowError",
    "ActionInProgressError",
    "ValidationError",
    "InvalidParamsError",
    "ContentLengthError",
]
