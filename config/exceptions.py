"""Custom exception hierarchy for the versecraft generation workflow."""

from typing import Optional


class VerseCraftError(Exception):
    """Base exception for all versecraft errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# ---- Configuration Errors ----

class ConfigurationError(VerseCraftError):
    """Configuration is missing or unusable."""


class CredentialRequiredError(ConfigurationError):
    """No API key is available for the LLM service."""

    def __init__(self, message: str = "An API key is required before generating content."):
        super().__init__(message)


# ---- LLM Errors ----

class LLMError(VerseCraftError):
    """Base exception for LLM API errors."""


class LLMOverloadedError(LLMError):
    """The LLM service is temporarily unavailable (overloaded)."""

    def __init__(
        self,
        message: str = "The model seems to be overloaded. Please try again later.",
        status: Optional[int] = None,
    ):
        details = {"status": status} if status is not None else {}
        super().__init__(message, details)
        self.status = status


class LLMResponseParseError(LLMError):
    """Failed to parse LLM response."""

    def __init__(
        self,
        message: str = "The AI response was not in the expected JSON format.",
        raw_response: str = "",
    ):
        super().__init__(message)
        self.raw_response = raw_response


# ---- Database Errors ----

class DatabaseError(VerseCraftError):
    """History store operation failed."""


# ---- Workflow Errors ----

class WorkflowError(VerseCraftError):
    """Base exception for generation orchestration errors."""


class ActionInProgressError(WorkflowError):
    """Another generation action is already running for this session."""

    def __init__(self, running: str, requested: str):
        super().__init__(
            f"Cannot start '{requested}' while '{running}' is still running",
            {"running": running, "requested": requested},
        )
        self.running = running
        self.requested = requested


# ---- Validation Errors ----

class ValidationError(VerseCraftError):
    """Input validation failed."""


class InvalidParamsError(ValidationError):
    """Generation parameters are invalid."""


class ContentLengthError(ValidationError):
    """Generated content length is outside the target window."""

    def __init__(self, actual: int, min_chars: int, max_chars: int):
        super().__init__(
            f"The AI could not refine the content to the requested range "
            f"({min_chars}-{max_chars}). The final result has {actual} characters.",
        )
        self.actual = actual
        self.min_chars = min_chars
        self.max_chars = max_chars
