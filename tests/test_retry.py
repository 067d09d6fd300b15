"""Tests for overload classification and the retry wrapper."""

import pytest
from unittest.mock import AsyncMock, MagicMock


class TestIsOverloaded:
    def test_overloaded_error_class(self):
        from config.exceptions import LLMOverloadedError
        from tools.retry import is_overloaded
        assert is_overloaded(LLMOverloadedError())

    @pytest.mark.parametrize("message", [
        "HTTP 503 Service Unavailable",
        "Error 529",
        "Model is OVERLOADED",
        "service unavailable",
    ])
    def test_message_markers(self, message):
        from tools.retry import is_overloaded
        assert is_overloaded(RuntimeError(message))

    def test_cause_status_unavailable(self):
        from tools.retry import is_overloaded
        cause = MagicMock()
        cause.status = "UNAVAILABLE"
        error = RuntimeError("upstream failed")
        error.__cause__ = cause
        assert is_overloaded(error)

    def test_other_errors_not_overloaded(self):
        from config.exceptions import LLMError
        from tools.retry import is_overloaded
        assert not is_overloaded(LLMError("400 bad request"))
        assert not is_overloaded(ValueError("boom"))


class TestBackoffDelay:
    def test_delays_double(self):
        from tools.retry import backoff_delay
        assert [backoff_delay(a) for a in range(3)] == [2, 4, 8]


class TestGenerateWithRetry:
    @pytest.mark.asyncio
    async def test_success_first_try(self, no_sleep):
        from tools.retry import generate_with_retry
        call = AsyncMock(return_value="ok")
        assert await generate_with_retry(call) == "ok"
        assert call.await_count == 1
        assert no_sleep == []

    @pytest.mark.asyncio
    async def test_recovers_after_overload(self, no_sleep):
        from config.exceptions import LLMOverloadedError
        from tools.retry import generate_with_retry
        call = AsyncMock(side_effect=[LLMOverloadedError(), LLMOverloadedError(), "ok"])
        statuses = []
        result = await generate_with_retry(call, on_status=statuses.append)
        assert result == "ok"
        assert call.await_count == 3
        assert no_sleep == [2, 4]
        assert statuses[0] == "The model is overloaded. Retrying in 2s... (1/3)"
        assert statuses[1] == "The model is overloaded. Retrying in 4s... (2/3)"

    @pytest.mark.asyncio
    async def test_exhausts_after_four_attempts(self, no_sleep):
        from config.exceptions import LLMOverloadedError
        from tools.retry import generate_with_retry
        call = AsyncMock(side_effect=LLMOverloadedError())
        with pytest.raises(LLMOverloadedError) as exc_info:
            await generate_with_retry(call)
        assert call.await_count == 4
        assert no_sleep == [2, 4, 8]
        assert "overloaded" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_foreign_overload_exception_retried(self, no_sleep):
        from tools.retry import generate_with_retry
        call = AsyncMock(side_effect=[RuntimeError("503 unavailable"), "ok"])
        assert await generate_with_retry(call) == "ok"
        assert no_sleep == [2]

    @pytest.mark.asyncio
    async def test_non_overload_fails_immediately(self, no_sleep):
        from config.exceptions import LLMError
        from tools.retry import generate_with_retry
        call = AsyncMock(side_effect=LLMError("bad request"))
        with pytest.raises(LLMError, match="bad request"):
            await generate_with_retry(call)
        assert call.await_count == 1
        assert no_sleep == []

    @pytest.mark.asyncio
    async def test_foreign_error_wrapped(self, no_sleep):
        from config.exceptions import LLMError
        from tools.retry import generate_with_retry
        call = AsyncMock(side_effect=ValueError("boom"))
        with pytest.raises(LLMError, match="boom"):
            await generate_with_retry(call)
        assert call.await_count == 1

    @pytest.mark.asyncio
    async def test_credential_error_not_retried(self, no_sleep):
        from config.exceptions import CredentialRequiredError
        from tools.retry import generate_with_retry
        call = AsyncMock(side_effect=CredentialRequiredError())
        with pytest.raises(CredentialRequiredError):
            await generate_with_retry(call)
        assert call.await_count == 1

    @pytest.mark.asyncio
    async def test_zero_retries_means_single_attempt(self, no_sleep):
        from config.exceptions import LLMOverloadedError
        from tools.retry import generate_with_retry
        call = AsyncMock(side_effect=LLMOverloadedError())
        with pytest.raises(LLMOverloadedError):
            await generate_with_retry(call, max_retries=0)
        assert call.await_count == 1
        assert no_sleep == []

    @pytest.mark.asyncio
    async def test_injected_sleep(self):
        from config.exceptions import LLMOverloadedError
        from tools.retry import generate_with_retry
        sleep = AsyncMock()
        call = AsyncMock(side_effect=[LLMOverloadedError(), "ok"])
        assert await generate_with_retry(call, sleep=sleep) == "ok"
        sleep.assert_awaited_once_with(2)
