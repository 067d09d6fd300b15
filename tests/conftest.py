"""Shared pytest fixtures for the versecraft test suite."""

import pytest
from unittest.mock import MagicMock, AsyncMock


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_db_path(tmp_path):
    """Return a temporary SQLite database path."""
    return tmp_path / "test_history.db"


@pytest.fixture
def store(tmp_db_path):
    """Return an initialized HistoryStore backed by a temp file."""
    from models.database import HistoryStore
    return HistoryStore(tmp_db_path)


# ---------------------------------------------------------------------------
# Settings fixture
# ---------------------------------------------------------------------------

@pytest.fixture
def settings(tmp_path):
    """Return a Settings instance with all paths pointing to tmp_path."""
    from config.settings import Settings
    return Settings(
        anthropic_api_key="test-key",
        history_db_path=tmp_path / "history.db",
        log_dir=tmp_path / "logs",
        _env_file=None,
    )


# ---------------------------------------------------------------------------
# LLM Client mocks
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_llm(settings):
    """Return a MagicMock replacing AgentSDKClient with an async generate()."""
    llm = MagicMock()
    llm.generate = AsyncMock(return_value="Uma história de teste.")
    llm.api_key = "test-key"
    llm.settings = settings
    return llm


@pytest.fixture
def no_sleep(monkeypatch):
    """Make retry backoff instantaneous and record the requested delays."""
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr("tools.retry.asyncio.sleep", fake_sleep)
    return delays


# ---------------------------------------------------------------------------
# Sample data fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def params():
    """Return story parameters with a 1000-character target (window 500-1500)."""
    from models.creation import GenerationParams
    from models.enums import CreationType
    return GenerationParams(
        main_prompt="Davi e Golias",
        creation_type=CreationType.STORY,
        character_count=1000,
        language="pt-BR",
    )


@pytest.fixture
def sample_bundle():
    from models.creation import ArtifactBundle
    return ArtifactBundle(
        content="No vale de Elá, um jovem pastor enfrentou o gigante.",
        titles=["O Pastor e o Gigante", "Fé Contra Gigantes"],
        description="A coragem de Davi diante de Golias.",
        tags=["davi", "golias", "fé"],
        cta="Curta e compartilhe!",
        thumbnail_prompt="A young shepherd facing a giant warrior, dramatic light",
    )


@pytest.fixture
def sample_creation(store, params, sample_bundle):
    """Insert and return a saved Creation."""
    from models.creation import Creation
    creation = Creation(id="creation-000000000001", params=params, bundle=sample_bundle, created_at=1000)
    store.upsert(creation)
    return creation
