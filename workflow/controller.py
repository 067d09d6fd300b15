"""Generation controller: named transitions over one session's state.

Each action snapshots the inputs before its first await, runs its upstream
calls, and commits state only on success. Failures are recorded on the
session and returned; they never propagate out of an action. Only one
action may run at a time.
"""

import logging
from typing import Any, Awaitable, Callable, Optional

from agents.editor_agent import EditorAgent
from agents.metadata_agent import MetadataAgent
from agents.writer_agent import WriterAgent
from config.exceptions import (
    ActionInProgressError,
    InvalidParamsError,
    VerseCraftError,
)
from config.settings import Settings, get_settings
from models.creation import ArtifactBundle, Creation, GenerationParams, new_creation_id, now_ms
from models.database import HistoryStore
from models.enums import ArtifactKind, CreationType, RefineDirection
from tools.agent_sdk_client import AgentSDKClient
from tools.text_utils import target_window
from workflow.callbacks import StatusCallback, safe_status
from workflow.refinement import RefinementOutcome, refine_to_window
from workflow.state import ActionResult, SessionInputs, SessionState

logger = logging.getLogger(__name__)


def resolve_api_key(settings: Settings, store: Optional[HistoryStore] = None) -> Optional[str]:
    """Explicit settings/env key first, then the key saved in the local store."""
    if settings.anthropic_api_key:
        return settings.anthropic_api_key
    if store is not None:
        return store.get_api_key()
    return None


class GenerationController:
    """Owns a SessionState and exposes every generation action."""

    def __init__(
        self,
        store: HistoryStore,
        llm_client: Optional[AgentSDKClient] = None,
        settings: Optional[Settings] = None,
        on_status: Optional[StatusCallback] = None,
    ):
        self.settings = settings or get_settings()
        self.store = store
        self.llm = llm_client or AgentSDKClient(self.settings, api_key=resolve_api_key(self.settings, store))
        self.writer = WriterAgent(self.llm, self.settings)
        self.editor = EditorAgent(self.llm, self.settings)
        self.metadata = MetadataAgent(self.llm, self.settings)
        self._sink = safe_status(on_status)
        self.state = SessionState(
            inputs=self._default_inputs(),
            history=store.list_creations(),
        )

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    def _default_inputs(self, keep: Optional[SessionInputs] = None) -> SessionInputs:
        if keep is not None:
            return SessionInputs(
                creation_type=keep.creation_type,
                character_count=keep.character_count,
                language=keep.language,
            )
        return SessionInputs(
            character_count=self.settings.default_character_count,
            language=self.settings.default_language,
        )

    def _report(self, message: str) -> None:
        self.state.status = message
        self._sink(message)

    def _ensure_idle(self, action: str) -> None:
        if self.state.in_flight:
            raise ActionInProgressError(self.state.in_flight, action)

    async def _execute(
        self,
        action: str,
        operation: Callable[[], Awaitable[ActionResult]],
        error_prefix: str = "",
    ) -> ActionResult:
        """Run one action under the single-flight guard.

        Raises:
            ActionInProgressError: Another action is still running.
        """
        self._ensure_idle(action)
        self.state.in_flight = action
        self.state.error = None
        self.state.warning = None
        try:
            result = await operation()
        except VerseCraftError as e:
            message = f"{error_prefix}{e.message}"
            logger.error("Action '%s' failed: %s", action, e)
            self.state.error = message
            return ActionResult(ok=False, error=message)
        finally:
            self.state.in_flight = None
            self.state.status = None
        self.state.error = result.error
        self.state.warning = result.warning
        return result

    def _snapshot(self) -> GenerationParams:
        params = self.state.inputs.snapshot()
        if not params.main_prompt.strip():
            raise InvalidParamsError("Please enter the main idea for the generation.")
        return params

    async def _refine_content(self, params: GenerationParams, text: str) -> RefinementOutcome:
        window = target_window(
            params.character_count,
            floor=self.settings.window_floor,
            padding=self.settings.window_padding,
        )

        async def refine(current: str, direction: RefineDirection) -> str:
            return await self.editor.refine_length(params, current, direction, self._report)

        return await refine_to_window(
            text,
            window,
            refine,
            max_attempts=self.settings.max_refinement_attempts,
            on_status=self._report,
        )

    async def _generate_single(
        self,
        kind: ArtifactKind,
        params: GenerationParams,
        modification: Optional[str],
        content: str,
    ) -> Any:
        if kind == ArtifactKind.CONTENT:
            return await self.writer.write_content(params, modification, self._report)
        if kind == ArtifactKind.TITLES:
            return await self.metadata.generate_titles(params, modification, self._report)
        if kind == ArtifactKind.DESCRIPTION:
            return await self.metadata.generate_description(params, modification, self._report)
        if kind == ArtifactKind.TAGS:
            return await self.metadata.generate_tags(params, modification, self._report)
        if kind == ArtifactKind.CTA:
            return await self.metadata.generate_cta(params, modification, self._report)
        if kind == ArtifactKind.THUMBNAIL:
            return await self.metadata.generate_thumbnail_prompt(params, content, modification, self._report)
        raise InvalidParamsError(f"Unknown artifact kind: {kind}")

    def _save_creation(self, params: GenerationParams, bundle: ArtifactBundle) -> Creation:
        """Upsert the current creation, minting an id on first save.

        New creations go to the front of the history; existing ones are
        replaced in place and keep their id and creation time.
        """
        creation_id = self.state.current_creation_id or new_creation_id()
        index, existing = self.state.find_creation(creation_id)
        creation = Creation(
            id=creation_id,
            params=params,
            bundle=bundle,
            created_at=existing.created_at if existing else now_ms(),
        )
        self.store.upsert(creation)
        if index >= 0:
            self.state.history[index] = creation
        else:
            self.state.history.insert(0, creation)
        self.state.current_creation_id = creation.id
        return creation

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    async def enhance_idea(self) -> ActionResult:
        """Replace the main idea with an enhanced version (stories only)."""

        async def operation() -> ActionResult:
            params = self._snapshot()
            if params.creation_type != CreationType.STORY:
                return ActionResult(ok=True, value=params.main_prompt)
            enhanced = await self.writer.enhance_idea(params, self._report)
            self.state.inputs.main_prompt = enhanced
            return ActionResult(ok=True, value=enhanced)

        return await self._execute("enhance_idea", operation, "Error enhancing idea: ")

    async def generate_artifact(
        self,
        kind: ArtifactKind,
        modification: Optional[str] = None,
    ) -> ActionResult:
        """Generate one artifact with a single upstream call and commit it."""

        async def operation() -> ActionResult:
            params = self._snapshot()
            content = self.state.bundle.content
            value = await self._generate_single(kind, params, modification, content)
            self.state.bundle = self.state.bundle.replace(kind, value)
            return ActionResult(ok=True, value=value)

        return await self._execute(f"generate_{kind.value}", operation)

    async def generate_all(self) -> ActionResult:
        """Generate the full bundle, fit its content to the window, and save it."""

        async def operation() -> ActionResult:
            params = self._snapshot()
            self._report("Generating all content...")
            bundle = await self.writer.write_bundle(params, self._report)
            outcome = await self._refine_content(params, bundle.content)
            bundle = bundle.replace(ArtifactKind.CONTENT, outcome.text)
            creation = self._save_creation(params, bundle)
            self.state.bundle = bundle
            logger.info("Creation %s saved (%d content chars)", creation.id, len(bundle.content))
            return ActionResult(ok=True, value=bundle, error=outcome.error, warning=outcome.warning)

        return await self._execute("generate_all", operation)

    async def regenerate(self, kind: ArtifactKind, modification: str = "") -> ActionResult:
        """Regenerate one artifact, steered by ``modification``.

        Content is refined exactly as in :meth:`generate_all`. When the
        session has a saved creation its history record is updated in place.
        """

        async def operation() -> ActionResult:
            params = self._snapshot()
            content = self.state.bundle.content
            value = await self._generate_single(kind, params, modification or None, content)
            outcome = None
            if kind == ArtifactKind.CONTENT:
                outcome = await self._refine_content(params, value)
                value = outcome.text
            bundle = self.state.bundle.replace(kind, value)
            if self.state.current_creation_id:
                self._save_creation(params, bundle)
            self.state.bundle = bundle
            return ActionResult(
                ok=True,
                value=value,
                error=outcome.error if outcome else None,
                warning=outcome.warning if outcome else None,
            )

        return await self._execute(f"regenerate_{kind.value}", operation, "Error regenerating: ")

    # ------------------------------------------------------------------
    # Synchronous transitions
    # ------------------------------------------------------------------

    def update_inputs(self, **changes) -> SessionInputs:
        """Edit form inputs. In-flight actions keep their own snapshot."""
        for key, value in changes.items():
            if not hasattr(self.state.inputs, key):
                raise InvalidParamsError(f"Unknown input field: {key}")
            if key == "creation_type":
                try:
                    value = CreationType(value)
                except ValueError:
                    raise InvalidParamsError(
                        f"Unknown creation type: {value}", {"creation_type": value}
                    ) from None
            setattr(self.state.inputs, key, value)
        return self.state.inputs

    def new_project(self) -> None:
        self._ensure_idle("new_project")
        self.state.inputs = self._default_inputs(keep=self.state.inputs)
        self.state.bundle = ArtifactBundle()
        self.state.current_creation_id = None
        self.state.error = None
        self.state.warning = None

    def load_creation(self, creation_id: str) -> Optional[Creation]:
        """Make a saved creation the current session. Returns None if unknown."""
        self._ensure_idle("load_creation")
        _, creation = self.state.find_creation(creation_id)
        if creation is None:
            creation = self.store.get(creation_id)
        if creation is None:
            return None
        self.state.inputs = SessionInputs.from_params(creation.params)
        self.state.bundle = creation.bundle
        self.state.current_creation_id = creation.id
        self.state.error = None
        self.state.warning = None
        return creation

    def delete_creation(self, creation_id: str) -> bool:
        """Delete a saved creation; deleting the current one starts a new project."""
        self._ensure_idle("delete_creation")
        removed = self.store.delete(creation_id)
        self.state.history = [c for c in self.state.history if c.id != creation_id]
        if self.state.current_creation_id == creation_id:
            self.new_project()
        return removed

    def set_api_key(self, api_key: str) -> None:
        """Save the API key locally and use it for subsequent calls."""
        self.store.save_api_key(api_key)
        self.llm.api_key = api_key.strip()

    def remove_api_key(self) -> None:
        self.store.delete_api_key()
        self.llm.api_key = self.settings.anthropic_api_key
