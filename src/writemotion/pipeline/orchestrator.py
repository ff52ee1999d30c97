"""Blend orchestrator - owns editor state and sequences the pipeline agents."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from writemotion.clients.llm_client import LLMClient
from writemotion.config import AppConfig
from writemotion.errors import GenerationFailed, GenerationRefused, ShapeInvalid
from writemotion.library.author_library import AuthorLibrary, SortOrder
from writemotion.models.persona import ReferenceAuthor
from writemotion.models.rewrite import RewriteSuggestion
from writemotion.models.session import (
    TONE_SHIFTS,
    CycleState,
    EditorSettings,
    GenerationContext,
    SessionStats,
    UserProfile,
)
from writemotion.models.style import StyleMetrics
from writemotion.pipeline.persona_generator import PersonaGenerator
from writemotion.pipeline.rewrite_generator import RewriteGenerator
from writemotion.pipeline.style_analyst import StyleAnalyst

logger = logging.getLogger(__name__)

PhaseCallback = Callable[[str, str], None]


@dataclass
class EditorContext:
    """All mutable editor state. Only the orchestrator writes to it."""

    document: str = ""
    selection: str = ""
    settings: EditorSettings = field(default_factory=EditorSettings)
    stats: SessionStats = field(default_factory=SessionStats)
    profile: UserProfile = field(default_factory=UserProfile)
    suggestions: list[RewriteSuggestion] = field(default_factory=list)
    generation: GenerationContext | None = None
    cycle_state: CycleState = CycleState.IDLE


class BlendOrchestrator:
    """Coordinates analysis, persona generation and rewrite cycles.

    Analysis, persona and rewrite requests are independent slots; each slot
    allows one outstanding request. Rewrite responses carry a token from a
    monotonic sequence and are dropped if the scope changed meanwhile.
    """

    def __init__(
        self,
        llm: LLMClient,
        *,
        config: AppConfig | None = None,
        context: EditorContext | None = None,
        library: AuthorLibrary | None = None,
        on_phase: PhaseCallback | None = None,
    ):
        config = config or AppConfig()
        model = config.llm.fast_model
        max_tokens = config.llm.max_tokens
        self.analyst = StyleAnalyst(
            llm,
            model=model,
            min_length=config.analysis.min_length,
            max_chars=config.analysis.max_chars,
            temperature=config.analysis.temperature,
            max_tokens=max_tokens,
        )
        self.persona_generator = PersonaGenerator(
            llm, model=model, temperature=config.persona.temperature, max_tokens=max_tokens
        )
        self.rewriter = RewriteGenerator(
            llm,
            model=model,
            temperature=config.rewrite.temperature,
            mimicry_threshold=config.rewrite.mimicry_threshold,
            max_tokens=max_tokens,
        )
        self.library = library if library is not None else AuthorLibrary()
        self.context = context or EditorContext(
            settings=EditorSettings(
                blend_intensity=config.editor.blend_intensity,
                tone_shift=config.editor.tone,
            )
        )
        self.scope_mode = config.editor.scope_mode
        self.min_selection = config.editor.min_selection
        self.persist_by_default = config.persona.persist_by_default
        self.on_phase = on_phase

        self._request_seq = 0
        self._current_token: int | None = None
        self._in_flight: set[str] = set()

    def _notify(self, phase: str, detail: str = "") -> None:
        if self.on_phase:
            self.on_phase(phase, detail)

    @contextmanager
    def _slot(self, name: str) -> Iterator[None]:
        if name in self._in_flight:
            raise GenerationRefused(f"A {name} request is already in flight")
        self._in_flight.add(name)
        try:
            yield
        finally:
            self._in_flight.discard(name)

    def is_busy(self, slot: str) -> bool:
        return slot in self._in_flight

    def _invalidate_pending(self) -> None:
        if self._current_token is not None:
            logger.debug("Scope changed, dropping pending rewrite %d", self._current_token)
        self._current_token = None

    # --- Document & scope -------------------------------------------------

    def set_document(self, text: str) -> None:
        if text != self.context.document:
            self._invalidate_pending()
        self.context.document = text

    def set_selection(self, text: str) -> None:
        """Record the active span; spans too short to matter count as none."""
        span = text if text and len(text) > self.min_selection else ""
        if span != self.context.selection:
            self._invalidate_pending()
        self.context.selection = span

    def scope(self) -> GenerationContext:
        if self.scope_mode == "auto" and self.context.selection:
            return GenerationContext(scope="selection", original_text=self.context.selection)
        return GenerationContext(scope="full", original_text=self.context.document)

    # --- Settings ---------------------------------------------------------

    def toggle_author(self, author_id: str) -> list[str]:
        """Select or deselect an author; returns the selected ids, oldest first."""
        if self.library.get(author_id) is None:
            raise KeyError(author_id)
        self.context.settings.toggle_author(author_id)
        return list(self.context.settings.target_author_ids)

    def clear_authors(self) -> None:
        self.context.settings.target_author_ids = []

    def selected_authors(self) -> list[ReferenceAuthor]:
        found = (self.library.get(i) for i in self.context.settings.target_author_ids)
        return [a for a in found if a is not None]

    def authors(
        self,
        query: str = "",
        sort: SortOrder = "name",
        selected_only: bool = False,
    ) -> list[ReferenceAuthor]:
        only = self.context.settings.target_author_ids if selected_only else None
        return self.library.search(query, sort=sort, only_ids=only)

    def set_intensity(self, value: float) -> float:
        value = max(0.0, min(1.0, float(value)))
        self.context.settings.blend_intensity = value
        return value

    def set_tone(self, tone: str) -> None:
        if tone not in TONE_SHIFTS:
            raise ValueError(f"Unknown tone {tone!r}; expected one of {', '.join(TONE_SHIFTS)}")
        self.context.settings.tone_shift = tone

    # --- Profile ----------------------------------------------------------

    async def analyze_sample(self, text: str) -> StyleMetrics:
        """Fingerprint a writing sample and store it as the user's baseline."""
        with self._slot("analysis"):
            self._notify("analysis", f"Analyzing {len(text)} characters")
            metrics = await self.analyst.analyze(text)
        self.context.profile = self.context.profile.model_copy(
            update={"has_analyzed_samples": True, "base_style": metrics, "sample_text": text}
        )
        self._notify("analysis_done", "")
        return metrics

    def reset_profile(self) -> None:
        self.context.profile = UserProfile(name=self.context.profile.name)

    # --- Personas ---------------------------------------------------------

    async def add_persona(self, name: str, *, persist: bool | None = None) -> ReferenceAuthor | None:
        """Generate a persona, add it to the library and select it.

        Returns None (library untouched) when generation fails.
        """
        if not name or not name.strip():
            return None
        persist = self.persist_by_default if persist is None else persist
        with self._slot("persona"):
            self._notify("persona", f"Profiling {name.strip()}")
            author = await self.persona_generator.generate(name, taken_ids=self.library.ids())
        if author is None:
            return None
        self.library.add(author, persist=persist)
        self.toggle_author(author.id)
        return author

    # --- Rewrite cycle ----------------------------------------------------

    async def generate(self) -> list[RewriteSuggestion]:
        """Run one rewrite cycle over the current scope.

        Raises:
            GenerationRefused: blank scope, no selected author, or a rewrite
                already in flight. No request is issued.
        """
        if self.is_busy("rewrite"):
            raise GenerationRefused("A rewrite request is already in flight")
        scope = self.scope()
        if not scope.original_text.strip():
            raise GenerationRefused("Nothing to rewrite")
        authors = self.selected_authors()
        if not authors:
            raise GenerationRefused("Select at least one reference author")

        settings = self.context.settings
        self._request_seq += 1
        token = self._current_token = self._request_seq

        with self._slot("rewrite"):
            self.context.generation = scope
            self.context.suggestions = []
            self.context.cycle_state = CycleState.REQUESTING
            self._notify("rewrite", f"Blending with {' + '.join(a.name for a in authors)}")
            try:
                batch = await self.rewriter.request(
                    scope.original_text,
                    self.context.profile.base_style,
                    [a.name for a in authors],
                    settings.blend_intensity,
                    settings.tone_shift,
                )
                outcome = CycleState.DELIVERED
            except (GenerationFailed, ShapeInvalid, ValueError):
                logger.exception("Rewrite cycle %d failed", token)
                batch = []
                outcome = CycleState.FAILED

        if token != self._current_token:
            logger.info("Discarding stale rewrite response %d", token)
            if self.context.cycle_state is CycleState.REQUESTING:
                self.context.cycle_state = CycleState.IDLE
                self.context.generation = None
            return []

        self._current_token = None
        self.context.suggestions = batch
        self.context.cycle_state = outcome
        self.context.stats.suggestions_generated += len(batch)
        self._notify("rewrite_done", f"{len(batch)} candidates")
        return list(batch)

    def commit(self, suggestion_id: str) -> str:
        """Apply one candidate to the document and discard the rest.

        Raises:
            KeyError: no batch, or ``suggestion_id`` is not in it.
            ValueError: the span the batch was generated from is no longer
                in the document.
        """
        generation = self.context.generation
        suggestion = next((s for s in self.context.suggestions if s.id == suggestion_id), None)
        if generation is None or suggestion is None:
            raise KeyError(suggestion_id)

        document = self.context.document
        if generation.scope == "selection":
            if generation.original_text not in document:
                raise ValueError("The selected text is no longer in the document")
            document = document.replace(generation.original_text, suggestion.rewritten_text, 1)
        else:
            document = suggestion.rewritten_text

        self.context.document = document
        self.context.selection = ""
        self.context.stats.suggestions_accepted += 1
        self._end_cycle()
        return document

    def discard(self) -> None:
        self._invalidate_pending()
        self._end_cycle()

    def _end_cycle(self) -> None:
        self.context.suggestions = []
        self.context.generation = None
        self.context.cycle_state = CycleState.IDLE
