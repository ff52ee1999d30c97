"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from writemotion.models.session import TONE_SHIFTS


def _check_range(name: str, value: float, low: float, high: float) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")


@dataclass(frozen=True)
class LLMConfig:
    fast_model: str = "claude-haiku-4-5-20251001"
    timeout: int = 60
    max_tokens: int = 4096

    def __post_init__(self) -> None:
        _check_range("timeout", self.timeout, 1, 600)
        _check_range("max_tokens", self.max_tokens, 256, 64000)


@dataclass(frozen=True)
class AnalysisConfig:
    min_length: int = 50
    max_chars: int = 2000
    temperature: float = 0.4

    def __post_init__(self) -> None:
        _check_range("min_length", self.min_length, 0, 10000)
        _check_range("max_chars", self.max_chars, 100, 100000)
        _check_range("temperature", self.temperature, 0.0, 1.0)


@dataclass(frozen=True)
class PersonaConfig:
    temperature: float = 0.7
    persist_by_default: bool = False

    def __post_init__(self) -> None:
        _check_range("temperature", self.temperature, 0.0, 1.0)


@dataclass(frozen=True)
class RewriteConfig:
    temperature: float = 0.85
    mimicry_threshold: float = 0.8

    def __post_init__(self) -> None:
        _check_range("temperature", self.temperature, 0.0, 1.0)
        _check_range("mimicry_threshold", self.mimicry_threshold, 0.0, 1.0)


@dataclass(frozen=True)
class EditorConfig:
    blend_intensity: float = 0.5
    tone: str = "neutral"
    scope_mode: str = "auto"  # "auto" uses a selection when present, "full" ignores it
    min_selection: int = 5

    def __post_init__(self) -> None:
        _check_range("blend_intensity", self.blend_intensity, 0.0, 1.0)
        _check_range("min_selection", self.min_selection, 0, 1000)
        if self.tone not in TONE_SHIFTS:
            raise ValueError(f"tone must be one of {', '.join(TONE_SHIFTS)}, got {self.tone!r}")
        if self.scope_mode not in ("auto", "full"):
            raise ValueError(f"scope_mode must be 'auto' or 'full', got {self.scope_mode!r}")


@dataclass(frozen=True)
class LibraryConfig:
    db_path: str = "~/.writemotion/personas.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    persona: PersonaConfig = field(default_factory=PersonaConfig)
    rewrite: RewriteConfig = field(default_factory=RewriteConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)
    library: LibraryConfig = field(default_factory=LibraryConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path.home() / ".writemotion" / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        analysis=AnalysisConfig(**raw.get("analysis", {})),
        persona=PersonaConfig(**raw.get("persona", {})),
        rewrite=RewriteConfig(**raw.get("rewrite", {})),
        editor=EditorConfig(**raw.get("editor", {})),
        library=LibraryConfig(**raw.get("library", {})),
    )
