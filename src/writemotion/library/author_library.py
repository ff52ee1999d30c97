"""Combined view over session, saved and built-in reference authors."""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import Literal

from writemotion.library.builtin import BUILTIN_AUTHORS
from writemotion.library.persona_store import PersonaStore
from writemotion.models.persona import ReferenceAuthor

logger = logging.getLogger(__name__)

SortOrder = Literal["name", "category"]


class AuthorLibrary:
    """Ordered as session personas (newest first), saved personas, built-ins."""

    def __init__(self, store: PersonaStore | None = None):
        self.store = store
        self.session: list[ReferenceAuthor] = []
        self.custom: list[ReferenceAuthor] = []
        if store is not None:
            try:
                self.custom = list(store.load())
            except Exception:
                logger.exception("Failed to load saved personas")
                self.custom = []

    def all(self) -> list[ReferenceAuthor]:
        return [*self.session, *self.custom, *BUILTIN_AUTHORS]

    def ids(self) -> set[str]:
        return {a.id for a in self.all()}

    def get(self, author_id: str) -> ReferenceAuthor | None:
        return next((a for a in self.all() if a.id == author_id), None)

    def add(self, author: ReferenceAuthor, persist: bool = False) -> bool:
        """Add a generated persona. Returns whether it was saved to the store.

        The in-memory add always happens, even when saving fails.
        """
        if author.id in self.ids():
            raise ValueError(f"Author id {author.id!r} already in library")

        if not persist:
            self.session.insert(0, author)
            return False

        self.custom.insert(0, author)
        if self.store is None:
            return False
        try:
            saved = bool(self.store.save(self.custom))
        except Exception:
            logger.exception("Failed to save persona %s", author.id)
            return False
        if not saved:
            logger.warning("Persona store rejected save of %s", author.id)
        return saved

    def search(
        self,
        query: str = "",
        sort: SortOrder = "name",
        only_ids: Collection[str] | None = None,
    ) -> list[ReferenceAuthor]:
        """Filter by name/description substring, optionally to ``only_ids``."""
        q = query.strip().lower()
        found = [
            a for a in self.all()
            if (not q or q in a.name.lower() or q in a.description.lower())
            and (only_ids is None or a.id in only_ids)
        ]
        if sort == "category":
            found.sort(key=lambda a: (a.category, a.name))
        else:
            found.sort(key=lambda a: a.name)
        return found
