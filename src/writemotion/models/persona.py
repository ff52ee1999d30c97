"""Pydantic models for reference author personas."""

from __future__ import annotations

import hashlib
from typing import Literal, get_args
from urllib.parse import quote_plus

from pydantic import BaseModel, ConfigDict, Field, field_validator

AuthorCategory = Literal["Fiction", "Non-Fiction", "Journalism", "Poetry", "Screenwriting"]

AUTHOR_CATEGORIES: tuple[str, ...] = get_args(AuthorCategory)

AVATAR_COLORS: tuple[str, ...] = ("0ea5e9", "8b5cf6", "f59e0b", "10b981", "f43f5e", "6366f1")


def avatar_url_for(name: str) -> str:
    """Initials avatar URL; the background colour is derived from the name."""
    digest = hashlib.sha1(name.strip().lower().encode("utf-8")).digest()
    color = AVATAR_COLORS[digest[0] % len(AVATAR_COLORS)]
    return (
        f"https://ui-avatars.com/api/?name={quote_plus(name.strip())}"
        f"&background={color}&color=fff&bold=true&length=2"
    )


class ReferenceAuthor(BaseModel):
    """A named writer whose style can be blended into a draft."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = Field(min_length=1)
    description: str
    traits: list[str]
    avatar_url: str = Field(alias="avatarUrl")
    category: AuthorCategory
    is_custom: bool = Field(False, alias="isCustom")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value
