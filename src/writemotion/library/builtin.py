"""Built-in reference authors shipped with the editor."""

from __future__ import annotations

from urllib.parse import quote_plus

from writemotion.models.persona import ReferenceAuthor


def _author(id: str, name: str, description: str, traits: list[str], background: str, category: str) -> ReferenceAuthor:
    # Built-in colours are fixed seed data; generated personas use avatar_url_for.
    return ReferenceAuthor(
        id=id,
        name=name,
        description=description,
        traits=traits,
        avatar_url=(
            f"https://ui-avatars.com/api/?name={quote_plus(name)}"
            f"&background={background}&color=fff&bold=true&length=2"
        ),
        category=category,
    )


BUILTIN_AUTHORS: tuple[ReferenceAuthor, ...] = (
    _author("hemingway", "Ernest Hemingway", "Direct, vigorous, and unadorned.",
            ["Concise", "Stoic", "Journalistic"], "333", "Fiction"),
    _author("woolf", "Virginia Woolf", "Lyrical, stream-of-consciousness, introspective.",
            ["Fluid", "Impressionist", "Internal"], "8b5cf6", "Fiction"),
    _author("sorkin", "Aaron Sorkin", "Rhythmic, witty, and fast-paced dialogue.",
            ["Snappy", "Intellectual", "Repetitive"], "0ea5e9", "Screenwriting"),
    _author("pg", "Paul Graham", "Clear, argumentative, and conversational essayist.",
            ["Logic-driven", "Plain", "Insightful"], "f59e0b", "Non-Fiction"),
    _author("didion", "Joan Didion", "Cool, detached, observational elegance.",
            ["Precise", "Detached", "Observational"], "10b981", "Journalism"),
    _author("orwell", "George Orwell", "Political, plain-spoken, anti-pretension.",
            ["Political", "Clear", "Direct"], "f43f5e", "Non-Fiction"),
    _author("oliver", "Mary Oliver", "Naturalistic, spiritual, accessible clarity.",
            ["Nature-focused", "Simple", "Profound"], "6366f1", "Poetry"),
)

BUILTIN_IDS: frozenset[str] = frozenset(a.id for a in BUILTIN_AUTHORS)
