"""
@mention extraction and resolution.

Both functions are pure: the caller supplies the comment text and the
profile directory, nothing here touches the database.
"""

import re
from typing import Iterable, Protocol

# "@" followed by one or more word or hyphen characters
MENTION_PATTERN = re.compile(r"@([\w-]+)")


class NamedProfile(Protocol):
    id: int
    display_name: str | None


def extract_mention_tokens(text: str) -> list[str]:
    """
    Return the distinct @tokens in ``text``, lower-cased, in first-seen order.

    >>> extract_mention_tokens("@Alice great read @alice and @bob-smith")
    ['alice', 'bob-smith']
    """
    seen: dict[str, None] = {}
    for match in MENTION_PATTERN.finditer(text or ""):
        seen.setdefault(match.group(1).lower(), None)
    return list(seen)


def resolve_mentions(tokens: Iterable[str], profiles: Iterable[NamedProfile]) -> list[NamedProfile]:
    """
    Match tokens against full display names, ignoring case.

    Only whole-name equality counts; "@Al" does not mention "Alice".
    Tokens with no matching profile are dropped. Each profile appears at
    most once, in directory order.
    """
    wanted = {t.lower() for t in tokens}
    if not wanted:
        return []

    matched = []
    seen_ids = set()
    for profile in profiles:
        name = (profile.display_name or "").strip().lower()
        if name and name in wanted and profile.id not in seen_ids:
            matched.append(profile)
            seen_ids.add(profile.id)
    return matched
