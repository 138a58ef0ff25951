"""Autocomplete ranking over the exercise catalog."""

from typing import Sequence

# Chat platforms refuse longer suggestion lists
MAX_SUGGESTIONS = 25


def rank(query: str, catalog: Sequence[str], limit: int = MAX_SUGGESTIONS) -> list[str]:
    """Rank catalog names against a partial, case-insensitive query.

    Names starting with the query come first, then names that only contain
    it. Within each group the catalog order is kept, since the backend
    already curates it. An empty query lists the catalog unfiltered.
    The query is matched as typed, spaces included.

    Args:
        query: What the user has typed so far.
        catalog: Canonical exercise names in backend order.
        limit: Maximum number of suggestions (clamped to ``MAX_SUGGESTIONS``).

    Returns:
        At most ``limit`` names.
    """
    limit = max(0, min(limit, MAX_SUGGESTIONS))
    needle = (query or "").lower()

    if not needle:
        return list(catalog[:limit])

    starts: list[str] = []
    contains: list[str] = []
    for name in catalog:
        lowered = name.lower()
        if lowered.startswith(needle):
            starts.append(name)
        elif needle in lowered:
            contains.append(name)

    return (starts + contains)[:limit]
