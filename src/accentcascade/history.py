"""Recently applied colors per scope (base, section id or group id)."""

from __future__ import annotations

MAX_HISTORY = 3


def record(history: dict[str, list[str]], scope: str, color: str | None) -> dict[str, list[str]]:
    """Return a copy of ``history`` with ``color`` first in ``scope``.

    The list stays deduplicated, most recent first, and at most
    ``MAX_HISTORY`` long. Cleared (None) values are never recorded.
    """
    updated = {key: list(values) for key, values in history.items()}
    if not color:
        return updated
    previous = [value for value in updated.get(scope, []) if value != color]
    updated[scope] = [color, *previous][:MAX_HISTORY]
    return updated
