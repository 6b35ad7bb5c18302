from __future__ import annotations

from collections import defaultdict

from devkit.timezone import now_utc
from route_engine.models import HistoryEntry


class InMemoryHistoryRepository:
    """Per-process search history, kept in insertion order per user."""

    def __init__(self) -> None:
        self._entries: dict[str, list[HistoryEntry]] = defaultdict(list)

    async def record(self, user_id: str, source: str, destination: str) -> HistoryEntry:
        if not source or not destination:
            raise ValueError("source and destination are required")
        entry = HistoryEntry(
            user_id=user_id,
            source=source,
            destination=destination,
            created_at=now_utc(),
        )
        self._entries[user_id].append(entry)
        return entry

    async def list_for_user(self, user_id: str) -> list[HistoryEntry]:
        return list(self._entries.get(user_id, []))
