"""Rolling list of addresses the CLI has looked up.

Only the search term, chain and time are kept; balances and transactions are
never written to disk.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from ..config import settings

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecentSearch:
    address: str
    chain_id: int
    searched_at: str


class RecentSearches:
    """Most recent first, one entry per address (case-insensitive), bounded."""

    def __init__(self, path: Optional[Path] = None, limit: Optional[int] = None) -> None:
        self.path = Path(path) if path is not None else settings.recent_searches_path
        self.limit = limit or settings.recent_searches_limit

    def load(self) -> List[RecentSearch]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            searches = [
                RecentSearch(
                    address=str(item["address"]),
                    chain_id=int(item["chain_id"]),
                    searched_at=str(item["searched_at"]),
                )
                for item in raw
            ]
        except (OSError, ValueError, TypeError, KeyError) as exc:
            # corrupt file, start over
            logger.warning("ignoring unreadable recent searches file %s: %s", self.path, exc)
            return []
        return searches[: self.limit]

    def add(self, address: str, chain_id: int, *, now: Optional[datetime] = None) -> List[RecentSearch]:
        searched_at = (now or datetime.now(timezone.utc)).isoformat()
        entry = RecentSearch(address=address, chain_id=chain_id, searched_at=searched_at)

        searches = [s for s in self.load() if s.address.lower() != address.lower()]
        searches.insert(0, entry)
        searches = searches[: self.limit]
        self._save(searches)
        return searches

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()

    def _save(self, searches: List[RecentSearch]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps([asdict(s) for s in searches], indent=2),
            encoding="utf-8",
        )


__all__ = ["RecentSearch", "RecentSearches"]
