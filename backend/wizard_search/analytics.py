"""
In-memory search analytics: total count, bounded history of recent searches,
average response time and most popular query. Resets on restart.
"""

import time
from collections import Counter, deque
from dataclasses import dataclass
from threading import Lock
from typing import Optional

from pydantic import BaseModel, Field

NO_SEARCHES_YET = "No searches yet"


@dataclass(frozen=True)
class SearchRecord:
    query: str
    timestamp: int  # epoch milliseconds
    response_time: int  # milliseconds


class RecentSearch(BaseModel):
    query: str
    timestamp: int
    response_time: int = Field(..., serialization_alias="responseTime")


class AnalyticsSnapshot(BaseModel):
    total_searches: int = Field(..., serialization_alias="totalSearches")
    most_popular: str = Field(..., serialization_alias="mostPopular")
    avg_response_time: int = Field(..., serialization_alias="avgResponseTime")
    uptime: int
    recent_searches: list[RecentSearch] = Field(default_factory=list, serialization_alias="recentSearches")


class AnalyticsService:
    """Thread-safe counters shared by all requests. The history keeps the newest `history_size` entries."""

    def __init__(self, history_size: int = 100, clock=time.time):
        self._clock = clock
        self._lock = Lock()
        self._start_time = clock()
        self._total_searches = 0
        self._history: deque[SearchRecord] = deque(maxlen=history_size)

    def record_search(self, query: str, response_time_ms: int, timestamp: Optional[float] = None) -> None:
        ts = self._clock() if timestamp is None else timestamp
        record = SearchRecord(query=query, timestamp=int(ts * 1000), response_time=int(response_time_ms))
        with self._lock:
            self._total_searches += 1
            self._history.append(record)

    @property
    def total_searches(self) -> int:
        with self._lock:
            return self._total_searches

    def history(self) -> list[SearchRecord]:
        with self._lock:
            return list(self._history)

    def snapshot(self, recent: int = 5) -> AnalyticsSnapshot:
        with self._lock:
            total = self._total_searches
            history = list(self._history)

        # Half-up rounding, not round()'s half-to-even
        avg = int(sum(r.response_time for r in history) / len(history) + 0.5) if history else 0
        most_popular = NO_SEARCHES_YET
        if history:
            # Counter.most_common keeps first-seen order on ties
            most_popular = Counter(r.query for r in history).most_common(1)[0][0]

        return AnalyticsSnapshot(
            total_searches=total,
            most_popular=most_popular,
            avg_response_time=avg,
            uptime=int(self._clock() - self._start_time),
            recent_searches=[
                RecentSearch(query=r.query, timestamp=r.timestamp, response_time=r.response_time)
                for r in reversed(history[-recent:])
            ] if recent > 0 else [],
        )
