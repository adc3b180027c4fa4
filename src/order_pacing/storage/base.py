"""Abstract base store for time-scored records."""

from abc import ABC, abstractmethod
from typing import List, Tuple, Union

Score = Union[int, float, str]
ScoredValue = Tuple[str, float]


class TimeSeriesStore(ABC):
    """Abstract append-only store of values scored by epoch seconds.

    Each key is an independent stream (one for orders, one for busy
    periods per bucket). This allows swapping storage backends
    (Redis sorted sets, in-memory doubles for tests, etc.)

    Scores may be given as numbers or as the strings "-inf" / "+inf".
    """

    @abstractmethod
    async def add(self, key: str, score: int, value: str) -> None:
        """Append a value with the given score.

        Args:
            key: Stream key
            score: Epoch seconds used for ordering and range queries
            value: Encoded record
        """
        pass

    @abstractmethod
    async def range_by_score(self, key: str, min_score: Score, max_score: Score) -> List[ScoredValue]:
        """Get values with min_score <= score <= max_score.

        Returns:
            List of (value, score) ascending by score
        """
        pass

    @abstractmethod
    async def range_all(self, key: str) -> List[ScoredValue]:
        """Get every value in the stream.

        Returns:
            List of (value, score) ascending by score
        """
        pass

    @abstractmethod
    async def trim_by_score(self, key: str, min_score: Score, max_score: Score) -> None:
        """Delete values with min_score <= score <= max_score."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the storage backend is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass

    async def close(self) -> None:
        """Release backend resources."""
        return None
