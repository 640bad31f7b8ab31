"""Port interface for per-client request limiting."""

from abc import ABC, abstractmethod


class RateLimiter(ABC):
    @abstractmethod
    def allow(self, key: str) -> bool:
        """Record a request for *key*; False when the key is over its cap."""
        ...
