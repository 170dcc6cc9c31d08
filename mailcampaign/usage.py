"""Logging of web API usage."""

from __future__ import annotations

from abc import ABC, abstractmethod

__all__ = ["UsageLogger", "MemoryUsageLogger"]


class UsageLogger(ABC):
    """Logs web API requests."""

    @abstractmethod
    def log_request(self, call_name: str, status: int) -> None:
        """Log a request by call name and resulting status code."""


class MemoryUsageLogger(UsageLogger):
    """Keeps logged requests in memory, in the order they arrived."""

    def __init__(self) -> None:
        self.requests: list[tuple[str, int]] = []

    def log_request(self, call_name: str, status: int) -> None:
        self.requests.append((call_name, status))