"""The two capabilities the pipeline needs from the storage platform.

Kept free of SDK types so tests can plug in simple fakes.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .publisher import PublishResult


class ObjectFetcher(Protocol):
    """Retrieve the full content of an object by URL."""

    def fetch(self, url: str) -> bytes: ...


class ResponsePublisher(Protocol):
    """Submit a payload as the response bound to a one-time route/token pair."""

    def publish(self, route: str, token: str, body: bytes) -> 'PublishResult': ...


__all__ = ['ObjectFetcher', 'ResponsePublisher']
