"""HTTP retrieval of the original object through the presigned input URL."""
from __future__ import annotations

import logging

import requests

from .config import MAX_FETCH_BYTES
from .errors import RetrievalError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class HttpOriginFetcher:
    """Download objects with a plain GET, never holding more than ``max_bytes``."""

    def __init__(self, session=None, *, max_bytes: int = MAX_FETCH_BYTES, timeout=None) -> None:
        self._session = session if session is not None else requests.Session()
        self._max_bytes = max_bytes
        self._timeout = timeout

    def fetch(self, url: str) -> bytes:
        logger.info('Get file url %s', url)

        try:
            with self._session.get(url, stream=True, timeout=self._timeout) as response:
                response.raise_for_status()
                declared = _content_length(url, response)
                data = self._read_capped(response)
        except requests.RequestException as exc:
            raise RetrievalError(url, str(exc)) from exc

        expected = min(declared, self._max_bytes)
        if len(data) < expected:
            raise RetrievalError(url, f'truncated body: got {len(data)} of {expected} bytes')

        logger.info('Got %d bytes', len(data))
        return data

    def _read_capped(self, response) -> bytes:
        buffer = bytearray()
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            buffer.extend(chunk)
            if len(buffer) >= self._max_bytes:
                logger.warning('Object exceeds %d bytes, truncating', self._max_bytes)
                del buffer[self._max_bytes:]
                break
        return bytes(buffer)


def _content_length(url, response) -> int:
    raw = response.headers.get('Content-Length')
    if raw is None:
        raise RetrievalError(url, 'response has no Content-Length header')
    try:
        length = int(raw)
    except ValueError:
        raise RetrievalError(url, f'unparseable Content-Length {raw!r}') from None
    if length < 0:
        raise RetrievalError(url, f'negative Content-Length {length}')
    return length
