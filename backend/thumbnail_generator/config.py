"""Deployment constants and environment-driven settings."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from .errors import ConfigurationError

THUMBNAIL_EDGE = 128  # Width and height of the square thumbnail
MAX_FETCH_BYTES = 10_000_000
MAX_IMAGE_PIXELS = 40_000_000


class PublishFailurePolicy(str, Enum):
    """What a failed WriteGetObjectResponse means for the invocation."""

    IGNORE = 'ignore'
    FAIL = 'fail'


@dataclass(frozen=True)
class ThumbnailSpec:
    edge: int = THUMBNAIL_EDGE

    def __post_init__(self):
        if isinstance(self.edge, bool) or not isinstance(self.edge, int) or self.edge <= 0:
            raise ConfigurationError(f'Thumbnail edge must be a positive integer, got {self.edge!r}')


@dataclass(frozen=True)
class Settings:
    thumbnail: ThumbnailSpec = ThumbnailSpec()
    publish_failure_policy: PublishFailurePolicy = PublishFailurePolicy.IGNORE
    max_image_pixels: int = MAX_IMAGE_PIXELS
    fetch_connect_timeout: Optional[float] = None
    fetch_read_timeout: Optional[float] = None
    log_level: int = logging.INFO

    @property
    def fetch_timeout(self):
        """Timeout tuple for requests, or None to keep the transport defaults."""
        if self.fetch_connect_timeout is None and self.fetch_read_timeout is None:
            return None
        return (self.fetch_connect_timeout, self.fetch_read_timeout)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> 'Settings':
        """Build settings from environment variables, validating every value."""
        policy_name = environ.get('PUBLISH_FAILURE_POLICY', PublishFailurePolicy.IGNORE.value)
        try:
            policy = PublishFailurePolicy(policy_name.strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"PUBLISH_FAILURE_POLICY must be 'ignore' or 'fail', got {policy_name!r}"
            ) from None

        max_pixels = _positive_int(environ, 'MAX_IMAGE_PIXELS', MAX_IMAGE_PIXELS)

        level_name = environ.get('LOG_LEVEL', 'INFO').strip().upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise ConfigurationError(f'Unknown LOG_LEVEL {level_name!r}')

        return cls(
            publish_failure_policy=policy,
            max_image_pixels=max_pixels,
            fetch_connect_timeout=_optional_seconds(environ, 'FETCH_CONNECT_TIMEOUT'),
            fetch_read_timeout=_optional_seconds(environ, 'FETCH_READ_TIMEOUT'),
            log_level=level,
        )


def _positive_int(environ, name, default):
    raw = environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f'{name} must be an integer, got {raw!r}') from None
    if value <= 0:
        raise ConfigurationError(f'{name} must be positive, got {value}')
    return value


def _optional_seconds(environ, name):
    raw = environ.get(name)
    if raw is None or raw.strip() == '':
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f'{name} must be a number of seconds, got {raw!r}') from None
    if value <= 0:
        raise ConfigurationError(f'{name} must be positive, got {value}')
    return value
