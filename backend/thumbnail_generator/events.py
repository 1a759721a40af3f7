"""Parsing of the S3 Object Lambda invocation event."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import InvalidEventError

_REQUIRED_FIELDS = (
    ('inputS3Url', 'input_url'),
    ('outputRoute', 'output_route'),
    ('outputToken', 'output_token'),
)


@dataclass(frozen=True)
class ObjectContext:
    """Where to read the original object from and where to send the response."""

    input_url: str
    output_route: str
    output_token: str
    request_id: Optional[str] = None
    user_request_url: Optional[str] = None

    @classmethod
    def from_event(cls, event) -> 'ObjectContext':
        """Extract the GetObject context from an Object Lambda event.

        Only GetObject requests carry ``getObjectContext``; HeadObject and
        ListObjects events are rejected along with malformed payloads.
        """
        if not isinstance(event, dict):
            raise InvalidEventError(f'Expected an event object, got {type(event).__name__}')

        context = event.get('getObjectContext')
        if context is None:
            raise InvalidEventError('Event has no getObjectContext')
        if not isinstance(context, dict):
            raise InvalidEventError('getObjectContext is not an object')

        values = {}
        for key, attribute in _REQUIRED_FIELDS:
            value = context.get(key)
            if not isinstance(value, str) or not value:
                raise InvalidEventError(f'getObjectContext.{key} is missing or empty')
            values[attribute] = value

        user_request = event.get('userRequest')
        user_request_url = user_request.get('url') if isinstance(user_request, dict) else None

        return cls(
            request_id=event.get('xAmzRequestId'),
            user_request_url=user_request_url,
            **values,
        )
