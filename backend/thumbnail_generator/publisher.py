"""WriteGetObjectResponse submission and classification of its failures."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from botocore.exceptions import (
    ClientError,
    ConnectionClosedError,
    ConnectionError as BotoConnectionError,
    ConnectTimeoutError,
    CredentialRetrievalError,
    EndpointConnectionError,
    HTTPClientError,
    IncompleteReadError,
    NoCredentialsError,
    ParamValidationError,
    PartialCredentialsError,
    ReadTimeoutError,
    ValidationError,
)
from botocore.parsers import ResponseParserError

from .transformer import OUTPUT_CONTENT_TYPE

logger = logging.getLogger(__name__)

SUCCESS_STATUS = 200


class PublishErrorKind(str, Enum):
    CONSTRUCTION = 'ConstructionFailure'
    DISPATCH_IO = 'DispatchFailure: IO error'
    DISPATCH_TIMEOUT = 'DispatchFailure: Timeout error'
    DISPATCH_USER = 'DispatchFailure: User error'
    DISPATCH_OTHER = 'DispatchFailure: Other error'
    RESPONSE = 'ResponseError'
    TIMEOUT = 'TimeoutError'
    SERVICE = 'ServiceError'
    UNCATEGORIZED = 'other error'


# Checked in order, so subclasses must precede their bases.
_CLASSIFICATION = (
    ((ParamValidationError, ValidationError), PublishErrorKind.CONSTRUCTION),
    ((ConnectTimeoutError,), PublishErrorKind.DISPATCH_TIMEOUT),
    ((ReadTimeoutError,), PublishErrorKind.TIMEOUT),
    ((EndpointConnectionError, ConnectionClosedError), PublishErrorKind.DISPATCH_IO),
    (
        (NoCredentialsError, PartialCredentialsError, CredentialRetrievalError),
        PublishErrorKind.DISPATCH_USER,
    ),
    ((HTTPClientError, BotoConnectionError), PublishErrorKind.DISPATCH_OTHER),
    ((ResponseParserError, IncompleteReadError), PublishErrorKind.RESPONSE),
)


@dataclass(frozen=True)
class PublishFailure:
    kind: PublishErrorKind
    detail: str
    code: Optional[str] = None
    message: Optional[str] = None
    metadata: dict = field(default_factory=dict)

    def describe(self) -> str:
        if self.kind is PublishErrorKind.SERVICE:
            return (
                f'{self.kind.value} code: {self.code}, message: {self.message}, '
                f'meta: {self.metadata}'
            )
        return f'{self.kind.value}: {self.detail}'


@dataclass(frozen=True)
class PublishResult:
    ok: bool
    failure: Optional[PublishFailure] = None

    @property
    def message(self) -> str:
        return 'Put file done.' if self.ok else 'Can not put file'


def classify_error(exc: BaseException) -> PublishFailure:
    """Map an exception raised by WriteGetObjectResponse to a PublishFailure."""
    if isinstance(exc, ClientError):
        error = exc.response.get('Error', {})
        return PublishFailure(
            kind=PublishErrorKind.SERVICE,
            detail=str(exc),
            code=error.get('Code', ''),
            message=error.get('Message', ''),
            metadata=dict(exc.response.get('ResponseMetadata', {})),
        )

    for exc_types, kind in _CLASSIFICATION:
        if isinstance(exc, exc_types):
            return PublishFailure(kind=kind, detail=str(exc))

    return PublishFailure(kind=PublishErrorKind.UNCATEGORIZED, detail=f'{type(exc).__name__}: {exc}')


class S3ResponsePublisher:
    """Send the thumbnail back to the requester through S3 Object Lambda."""

    def __init__(self, s3_client) -> None:
        self._s3 = s3_client

    def publish(self, route: str, token: str, body: bytes) -> PublishResult:
        """Call WriteGetObjectResponse once; failures are classified, never raised.

        The token is single-use, so the call is not retried here.
        """
        logger.info('Put file route %s, token %s, length %d', route, token, len(body))

        try:
            self._s3.write_get_object_response(
                RequestRoute=route,
                RequestToken=token,
                Body=body,
                ContentType=OUTPUT_CONTENT_TYPE,
                ContentLength=len(body),
                StatusCode=SUCCESS_STATUS,
            )
        except Exception as exc:
            failure = classify_error(exc)
            logger.warning('WriteGetObjectResponse failed: %s', failure.describe())
            return PublishResult(ok=False, failure=failure)

        result = PublishResult(ok=True)
        logger.info(result.message)
        return result
