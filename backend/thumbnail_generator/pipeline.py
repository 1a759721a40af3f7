"""Fetch, transform and publish for a single Object Lambda invocation."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import PublishFailurePolicy, Settings
from .errors import PublicationError, ThumbnailError
from .events import ObjectContext
from .ports import ObjectFetcher, ResponsePublisher
from .publisher import PublishResult
from .transformer import make_thumbnail

logger = logging.getLogger(__name__)


class Stage(str, Enum):
    START = 'Start'
    CONTEXT_EXTRACTED = 'ContextExtracted'
    FETCHED = 'Fetched'
    TRANSFORMED = 'Transformed'
    PUBLISHED = 'Published'
    DONE = 'Done'
    FAILED = 'Failed'


@dataclass(frozen=True)
class InvocationOutcome:
    stage: Stage
    request_id: Optional[str]
    thumbnail_bytes: int
    publish: PublishResult


def handle_event(
    event: dict,
    fetcher: ObjectFetcher,
    publisher: ResponsePublisher,
    settings: Settings,
) -> InvocationOutcome:
    """Serve one intercepted GetObject request with a thumbnail.

    Input, retrieval and transformation errors stop the pipeline and are
    re-raised with ``stage`` set. A failed publish is logged and only raised
    as :class:`PublicationError` under the ``fail`` policy.
    """
    logger.info('Handler starts')
    stage = Stage.START

    try:
        context = ObjectContext.from_event(event)
        stage = _enter(Stage.CONTEXT_EXTRACTED, context.request_id)

        original = fetcher.fetch(context.input_url)
        stage = _enter(Stage.FETCHED, context.request_id)

        thumbnail = make_thumbnail(
            original,
            settings.thumbnail.edge,
            max_pixels=settings.max_image_pixels,
        )
        stage = _enter(Stage.TRANSFORMED, context.request_id)

        result = publisher.publish(context.output_route, context.output_token, thumbnail)
        if not result.ok:
            _handle_publish_failure(result, settings.publish_failure_policy)
        stage = _enter(Stage.PUBLISHED, context.request_id)
    except ThumbnailError as exc:
        exc.stage = stage
        logger.error('Handler failed after %s: %s', stage.value, exc)
        _enter(Stage.FAILED, None)
        raise

    _enter(Stage.DONE, context.request_id)
    logger.info('Handler ends')
    return InvocationOutcome(
        stage=Stage.DONE,
        request_id=context.request_id,
        thumbnail_bytes=len(thumbnail),
        publish=result,
    )


def _enter(stage, request_id):
    if request_id:
        logger.info('Stage %s (request %s)', stage.value, request_id)
    else:
        logger.info('Stage %s', stage.value)
    return stage


def _handle_publish_failure(result, policy):
    if policy is PublishFailurePolicy.FAIL:
        raise PublicationError(result.failure)
    logger.warning(
        "Response not delivered (%s); completing invocation per '%s' policy",
        result.failure.kind.value,
        policy.value,
    )
