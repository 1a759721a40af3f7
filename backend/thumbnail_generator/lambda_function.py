import logging

import boto3
import requests
from botocore.config import Config

from .config import Settings
from .fetcher import HttpOriginFetcher
from .pipeline import handle_event
from .publisher import S3ResponsePublisher

settings = Settings.from_env()

logger = logging.getLogger()
logger.setLevel(settings.log_level)

# The response token is single-use, so WriteGetObjectResponse is never retried
S3_CONFIG = Config(retries={'mode': 'standard', 'total_max_attempts': 1})

# Clients are created once per execution environment and shared by invocations
s3 = boto3.client('s3', config=S3_CONFIG)
http = requests.Session()

origin = HttpOriginFetcher(http, timeout=settings.fetch_timeout)
publisher = S3ResponsePublisher(s3)


def lambda_handler(event, context):
    """
    Invoked by S3 Object Lambda for each intercepted GetObject request.
    Downloads the original object, creates a PNG thumbnail from it and
    forwards it to the requester.

    Errors raised before the response is written propagate so the runtime
    marks the invocation as failed.
    """

    outcome = handle_event(event, origin, publisher, settings)

    return {
        'statusCode': 200,
        'body': f'{outcome.publish.message} ({outcome.thumbnail_bytes} bytes)'
    }
