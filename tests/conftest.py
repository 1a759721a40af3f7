import os

import pytest

# boto3 needs a region to build the module-level S3 client in lambda_function
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")

from helpers import png_bytes  # noqa: E402


@pytest.fixture
def small_png():
    return png_bytes()
