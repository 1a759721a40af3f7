"""Image builders, sample events and in-memory fakes shared by the tests."""
import io
import random

from PIL import Image

from thumbnail_generator.publisher import PublishErrorKind, PublishFailure, PublishResult


def png_bytes(size=(64, 48), mode="RGB", color=(200, 30, 30)):
    image = Image.new(mode, size, color)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def noisy_png_bytes(edge, seed=0):
    """PNG of random pixels, which barely compresses."""
    pixels = random.Random(seed).randbytes(edge * edge * 3)
    image = Image.frombytes("RGB", (edge, edge), pixels)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def decode(data):
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


def object_lambda_event(url="https://origin/cat.png", route="r1", token="t1"):
    return {
        "xAmzRequestId": "req-1234",
        "getObjectContext": {
            "inputS3Url": url,
            "outputRoute": route,
            "outputToken": token,
        },
        "configuration": {
            "accessPointArn": "arn:aws:s3-object-lambda:us-east-1:123456789012:accesspoint/thumbs",
            "supportingAccessPointArn": "arn:aws:s3:us-east-1:123456789012:accesspoint/images",
            "payload": "",
        },
        "userRequest": {
            "url": "https://thumbs-123456789012.s3-object-lambda.us-east-1.amazonaws.com/cat.png",
            "headers": {"Host": "thumbs-123456789012.s3-object-lambda.us-east-1.amazonaws.com"},
        },
        "protocolVersion": "1.00",
    }


class FakeFetcher:
    """Returns scripted bytes or raises a scripted error, recording every URL."""

    def __init__(self, data=b"", error=None):
        self.data = data
        self.error = error
        self.calls = []

    def fetch(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.data


class FakePublisher:
    """Records publish calls and returns a scripted result."""

    def __init__(self, result=None):
        self.result = result if result is not None else PublishResult(ok=True)
        self.calls = []

    def publish(self, route, token, body):
        self.calls.append((route, token, body))
        return self.result


def failed_publish(kind=PublishErrorKind.DISPATCH_IO):
    return PublishResult(ok=False, failure=PublishFailure(kind=kind, detail="boom"))
