"""Exceptions raised while serving an intercepted GetObject request."""


class ThumbnailError(Exception):
    """Base class for every error raised by the thumbnail generator."""

    # Set by the pipeline to the stage the invocation was in when it failed.
    stage = None


class ConfigurationError(ThumbnailError):
    """Invalid deployment configuration."""


class InvalidEventError(ThumbnailError):
    """The invocation event has no usable object context."""


class RetrievalError(ThumbnailError):
    """The original object could not be fetched."""

    def __init__(self, url, reason):
        super().__init__(f'Failed to fetch {url}: {reason}')
        self.url = url
        self.reason = reason


class TransformationError(ThumbnailError):
    """The original object could not be turned into a thumbnail."""


class PublicationError(ThumbnailError):
    """WriteGetObjectResponse failed and the policy says to fail the invocation."""

    def __init__(self, failure):
        super().__init__(f'Can not put file: {failure.describe()}')
        self.failure = failure
