"""Errors raised while building request descriptors."""


class FileRequestError(Exception):
    """Base class for every error raised by the request builders."""


class ValidationError(FileRequestError, ValueError):
    """A required record id is None or empty."""


class InvalidArgumentError(FileRequestError, ValueError):
    """A required enumerated argument is missing or not a known member."""


class EncodingError(FileRequestError):
    """A media type could not be parsed or a request body could not be encoded."""
