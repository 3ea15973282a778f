"""
Custom exceptions for lmt-client.
"""


class LMTClientError(Exception):
    """Base exception for lmt-client."""
    pass


class TranslationError(LMTClientError):
    """Raised when a phase of the translation pipeline fails."""
    pass


class EmptyInput(TranslationError):
    """Raised when there is no text to translate."""
    pass


class SegmentationFailed(TranslationError):
    """Raised when the segmentation response lacks its result payload."""
    pass


class TranslationFailed(TranslationError):
    """Raised when the translation response lacks its result payload."""
    pass


class EmptyTranslation(TranslationError):
    """Raised when no primary translation could be assembled."""
    pass


class TransportError(LMTClientError):
    """Raised when the network call itself fails."""
    pass


class ServerError(TransportError):
    """Raised when the server answers with a 4xx status."""

    def __init__(self, status: int, body: str):
        super().__init__(f"Server error: {status} - {body}")
        self.status = status
        self.body = body
