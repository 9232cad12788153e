# gemini_relay/core/exceptions.py
from fastapi import status


class RelayError(Exception):
    """Base error converted into the {code, msg, data} envelope"""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_msg: str = "Internal server error"

    def __init__(self, msg: str = None):
        self.msg = msg or self.default_msg
        super().__init__(self.msg)


class ValidationError(RelayError):
    """Missing or malformed required input"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_msg = "Invalid request"


class NotFoundError(RelayError):
    """Resource not found"""
    status_code = status.HTTP_404_NOT_FOUND
    default_msg = "Resource not found"


class PayloadTooLargeError(RelayError):
    """Uploaded file exceeds the size ceiling"""
    status_code = 413
    default_msg = "File too large"


class UnsupportedFormatError(RelayError):
    """Uploaded file has a MIME type outside the allow-list"""
    status_code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    default_msg = "Unsupported file format"


class ExternalServiceError(RelayError):
    """The generative-AI call failed (transport, status or response shape)"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_msg = "Gemini3 service unavailable"


class InternalError(RelayError):
    """Any other unhandled failure"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_msg = "Internal server error"
