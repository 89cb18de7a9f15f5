"""Exceptions raised while building, sending and decoding structured requests.

    StructBuilderError (base)
    ├── SchemaParseError - schema document is not valid
    ├── ProviderError - the model-call function failed
    ├── EmptyResponseError - response carries no usable candidate
    ├── DecodeError - response text is not JSON for the target type
    ├── UnsupportedFileTypeError - file MIME type cannot be routed
    └── FileDecodeError - inline text file is not valid in its charset
"""

from typing import Optional


class StructBuilderError(Exception):
    """Base exception for structured generation errors."""
    pass


class SchemaParseError(StructBuilderError):
    """Raised when raw schema bytes do not parse into a schema document."""
    pass


class ProviderError(StructBuilderError):
    """Raised when the external model-call function raises."""

    def __init__(self, message: str, model: Optional[str] = None):
        super().__init__(message)
        self.model = model


class EmptyResponseError(StructBuilderError):
    """Raised when the response has no candidate or no content parts."""
    pass


class DecodeError(StructBuilderError):
    """Raised when the response text cannot be decoded into the target type."""

    def __init__(self, message: str, raw_text: str):
        super().__init__(f"{message}\nRaw output: {raw_text}")
        self.raw_text = raw_text


class UnsupportedFileTypeError(StructBuilderError):
    """Raised when a file MIME type is neither inline text nor an attachment type."""

    def __init__(self, mime_type: str):
        super().__init__(f"Unsupported file MIME type: {mime_type}")
        self.mime_type = mime_type


class FileDecodeError(StructBuilderError):
    """Raised when inline text file bytes are not valid in the declared charset."""

    def __init__(self, mime_type: str, charset: str, reason: str):
        super().__init__(f"Cannot decode {mime_type} file content as {charset}: {reason}")
        self.mime_type = mime_type
        self.charset = charset
