"""Process-wide constants for structured generation requests."""

DEFAULT_MODEL = "gemini-2.5-flash"

DEFAULT_TEMPERATURE = 0.2

RESPONSE_MIME_TYPE = "application/json"

# Pretty-printing of few-shot expected responses
JSON_INDENT = 2

# File content routed inline as text
INLINE_TEXT_MIME_PREFIXES = ("text/",)
INLINE_TEXT_MIME_TYPES = frozenset({"application/json", "application/xml"})

# File content routed as an opaque binary attachment
ATTACHMENT_MIME_PREFIXES = ("image/",)
ATTACHMENT_MIME_TYPES = frozenset({"application/pdf"})

# Charset assumed for inline text without a charset parameter
DEFAULT_TEXT_CHARSET = "utf-8"
