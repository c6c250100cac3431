class MultipartTestkitError(Exception):
    """Base error for multipart-testkit."""


class SerializationError(MultipartTestkitError):
    """Raised when a JSON part's value cannot be serialized."""


class EmptyBodyError(MultipartTestkitError):
    """Raised when building a body with no parts while empty bodies are disallowed."""


class BuilderConsumedError(MultipartTestkitError):
    """Raised when a builder is used after build() was called."""
