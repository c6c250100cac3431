from multipart_testkit.builder import CONTENT_TYPE, MultipartBuilder, MultipartPayload
from multipart_testkit.boundary import BoundaryGenerator, validate_boundary
from multipart_testkit.errors import (
    BuilderConsumedError,
    EmptyBodyError,
    MultipartTestkitError,
    SerializationError,
)
from multipart_testkit.multipart import build_multipart
from multipart_testkit.parts import BinaryPart, JsonPart, RawPart, TextPart

__version__ = "0.1.0"

__all__ = [
    "CONTENT_TYPE",
    "MultipartBuilder",
    "MultipartPayload",
    "BoundaryGenerator",
    "validate_boundary",
    "MultipartTestkitError",
    "SerializationError",
    "EmptyBodyError",
    "BuilderConsumedError",
    "build_multipart",
    "TextPart",
    "JsonPart",
    "BinaryPart",
    "RawPart",
]
