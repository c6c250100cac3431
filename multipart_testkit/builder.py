"""Builder for multipart/form-data request bodies used in tests."""

from __future__ import annotations

import json
import logging
from typing import NamedTuple, Protocol

from multipart_testkit.boundary import BoundaryGenerator, validate_boundary
from multipart_testkit.errors import BuilderConsumedError, EmptyBodyError, SerializationError
from multipart_testkit.parts import BinaryPart, JsonPart, Part, RawPart, TextPart

logger = logging.getLogger(__name__)

CONTENT_TYPE = "Content-Type"
MAX_BOUNDARY_ATTEMPTS = 100


class BoundarySource(Protocol):
    def generate(self) -> str: ...


class MultipartPayload(NamedTuple):
    """Result of MultipartBuilder.build(); unpacks as ``(content_type, body)``."""

    content_type: str
    body: bytes

    @property
    def boundary(self) -> str:
        return self.content_type.split("boundary=", 1)[1]

    @property
    def header(self) -> tuple[str, str]:
        return (CONTENT_TYPE, self.content_type)

    @property
    def headers(self) -> dict[str, str]:
        return {CONTENT_TYPE: self.content_type, "Content-Length": str(len(self.body))}


class MultipartBuilder:
    """
    Accumulates named parts and renders them as a multipart/form-data body.

    Parts are rendered in the order they were added. Every ``with_*`` method
    appends in place and returns the builder so calls can be chained::

        content_type, body = (
            MultipartBuilder()
            .with_json("json", {"name": "MyTestVideo"})
            .with_bytes("file", "test_video.mp4", "video/mp4", b"...")
            .build()
        )

    Args:
        boundary: Fixed boundary token. Must be a valid RFC 2046 boundary.
        boundary_source: Object with a ``generate()`` method used when no
            boundary is given. Defaults to a fresh ``BoundaryGenerator``.
        allow_empty: If False, building a body with no parts raises
            ``EmptyBodyError``.
    """

    def __init__(
        self,
        boundary: str | None = None,
        *,
        boundary_source: BoundarySource | None = None,
        allow_empty: bool = True,
    ) -> None:
        self.boundary = validate_boundary(boundary) if boundary is not None else None
        self.boundary_source = boundary_source if boundary_source is not None else BoundaryGenerator()
        self.allow_empty = allow_empty
        self._parts: list[Part] = []
        self._consumed = False

    @property
    def parts(self) -> tuple[Part, ...]:
        return tuple(self._parts)

    @property
    def consumed(self) -> bool:
        return self._consumed

    def __len__(self) -> int:
        return len(self._parts)

    def __repr__(self) -> str:
        state = "consumed" if self._consumed else "accumulating"
        return f"<MultipartBuilder [{state}] {len(self._parts)} parts>"

    def _append(self, part: Part) -> MultipartBuilder:
        if self._consumed:
            raise BuilderConsumedError("Cannot add parts after build() was called")
        self._parts.append(part)
        return self

    def with_text(self, name: str, value: str) -> MultipartBuilder:
        """Add a plain text field."""
        _check_text(name, "name")
        _check_text(value, "value")
        return self._append(TextPart(name, value))

    def with_json(self, name: str, value: object) -> MultipartBuilder:
        """
        Add a field holding ``value`` serialized as compact JSON.

        Raises:
            SerializationError: If ``value`` contains unserializable objects,
                circular references or non-finite floats.
        """
        _check_text(name, "name")
        try:
            content = json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot serialize JSON part {name!r}: {e}") from e
        return self._append(JsonPart(name, content))

    def with_bytes(
        self,
        name: str,
        filename: str,
        content_type: str,
        content: bytes | bytearray | memoryview,
    ) -> MultipartBuilder:
        """Add a file field from in-memory bytes."""
        _check_text(name, "name")
        _check_text(filename, "filename")
        _check_text(content_type, "content_type")
        return self._append(BinaryPart(name, filename, content_type, _to_bytes(content)))

    def with_part(
        self,
        name: str,
        content_type: str | None,
        filename: str | None,
        content: str | bytes | bytearray | memoryview,
    ) -> MultipartBuilder:
        """Add a part with arbitrary metadata; ``None`` omits the header or parameter."""
        _check_text(name, "name")
        if content_type is not None:
            _check_text(content_type, "content_type")
        if filename is not None:
            _check_text(filename, "filename")
        if isinstance(content, str):
            content = content.encode("utf-8")
        return self._append(RawPart(name, content_type, filename, _to_bytes(content)))

    def _choose_boundary(self) -> str:
        payloads = [part.payload for part in self._parts]
        if self.boundary is not None:
            token = self.boundary.encode("ascii")
            if any(token in payload for payload in payloads):
                logger.warning("Boundary %r occurs inside a part payload; body will not decode cleanly", self.boundary)
            return self.boundary
        for _ in range(MAX_BOUNDARY_ATTEMPTS):
            boundary = validate_boundary(self.boundary_source.generate())
            token = boundary.encode("ascii")
            if not any(token in payload for payload in payloads):
                return boundary
            logger.debug("Generated boundary %r collides with a payload, drawing another", boundary)
        raise ValueError(
            f"Boundary source produced a token found inside a part payload {MAX_BOUNDARY_ATTEMPTS} times in a row "
            f"(last: {boundary!r})"
        )

    def build(self) -> MultipartPayload:
        """
        Render the body. The builder cannot be used afterwards.

        Returns:
            MultipartPayload of the Content-Type header value and body bytes.
        """
        if self._consumed:
            raise BuilderConsumedError("build() was already called on this builder")
        if not self._parts and not self.allow_empty:
            raise EmptyBodyError("Multipart body has no parts")
        boundary = self._choose_boundary()
        delimiter = f"--{boundary}\r\n".encode("ascii")
        body_chunks: list[bytes] = []
        for part in self._parts:
            body_chunks.append(delimiter)
            body_chunks.append(part.encode())
        body_chunks.append(f"--{boundary}--\r\n".encode("ascii"))
        body = b"".join(body_chunks)
        self._consumed = True

        logger.debug("Built multipart body: %d parts, %d bytes, boundary=%r", len(self._parts), len(body), boundary)
        return MultipartPayload(f"multipart/form-data; boundary={boundary}", body)


def _check_text(value: object, what: str) -> None:
    if not isinstance(value, str):
        raise TypeError(f"Part {what} must be str, got {type(value).__name__}")
    # Lone surrogates cannot be written as UTF-8.
    value.encode("utf-8")


def _to_bytes(content: bytes | bytearray | memoryview) -> bytes:
    if not isinstance(content, (bytes, bytearray, memoryview)):
        raise TypeError(f"Part content must be bytes-like, got {type(content).__name__}")
    return bytes(content)
