"""Part types of a multipart/form-data body and their wire encoding."""

from __future__ import annotations

from dataclasses import dataclass

JSON_CONTENT_TYPE = "application/json"


def _disposition(name: str, filename: str | None) -> str:
    # Values are quoted verbatim; a '"' inside name or filename is not escaped.
    if filename is None:
        return f'Content-Disposition: form-data; name="{name}"\r\n'
    return f'Content-Disposition: form-data; name="{name}"; filename="{filename}"\r\n'


def _encode_part(name: str, filename: str | None, content_type: str | None, payload: bytes) -> bytes:
    headers = _disposition(name, filename)
    if content_type is not None:
        headers += f"Content-Type: {content_type}\r\n"
    return (headers + "\r\n").encode() + payload + b"\r\n"


@dataclass(frozen=True)
class TextPart:
    """A plain form field. Sent without a Content-Type header (text/plain by default)."""

    name: str
    value: str

    content_type = None
    filename = None

    @property
    def payload(self) -> bytes:
        return self.value.encode("utf-8")

    def encode(self) -> bytes:
        return _encode_part(self.name, None, None, self.payload)


@dataclass(frozen=True)
class JsonPart:
    """A form field holding already-serialized JSON text."""

    name: str
    value: bytes

    content_type = JSON_CONTENT_TYPE
    filename = None

    @property
    def payload(self) -> bytes:
        return self.value

    def encode(self) -> bytes:
        return _encode_part(self.name, None, self.content_type, self.value)


@dataclass(frozen=True)
class BinaryPart:
    """A file field with a filename, a MIME type and raw content."""

    name: str
    filename: str
    content_type: str
    content: bytes

    @property
    def payload(self) -> bytes:
        return self.content

    def encode(self) -> bytes:
        return _encode_part(self.name, self.filename, self.content_type, self.content)


@dataclass(frozen=True)
class RawPart:
    """
    A part with arbitrary optional metadata.

    ``content_type=None`` omits the Content-Type header and
    ``filename=None`` omits the filename parameter.
    """

    name: str
    content_type: str | None
    filename: str | None
    content: bytes

    @property
    def payload(self) -> bytes:
        return self.content

    def encode(self) -> bytes:
        return _encode_part(self.name, self.filename, self.content_type, self.content)


Part = TextPart | JsonPart | BinaryPart | RawPart
