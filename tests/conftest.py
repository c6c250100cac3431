"""Pytest configuration and fixtures."""

from dataclasses import dataclass, field

import pytest
from python_multipart.multipart import MultipartParser, parse_options_header

from multipart_testkit import BoundaryGenerator


@dataclass
class DecodedPart:
    headers: dict[str, str] = field(default_factory=dict)
    data: bytearray = field(default_factory=bytearray)

    @property
    def disposition(self) -> dict[str, str]:
        _, options = parse_options_header(self.headers["content-disposition"])
        return {k.decode(): v.decode() for k, v in options.items()}

    @property
    def name(self) -> str:
        return self.disposition["name"]

    @property
    def filename(self) -> str | None:
        return self.disposition.get("filename")

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")


def decode(content_type: str, body: bytes) -> list[DecodedPart]:
    """Decode a multipart body with python-multipart's streaming parser."""
    ctype, options = parse_options_header(content_type)
    assert ctype == b"multipart/form-data"

    parts: list[DecodedPart] = []
    header_field = bytearray()
    header_value = bytearray()

    def on_part_begin():
        parts.append(DecodedPart())

    def on_part_data(data, start, end):
        parts[-1].data.extend(data[start:end])

    def on_header_field(data, start, end):
        header_field.extend(data[start:end])

    def on_header_value(data, start, end):
        header_value.extend(data[start:end])

    def on_header_end():
        parts[-1].headers[header_field.decode().lower()] = header_value.decode()
        header_field.clear()
        header_value.clear()

    parser = MultipartParser(
        options[b"boundary"],
        {
            "on_part_begin": on_part_begin,
            "on_part_data": on_part_data,
            "on_header_field": on_header_field,
            "on_header_value": on_header_value,
            "on_header_end": on_header_end,
        },
    )
    parser.write(body)
    parser.finalize()
    return parts


@pytest.fixture
def decode_multipart():
    """Return the multipart decoder helper."""
    return decode


@pytest.fixture
def seeded_generator():
    """Create a boundary generator with a fixed seed."""
    return BoundaryGenerator(seed=1234)


@pytest.fixture
def video_metadata():
    return {"name": "MyTestVideo"}


@pytest.fixture
def video_content():
    return b"This is a dummy video file"
