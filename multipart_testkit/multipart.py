from __future__ import annotations

from multipart_testkit.builder import MultipartBuilder

DEFAULT_FILE_CONTENT_TYPE = "application/octet-stream"


def build_multipart(
    data: dict[str, object] | None,
    files: dict[str, bytes | tuple[str, bytes, str | None]],
    *,
    boundary: str | None = None,
) -> tuple[str, bytes]:
    """
    Build a multipart/form-data body in one call.
    Data values are converted with str(). `files` values can be bytes or
    (filename, bytes, content_type|None).
    Data fields are written first, then files, each in dict order.
    """
    builder = MultipartBuilder(boundary)
    if data:
        for k, v in data.items():
            builder.with_text(k, str(v))
    for field, val in files.items():
        if isinstance(val, (bytes, bytearray, memoryview)):
            builder.with_bytes(field, field, DEFAULT_FILE_CONTENT_TYPE, val)
        else:
            filename, content, ctype = val
            builder.with_bytes(field, filename, ctype or DEFAULT_FILE_CONTENT_TYPE, content)
    content_type, body = builder.build()
    return content_type, body
