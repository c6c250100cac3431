"""Boundary tokens for multipart bodies."""

from __future__ import annotations

import random
import re
import uuid

# RFC 2046 bchars that are also RFC 2045 token characters, so the
# Content-Type parameter never needs quoting.
_BOUNDARY_RE = re.compile(r"[0-9A-Za-z'+_\-.]{1,70}")


def validate_boundary(boundary: str) -> str:
    if not isinstance(boundary, str) or not _BOUNDARY_RE.fullmatch(boundary):
        raise ValueError(f"Invalid multipart boundary: {boundary!r}")
    return boundary


class BoundaryGenerator:
    """
    Seedable source of boundary tokens.

    Tokens are UUID4 hex strings drawn from a private ``random.Random``
    instance, so two generators created with the same seed yield the same
    sequence and no process-wide random state is touched.

    Args:
        seed: Seed for the underlying RNG. ``None`` seeds from OS entropy.
    """

    def __init__(self, seed: int | str | bytes | None = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def generate(self) -> str:
        return uuid.UUID(int=self._rng.getrandbits(128), version=4).hex

    def __repr__(self) -> str:
        return f"<BoundaryGenerator seed={self.seed!r}>"
