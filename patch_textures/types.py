"""Common type aliases and the patch-name key normalization.

``ImageResolver`` is the boundary to whatever actually fetches patch images
(filesystem, HTTP, an in-memory fixture). Patch identifiers are
case-insensitive: every name-keyed record or map runs names through
:func:`normalize_name` once, at construction, and never ad hoc afterwards.
"""

from typing import Awaitable, Callable, Protocol

from PIL.Image import Image

PatchName = str
TextureName = str

ImageResolver = Callable[[PatchName], Awaitable[Image]]


class PatchLookup(Protocol):
    """Anything the compositor can ask for a decoded patch image."""

    def get(self, name: PatchName) -> Image: ...


def normalize_name(name: str) -> PatchName:
    """Return the canonical (lower-cased) key for a patch name."""
    return name.lower()
