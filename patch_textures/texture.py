"""Texture and patch records.

A :class:`Texture` is a named, fixed-size canvas assembled from an ordered
vector of :class:`Patch` placements. Both are frozen value objects: parsing
builds new instances with :func:`dataclasses.replace` instead of mutating, so a
parsed definition can be shared freely between compositing calls.

Patch order is significant. Later patches draw over earlier ones at the same
coordinates, so ``patches`` is a ``pyrsistent.PVector`` and is never reordered.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Iterator

from pyrsistent import PVector, pvector

from patch_textures.types import PatchName, TextureName, normalize_name


@dataclass(frozen=True)
class Patch:
    """Placement of a named patch image inside a texture.

    Attributes:
        name: Case-insensitive patch identifier, stored normalized.
        x: Column offset of the patch origin (may be negative).
        y: Row offset of the patch origin (may be negative).
    """

    name: PatchName
    x: int
    y: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", normalize_name(self.name))

    def to_text(self) -> str:
        return f"*    {self.name} {self.x} {self.y}"


@dataclass(frozen=True)
class Texture:
    """Composite texture definition.

    Attributes:
        name: Texture name as written in the header line.
        width: Canvas width in pixels (expected > 0, not enforced here).
        height: Canvas height in pixels (expected > 0, not enforced here).
        patches: Patch placements in file order.
    """

    name: TextureName
    width: int
    height: int
    patches: PVector[Patch] = pvector()

    def add_patch(self, patch: Patch) -> Texture:
        """Return a copy of this texture with ``patch`` appended."""
        return replace(self, patches=self.patches.append(patch))

    def patch_names(self) -> Iterator[PatchName]:
        for patch in self.patches:
            yield patch.name

    def header(self) -> str:
        return f"{self.name} {self.width} {self.height}"

    def to_text(self) -> str:
        """Serialize back into definition-file syntax (header, then patches)."""
        return "\n".join([self.header()] + [p.to_text() for p in self.patches])


def dump_textures(textures: Iterable[Texture]) -> str:
    """Serialize textures into a definition file body, one block per texture."""
    return "".join(texture.to_text() + "\n" for texture in textures)


def distinct_patch_names(textures: Iterable[Texture]) -> list[PatchName]:
    """Every patch name referenced by ``textures``, first-seen order, no repeats."""
    seen: dict[PatchName, None] = {}
    for texture in textures:
        for name in texture.patch_names():
            seen.setdefault(name, None)
    return list(seen)
