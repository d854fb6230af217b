"""Rendering subpackage.

Turns parsed :class:`~patch_textures.texture.Texture` definitions into RGBA
rasters. The compositor focuses on:

* Deterministic layering: patches draw in file order, later ones on top.
* Clipped, unscaled placement at signed offsets (negative offsets are fine).
* Plain Pillow ``alpha_composite`` (source-over) blending.

See :mod:`patch_textures.renderer.compositor` for the composition routines.
"""

from patch_textures.renderer.compositor import (
    TextureCompositor,
    composite,
    composite_all,
    draw_patch,
)

__all__ = ["TextureCompositor", "composite", "composite_all", "draw_patch"]
