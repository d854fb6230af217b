"""Texture definition parsing and patch compositing.

Typical use::

    textures = parse_textures(open("texture1.txt").read())
    images = PatchImageSet(file_image_resolver("doom1/patches"))
    await images.load_all(textures)
    rasters = composite_all(textures, images)
"""

from patch_textures.assets import GameAssets, file_image_resolver, render_all_textures
from patch_textures.errors import (
    MissingPatchError,
    ParseError,
    UndefinedTextureContextError,
)
from patch_textures.parser import parse_texture_files, parse_textures
from patch_textures.patch_set import PatchImageSet
from patch_textures.renderer.compositor import TextureCompositor, composite, composite_all
from patch_textures.texture import Patch, Texture, dump_textures
from patch_textures.types import normalize_name
from patch_textures.utils.image import to_array

__all__ = [
    "GameAssets",
    "MissingPatchError",
    "ParseError",
    "Patch",
    "PatchImageSet",
    "Texture",
    "TextureCompositor",
    "UndefinedTextureContextError",
    "composite",
    "composite_all",
    "dump_textures",
    "file_image_resolver",
    "normalize_name",
    "parse_texture_files",
    "parse_textures",
    "render_all_textures",
    "to_array",
]
