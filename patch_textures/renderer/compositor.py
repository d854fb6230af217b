from typing import Iterable, List

from PIL import Image

from patch_textures.texture import Texture
from patch_textures.types import PatchLookup
from patch_textures.utils.image import blank_canvas, clip_box, ensure_rgba


def draw_patch(canvas: Image.Image, patch_image: Image.Image, x: int, y: int) -> None:
    """
    Source-over blit of ``patch_image`` at (x, y), clipped to the canvas.
    Pixels falling outside the canvas are dropped; no scaling is applied.
    """
    clipped = clip_box(canvas.size, patch_image.size, (x, y))
    if clipped is None:
        return
    dest, source = clipped
    canvas.alpha_composite(ensure_rgba(patch_image), dest=dest, source=source)


def composite(texture: Texture, images: PatchLookup) -> Image.Image:
    """
    Renders a texture as an RGBA PIL Image of exactly width x height.

    Patches are drawn in file order, so later patches sit on top. Raises
    MissingPatchError if ``images`` has no entry for a referenced patch.
    """
    if texture.width < 0 or texture.height < 0:
        raise ValueError(
            f"Texture {texture.name} has negative size: {texture.width}x{texture.height}"
        )
    canvas = blank_canvas(texture.width, texture.height)
    for patch in texture.patches:
        draw_patch(canvas, images.get(patch.name), patch.x, patch.y)
    return canvas


def composite_all(textures: Iterable[Texture], images: PatchLookup) -> List[Image.Image]:
    """
    One raster per texture, in input order.
    """
    return [composite(texture, images) for texture in textures]


class TextureCompositor:
    images: PatchLookup

    def __init__(self, images: PatchLookup):
        self.images = images

    def composite(self, texture: Texture) -> Image.Image:
        return composite(texture, self.images)

    def composite_all(self, textures: Iterable[Texture]) -> List[Image.Image]:
        return composite_all(textures, self.images)
