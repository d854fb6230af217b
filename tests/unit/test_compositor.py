import numpy as np
import pytest
from PIL import Image

from patch_textures.errors import MissingPatchError
from patch_textures.renderer import TextureCompositor, composite, composite_all
from patch_textures.texture import Patch, Texture
from patch_textures.utils.image import to_array
from tests.test_utils import (
    BLUE,
    GREEN,
    RED,
    TRANSPARENT,
    make_image_set,
    solid_image,
)


def make_texture(name: str, size: int, *patches: Patch) -> Texture:
    texture = Texture(name, size, size)
    for patch in patches:
        texture = texture.add_patch(patch)
    return texture


def gradient_image(width: int, height: int) -> Image.Image:
    """Opaque image whose pixel (x, y) encodes its own coordinates."""
    image = Image.new("RGBA", (width, height))
    for y in range(height):
        for x in range(width):
            image.putpixel((x, y), (x * 10, y * 10, 0, 255))
    return image


def test_canvas_has_declared_size_and_is_transparent() -> None:
    result = composite(Texture("EMPTY", 5, 3), make_image_set({}))
    assert result.mode == "RGBA"
    assert result.size == (5, 3)
    assert not to_array(result).any()


def test_later_patch_draws_on_top() -> None:
    images = make_image_set({"red": solid_image((4, 4), RED), "green": solid_image((4, 4), GREEN)})
    top_green = make_texture("T", 4, Patch("RED", 0, 0), Patch("GREEN", 0, 0))
    top_red = make_texture("T", 4, Patch("GREEN", 0, 0), Patch("RED", 0, 0))
    assert composite(top_green, images).getpixel((2, 2)) == GREEN
    assert composite(top_red, images).getpixel((2, 2)) == RED


def test_partial_overlap() -> None:
    images = make_image_set({"red": solid_image((4, 4), RED), "blue": solid_image((4, 4), BLUE)})
    texture = make_texture("T", 8, Patch("red", 0, 0), Patch("blue", 2, 2))
    result = composite(texture, images)
    assert result.getpixel((1, 1)) == RED
    assert result.getpixel((3, 3)) == BLUE
    assert result.getpixel((5, 5)) == BLUE
    assert result.getpixel((3, 0)) == RED
    assert result.getpixel((7, 7)) == TRANSPARENT


def test_patch_drawn_at_native_resolution() -> None:
    images = make_image_set({"p": gradient_image(3, 2)})
    result = composite(make_texture("T", 6, Patch("p", 2, 1)), images)
    expected = np.zeros((6, 6, 4), dtype=np.uint8)
    expected[1:3, 2:5] = to_array(gradient_image(3, 2))
    assert np.array_equal(to_array(result), expected)


def test_clipped_past_bottom_right() -> None:
    images = make_image_set({"red": solid_image((4, 4), RED)})
    result = composite(make_texture("T", 8, Patch("red", 6, 6)), images)
    assert result.size == (8, 8)
    assert result.getpixel((7, 7)) == RED
    assert result.getpixel((5, 5)) == TRANSPARENT


def test_clipped_at_negative_offsets() -> None:
    images = make_image_set({"p": gradient_image(4, 4)})
    result = composite(make_texture("T", 4, Patch("p", -1, -2)), images)
    assert result.getpixel((0, 0)) == (10, 20, 0, 255)
    assert result.getpixel((2, 1)) == (30, 30, 0, 255)
    assert result.getpixel((3, 3)) == TRANSPARENT
    assert result.getpixel((0, 2)) == TRANSPARENT


@pytest.mark.parametrize("x, y", [(-4, 0), (0, -10), (8, 0), (3, 100)])
def test_fully_outside_patch_draws_nothing(x: int, y: int) -> None:
    images = make_image_set({"red": solid_image((4, 4), RED)})
    result = composite(make_texture("T", 8, Patch("red", x, y)), images)
    assert not to_array(result).any()


def test_transparent_patch_pixels_keep_lower_layer() -> None:
    hole = solid_image((4, 4), GREEN)
    hole.putpixel((1, 1), TRANSPARENT)
    images = make_image_set({"red": solid_image((4, 4), RED), "hole": hole})
    result = composite(make_texture("T", 4, Patch("red", 0, 0), Patch("hole", 0, 0)), images)
    assert result.getpixel((1, 1)) == RED
    assert result.getpixel((0, 0)) == GREEN


def test_semi_transparent_patch_blends() -> None:
    images = make_image_set(
        {"blue": solid_image((2, 2), BLUE), "glass": solid_image((2, 2), (255, 0, 0, 128))}
    )
    result = composite(make_texture("T", 2, Patch("blue", 0, 0), Patch("glass", 0, 0)), images)
    r, g, b, a = result.getpixel((0, 0))
    assert a == 255
    assert 100 < r < 160
    assert 100 < b < 160
    assert g == 0


def test_rgb_patch_is_accepted() -> None:
    images = make_image_set({"rgb": Image.new("RGB", (2, 2), (1, 2, 3))})
    result = composite(make_texture("T", 2, Patch("rgb", 0, 0)), images)
    assert result.getpixel((1, 1)) == (1, 2, 3, 255)


def test_lookup_is_case_insensitive() -> None:
    images = make_image_set({"BRICK": solid_image((2, 2), RED)})
    result = composite(make_texture("T", 2, Patch("Brick", 0, 0)), images)
    assert result.getpixel((0, 0)) == RED


def test_missing_patch_raises() -> None:
    images = make_image_set({"red": solid_image((2, 2), RED)})
    texture = make_texture("T", 2, Patch("red", 0, 0), Patch("GONE", 0, 0))
    with pytest.raises(MissingPatchError) as exc_info:
        composite(texture, images)
    assert exc_info.value.name == "gone"


def test_negative_texture_size_rejected() -> None:
    with pytest.raises(ValueError):
        composite(Texture("SKY1", -256, 128), make_image_set({}))


def test_composite_all_keeps_input_order() -> None:
    images = make_image_set({"red": solid_image((1, 1), RED), "blue": solid_image((1, 1), BLUE)})
    textures = [
        make_texture("A", 1, Patch("red", 0, 0)),
        make_texture("B", 2, Patch("blue", 0, 0)),
        make_texture("A", 1, Patch("red", 0, 0)),
    ]
    results = composite_all(textures, images)
    assert [r.size for r in results] == [(1, 1), (2, 2), (1, 1)]
    assert [r.getpixel((0, 0)) for r in results] == [RED, BLUE, RED]


def test_texture_compositor_wraps_functions() -> None:
    images = make_image_set({"red": solid_image((1, 1), RED)})
    compositor = TextureCompositor(images)
    texture = make_texture("A", 1, Patch("red", 0, 0))
    assert compositor.composite(texture).getpixel((0, 0)) == RED
    assert len(compositor.composite_all([texture, texture])) == 2


def test_composite_does_not_modify_patch_images() -> None:
    red = solid_image((2, 2), RED)
    images = make_image_set({"red": red, "blue": solid_image((2, 2), BLUE)})
    composite(make_texture("T", 2, Patch("red", 0, 0), Patch("blue", 0, 0)), images)
    assert red.getpixel((0, 0)) == RED
