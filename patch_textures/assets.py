"""Filesystem glue: per-game asset layout, loaders and the full render pipeline.

Expected layout under ``asset_root``::

    <game>/textures/texture1.txt
    <game>/textures/texture2.txt      (absent for doom2)
    <game>/patches/<patch name>.png

Nothing in here is needed to parse or composite; it only wires files to the
core the way the original texture viewer page did.
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from PIL import Image
from pyrsistent import PVector

from patch_textures.parser import parse_texture_files
from patch_textures.patch_set import PatchImageSet
from patch_textures.renderer.compositor import composite_all
from patch_textures.texture import Texture
from patch_textures.types import ImageResolver, PatchName

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_GAME = "doom1"
DEFAULT_ASSET_ROOT = "."
SINGLE_TEXTURE_FILE_GAMES = frozenset({"doom2"})
KNOWN_GAMES = ("doom1", "doom2", "tnt", "plutonia")

GAME_ENV_VAR = "PATCH_TEXTURES_GAME"
ROOT_ENV_VAR = "PATCH_TEXTURES_ROOT"


@dataclass(frozen=True)
class GameAssets:
    """Where one game's definition files and patch images live.

    Attributes:
        game: Game directory name, e.g. ``doom1``.
        asset_root: Directory containing one subdirectory per game.
        patch_dir: Patch image directory, relative to the game directory.
        patch_extension: File extension appended to patch names.
        texture_dir: Definition file directory, relative to the game directory.
    """

    game: str = DEFAULT_GAME
    asset_root: str = DEFAULT_ASSET_ROOT
    patch_dir: str = "patches"
    patch_extension: str = ".png"
    texture_dir: str = "textures"

    def game_root(self) -> Path:
        return Path(self.asset_root) / self.game

    def patch_root(self) -> Path:
        return self.game_root() / self.patch_dir

    def texture_files(self) -> List[Path]:
        """Definition files in load order; doom2 ships only texture1.txt."""
        names = ["texture1.txt"]
        if self.game not in SINGLE_TEXTURE_FILE_GAMES:
            names.append("texture2.txt")
        return [self.game_root() / self.texture_dir / name for name in names]

    def resolver(self) -> ImageResolver:
        return file_image_resolver(self.patch_root(), self.patch_extension)


def game_assets_from_env() -> GameAssets:
    """Build a :class:`GameAssets` from environment variables, with defaults."""
    return GameAssets(
        game=os.environ.get(GAME_ENV_VAR, DEFAULT_GAME),
        asset_root=os.environ.get(ROOT_ENV_VAR, DEFAULT_ASSET_ROOT),
    )


def open_image(path: PathLike) -> Image.Image:
    with Image.open(path) as image:
        return image.convert("RGBA")


def file_image_resolver(root: PathLike, extension: str = ".png") -> ImageResolver:
    """Resolver mapping ``name`` to ``<root>/<name><extension>``.

    Decoding runs in a worker thread so the event loop keeps servicing other
    loads. Missing or unreadable files raise from the awaiting join.
    """
    root_path = Path(root)

    async def resolve(name: PatchName) -> Image.Image:
        return await asyncio.to_thread(open_image, root_path / f"{name}{extension}")

    return resolve


def read_definition_file(path: PathLike) -> str:
    return Path(path).read_text(encoding="utf-8-sig")


async def load_definition_files(paths: Iterable[PathLike]) -> PVector[Texture]:
    """Read and parse every file, concatenating results in file-list order."""
    paths = list(paths)
    for path in paths:
        logger.info("Loading textures from %s", path)
    texts = await asyncio.gather(
        *(asyncio.to_thread(read_definition_file, path) for path in paths)
    )
    textures = parse_texture_files(texts)
    logger.info("Loaded %d textures from %d files", len(textures), len(paths))
    return textures


async def render_textures(
    textures: Iterable[Texture], images: PatchImageSet
) -> List[Tuple[Texture, Image.Image]]:
    """Load every distinct patch once, then composite each texture in order.

    Compositing runs in a worker thread so the event loop is not blocked for
    the whole batch.
    """
    textures = list(textures)
    await images.load_all(textures)
    rasters = await asyncio.to_thread(composite_all, textures, images)
    return list(zip(textures, rasters))


async def render_all_textures(
    assets: GameAssets,
) -> List[Tuple[Texture, Image.Image]]:
    """Full pipeline for one game: definitions, patch loading, compositing."""
    textures = await load_definition_files(assets.texture_files())
    return await render_textures(textures, PatchImageSet(assets.resolver()))
