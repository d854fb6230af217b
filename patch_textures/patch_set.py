"""Patch image registry with deduplicated asynchronous loading.

:class:`PatchImageSet` maps normalized patch names to decoded images. Loading
is delegated to an :data:`~patch_textures.types.ImageResolver`; the set only
does the bookkeeping:

* every distinct name is requested at most once, no matter how many textures
  or patches reference it (duplicates never inflate the pending count);
* :meth:`PatchImageSet.wait_loaded` is the join: it returns only once every
  request issued so far has completed, in whatever order they finish;
* a name becomes visible to :meth:`PatchImageSet.get` only after its image
  has finished loading.

Timeouts and cancellation are the caller's business, e.g.
``await asyncio.wait_for(images.load_all(textures), 30)``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Dict, Iterable, List, Optional

from PIL.Image import Image

from patch_textures.errors import MissingPatchError
from patch_textures.texture import Texture, distinct_patch_names
from patch_textures.types import ImageResolver, PatchName, normalize_name

logger = logging.getLogger(__name__)


class PatchImageSet:
    """Name-keyed store of loaded patch images.

    Arguments:
        resolver: Coroutine function fetching a decoded image by patch name.
            Optional for sets populated only through :meth:`add`.
    """

    def __init__(self, resolver: Optional[ImageResolver] = None):
        self._resolver = resolver
        self._images: Dict[PatchName, Image] = {}
        self._in_flight: Dict[PatchName, asyncio.Task[Image]] = {}

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._images

    def __len__(self) -> int:
        return len(self._images)

    @property
    def pending(self) -> int:
        """Number of requests issued but not yet completed."""
        return len(self._in_flight)

    def names(self) -> List[PatchName]:
        return sorted(self._images)

    def add(self, name: str, image: Image) -> None:
        """Register an already decoded image."""
        self._images[normalize_name(name)] = image

    def get(self, name: str) -> Image:
        key = normalize_name(name)
        try:
            return self._images[key]
        except KeyError:
            raise MissingPatchError(key) from None

    def ensure_loaded(self, name: str) -> bool:
        """Request ``name`` unless it is already loaded or in flight.

        Must be called with a running event loop. Returns True if a new load
        request was issued.
        """
        key = normalize_name(name)
        if key in self._images or key in self._in_flight:
            return False
        if self._resolver is None:
            raise ValueError(f"Cannot load patch {key}: no image resolver configured")
        logger.debug("Requesting patch: %s", key)
        task = asyncio.get_running_loop().create_task(self._load(key))
        self._in_flight[key] = task
        task.add_done_callback(lambda done: self._forget(key, done))
        return True

    def ensure_loaded_all(self, textures: Iterable[Texture]) -> int:
        """Request every distinct patch referenced by ``textures``.

        Returns the number of new requests issued.
        """
        return sum(self.ensure_loaded(name) for name in distinct_patch_names(textures))

    async def wait_loaded(self) -> None:
        """Join on every in-flight request; resolver errors propagate."""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight.values()))

    async def load_all(
        self,
        textures: Iterable[Texture],
        on_loaded: Optional[Callable[[], None]] = None,
    ) -> None:
        """Load all patches of ``textures`` and then fire ``on_loaded`` once."""
        requested = self.ensure_loaded_all(textures)
        logger.debug("Waiting for %d patch loads", requested)
        await self.wait_loaded()
        if on_loaded is not None:
            on_loaded()

    async def _load(self, key: PatchName) -> Image:
        assert self._resolver is not None
        image = await self._resolver(key)
        self._images[key] = image
        logger.debug("Patch loaded: %s", key)
        return image

    def _forget(self, key: PatchName, task: asyncio.Task[Image]) -> None:
        # Runs for completed, failed and cancelled (possibly never started) loads.
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
