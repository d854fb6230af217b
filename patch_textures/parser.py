"""Texture definition file parser.

Grammar (one record per line, tried in this order)::

    ; comment                      ignored
    NAME WIDTH HEIGHT               texture header, starts a new texture
    * PATCH X Y                     patch placement for the current texture
    <blank>                         ignored

Anything else is a syntax error and aborts the parse. The header pattern
cannot match a patch line because ``*`` is not part of the name class, so the
leading ``*`` is what disambiguates the two record kinds.

The parse is a left fold over numbered lines. :class:`ParseState` carries the
textures produced so far plus the texture that patch lines attach to; a patch
line seen while ``current`` is still ``None`` is the explicit
:class:`UndefinedTextureContextError` branch.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Optional, Tuple

from pyrsistent import PVector, pvector

from patch_textures.errors import ParseError, UndefinedTextureContextError
from patch_textures.texture import Patch, Texture

logger = logging.getLogger(__name__)

COMMENT_RE = re.compile(r"^\s*;")
TEXTURE_RE = re.compile(r"^\s*([A-Za-z0-9_-]+)\s*(-?[0-9]+)\s*(-?[0-9]+)")
PATCH_RE = re.compile(r"^\s*\*\s*([A-Za-z0-9_-]+)\s*(-?[0-9]+)\s*(-?[0-9]+)")
EMPTY_RE = re.compile(r"^\s*$")

NumberedLine = Tuple[int, str]


@dataclass(frozen=True)
class ParseState:
    """Fold accumulator.

    Attributes:
        textures: Textures in header order; the last one is ``current``.
        current: Texture receiving patch lines, ``None`` before the first header.
    """

    textures: PVector[Texture] = pvector()
    current: Optional[Texture] = None


def _start_texture(state: ParseState, texture: Texture) -> ParseState:
    return ParseState(textures=state.textures.append(texture), current=texture)


def _append_patch(state: ParseState, patch: Patch, line: NumberedLine) -> ParseState:
    line_number, raw = line
    if state.current is None:
        raise UndefinedTextureContextError(raw, line_number)
    current = state.current.add_patch(patch)
    textures = state.textures.set(len(state.textures) - 1, current)
    return ParseState(textures=textures, current=current)


def parse_line(state: ParseState, line: NumberedLine) -> ParseState:
    """Apply a single numbered line to the accumulator."""
    line_number, raw = line

    if COMMENT_RE.match(raw):
        return state

    m = TEXTURE_RE.match(raw)
    if m:
        texture = Texture(m.group(1), int(m.group(2)), int(m.group(3)))
        return _start_texture(state, texture)

    m = PATCH_RE.match(raw)
    if m:
        patch = Patch(m.group(1), int(m.group(2)), int(m.group(3)))
        return _append_patch(state, patch, line)

    if EMPTY_RE.match(raw):
        return state

    raise ParseError(raw, line_number)


def parse_textures(text: str) -> PVector[Texture]:
    """Parse a definition file body into textures, in header order.

    Raises:
        ParseError: On the first malformed line.
        UndefinedTextureContextError: If a patch line precedes every header.
    """
    lines = enumerate(text.split("\n"), start=1)
    state = reduce(parse_line, lines, ParseState())
    logger.debug("Parsed %d textures", len(state.textures))
    return state.textures


def parse_texture_files(texts: Iterable[str]) -> PVector[Texture]:
    """Parse several definition files and concatenate them in the given order."""
    textures: PVector[Texture] = pvector()
    for text in texts:
        textures = textures.extend(parse_textures(text))
    return textures
