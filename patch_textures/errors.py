"""Exception taxonomy.

* :class:`ParseError` for malformed definition lines; parsing aborts and no
  partial result is returned.
* :class:`UndefinedTextureContextError` for a patch line with no texture
  header before it.
* :class:`MissingPatchError` when compositing asks for a patch image that was
  never registered or has not finished loading. This is a caller bug, not an
  input condition, so nothing retries it.
"""

from typing import Optional


class ParseError(ValueError):
    """Malformed line in a texture definition file.

    Attributes:
        line: Raw offending line content.
        line_number: 1-based line number, if known.
    """

    def __init__(
        self, line: str, line_number: Optional[int] = None, reason: str = "syntax error"
    ):
        self.line = line
        self.line_number = line_number
        self.reason = reason
        where = f" at line {line_number}" if line_number is not None else ""
        super().__init__(f"Parse error in texture file{where} ({reason}): {line!r}")


class UndefinedTextureContextError(ParseError):
    """Patch line encountered before any texture header."""

    def __init__(self, line: str, line_number: Optional[int] = None):
        super().__init__(line, line_number, reason="patch before any texture header")


class MissingPatchError(LookupError):
    """Patch image not present in the loaded set."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Patch not in loaded set: {name}")
