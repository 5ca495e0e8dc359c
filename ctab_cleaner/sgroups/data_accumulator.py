"""
DataAccumulator
===============

Collects the free-text value of one data sgroup.

A data sgroup value is split across ``M  SCD`` continuation lines and closed
by a single ``M  SED`` line::

    M  SCD   5 first part of a long value ...
    M  SCD   5 ... more of the value ...
    M  SED   5 ... the end

Producers often write lines that are too long, omit the ``SED`` line, or
interleave unrelated lines.  The accumulator merges the payloads into one
string and re-wraps it into lines of at most :attr:`MAX_PAYLOAD` characters,
the last one always being an ``SED`` line.
"""
from __future__ import annotations

from typing import List

from ..parser.fields import pad3


class DataAccumulator:
    """Merged payload of the ``SCD``/``SED`` lines of one sgroup."""

    MAX_PAYLOAD: int = 69

    def __init__(self, sgroup_id: int) -> None:
        self.sgroup_id = sgroup_id
        self.terminated = False
        self._parts: List[str] = []

    def add(self, payload: str) -> None:
        """Append the payload of an ``M  SCD`` line."""
        self._parts.append(payload)

    def terminate(self, payload: str) -> None:
        """Append the payload of the closing ``M  SED`` line."""
        self._parts.append(payload)
        self.terminated = True

    @property
    def text(self) -> str:
        return "".join(self._parts).rstrip()

    def render(self) -> List[str]:
        """
        Return the re-wrapped ``M  SCD`` / ``M  SED`` lines.

        Every line but the last is an ``SCD`` line; the last is ``SED``.
        """
        prefix_id = pad3(self.sgroup_id)
        text, size = self.text, self.MAX_PAYLOAD
        pieces = [text[i : i + size] for i in range(0, len(text), size)] or [""]
        lines = [f"M  SCD {prefix_id} {piece}" for piece in pieces[:-1]]
        lines.append(f"M  SED {prefix_id} {pieces[-1]}".rstrip())
        return lines
