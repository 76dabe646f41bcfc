"""CIF data block data structure."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from cifio.exception import CIFStructureError
from ._block_like import CIFBlockLike
from ._frame import CIFFrame
from ._table import CIFTable
from ._util import normalize_code
from ._value import ValueLike


class CIFBlock(CIFBlockLike):
    """CIF data block.

    Parameters
    ----------
    name
        Block code (case-insensitive; stored in lowercase).
    items
        Single data items, as a mapping of data names to values.
    tables
        Tables of the block.
    frames
        Save frames of the block.

    Raises
    ------
    CIFStructureError
        If a data name or a frame code is used more than once.
    """

    def __init__(
        self,
        name: str,
        *,
        items: Mapping[str, ValueLike] | None = None,
        tables: Iterable[CIFTable] | None = None,
        frames: Iterable[CIFFrame] | None = None,
    ) -> None:
        super().__init__(name, items=items, tables=tables)
        self._frames: dict[str, CIFFrame] = {}
        for frame in frames or ():
            self.add_frame(frame)
        return

    @property
    def frames(self) -> dict[str, CIFFrame]:
        """Save frames, as a mapping of frame codes to frames."""
        return self._frames

    def frame(self, name: str) -> CIFFrame:
        """Get a save frame by its frame code (case-insensitive)."""
        return self._frames[normalize_code(name)]

    def add_frame(self, frame: CIFFrame) -> CIFFrame:
        """Add a save frame.

        Raises
        ------
        CIFStructureError
            If a frame with the same code already exists in the block.
        """
        if frame.name in self._frames:
            raise CIFStructureError(
                f"Save frame with name '{frame.name}' already exists in data block '{self.name}'."
            )
        self._frames[frame.name] = frame
        return frame

    def __eq__(self, other: object) -> bool:
        equal = super().__eq__(other)
        if equal is not True:
            return equal
        return self._frames == other._frames

    def __repr__(self) -> str:
        return f"CIFBlock(name={self.name!r}, tags={len(self)}, frames={list(self._frames)!r})"
