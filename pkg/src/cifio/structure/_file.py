"""CIF file data structure."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from cifio.exception import CIFStructureError
from ._block import CIFBlock
from ._util import normalize_code

if TYPE_CHECKING:
    from cifio.typing import Writer


class CIFFile:
    """CIF file data structure.

    Parameters
    ----------
    blocks
        Data blocks of the file, in file order.
    version
        Version identifier from the `#\\#CIF_` header comment
        (e.g., "CIF_1.1"), if any.

    Raises
    ------
    CIFStructureError
        If a block code is used more than once.
    """

    def __init__(self, blocks: Iterable[CIFBlock] | None = None, version: str | None = None) -> None:
        self._blocks: dict[str, CIFBlock] = {}
        self._version = version
        for block in blocks or ():
            self.add_block(block)
        return

    @property
    def blocks(self) -> dict[str, CIFBlock]:
        """Data blocks, as a mapping of block codes to blocks, in file order."""
        return self._blocks

    @property
    def version(self) -> str | None:
        """Version identifier of the file, if declared."""
        return self._version

    @property
    def codes(self) -> list[str]:
        """Block codes, in file order."""
        return list(self._blocks)

    def add_block(self, block: CIFBlock) -> CIFBlock:
        """Add a data block.

        Raises
        ------
        CIFStructureError
            If a block with the same code already exists in the file.
        """
        if block.name in self._blocks:
            raise CIFStructureError(f"Data block with name '{block.name}' already exists.")
        self._blocks[block.name] = block
        return block

    def write(self, writer: Writer, **kwargs) -> None:
        """Write the file in CIF syntax.

        Parameters
        ----------
        writer
            A callable that takes a string and writes it to the desired output.
        **kwargs
            Formatting options; see `cifio.write`.
        """
        from cifio.writer import CIFWriter
        CIFWriter(writer, **kwargs).write_file(self)
        return

    def __str__(self) -> str:
        """CIF representation of the file."""
        chunks = []
        self.write(chunks.append)
        return "".join(chunks)

    def __getitem__(self, block: str | int) -> CIFBlock:
        """Get a data block by its block code (case-insensitive) or index."""
        if isinstance(block, int):
            return list(self._blocks.values())[block]
        return self._blocks[normalize_code(block)]

    def __contains__(self, block: object) -> bool:
        return isinstance(block, str) and block.lower() in self._blocks

    def __iter__(self) -> Iterator[CIFBlock]:
        """Iterate over data blocks, in file order."""
        return iter(self._blocks.values())

    def __len__(self) -> int:
        """Number of data blocks."""
        return len(self._blocks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CIFFile):
            return NotImplemented
        return self._version == other._version and self._blocks == other._blocks

    def __repr__(self) -> str:
        return f"CIFFile(blocks={self.codes!r}, version={self._version!r})"
