"""CIF save frame data structure."""

from ._block_like import CIFBlockLike


class CIFFrame(CIFBlockLike):
    """CIF save frame.

    A named group of single data items and tables inside a data block.
    Frames cannot contain other frames.
    """

    def __repr__(self) -> str:
        return f"CIFFrame(name={self.name!r}, tags={len(self)})"
