from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, BinaryIO, Optional

from dissect.util.stream import RelativeStream

from dissect.apm.c_apm import BLOCK_SIZE, DDM_SIZE, PARTITION_ENTRY_SIZE, PM_SIGNATURE, c_apm
from dissect.apm.ddm import DriverDescriptorMap
from dissect.apm.entry import PartitionMapEntry
from dissect.apm.exceptions import InvalidSignatureError, TruncatedError

if TYPE_CHECKING:
    from collections.abc import Iterator

log = logging.getLogger(__name__)
log.setLevel(os.getenv("DISSECT_LOG_APM", "CRITICAL"))


class APM:
    """Apple Partition Map.

    The map is not loaded up front, every entry is read from ``fh`` when it's requested.

    Args:
        fh: A seekable and readable file-like object containing the volume.
        offset: The offset in bytes of the volume (block 0) within ``fh``.
    """

    def __init__(self, fh: BinaryIO, offset: int = 0):
        _check_readable(fh)

        self.fh = fh
        self.offset = offset

        if not APM.detect(fh, offset):
            raise InvalidSignatureError(
                f"No Apple Partition Map found at offset {offset:#x}, expected signature {PM_SIGNATURE:#06x} in block 1"
            )

    def __repr__(self) -> str:
        return f"<APM offset={self.offset:#x} count={self.count}>"

    @staticmethod
    def detect(fh: BinaryIO, offset: int = 0) -> bool:
        """Check whether ``fh`` contains an Apple Partition Map at ``offset``.

        The file position of ``fh`` is left untouched.
        """
        _check_readable(fh)

        position = fh.tell()
        try:
            fh.seek(offset + BLOCK_SIZE)
            buf = fh.read(2)
            if len(buf) != 2:
                log.debug("Short read while probing for APM at offset %#x", offset)
                return False

            return c_apm.uint16(buf) == PM_SIGNATURE
        finally:
            fh.seek(position)

    @property
    def count(self) -> int:
        """The number of entries in the partition map, as declared by the first entry."""
        return self.entry(0).map_entry_count

    def __len__(self) -> int:
        return self.count

    def __getitem__(self, index: int | slice) -> PartitionMapEntry | list[PartitionMapEntry]:
        count = self.count
        if isinstance(index, slice):
            return [self.entry(i) for i in range(*index.indices(count))]

        if not isinstance(index, int):
            raise TypeError(f"Partition map entry indices must be integers or slices, not {index.__class__.__name__}")

        if index < 0:
            index += count

        if not 0 <= index < count:
            raise IndexError(f"Partition map entry index out of range: {index}")

        return self.entry(index)

    def __iter__(self) -> Iterator[PartitionMapEntry]:
        return self.entries()

    def entries(self) -> Iterator[PartitionMapEntry]:
        for i in range(self.count):
            yield self.entry(i)

    def entry(self, index: int) -> PartitionMapEntry:
        """Read the partition map entry at ``index``.

        Entry 0 is always the partition map itself.
        """
        self.fh.seek(self.offset + BLOCK_SIZE + index * BLOCK_SIZE)
        buf = self.fh.read(BLOCK_SIZE)
        if len(buf) != BLOCK_SIZE:
            raise TruncatedError(f"Unable to read partition map entry {index}, got {len(buf)} of {BLOCK_SIZE} bytes")

        return PartitionMapEntry.from_bytes(buf[:PARTITION_ENTRY_SIZE])

    @property
    def driver_descriptor_map(self) -> Optional[DriverDescriptorMap]:
        return self.get_driver_descriptor_map()

    def get_driver_descriptor_map(self) -> Optional[DriverDescriptorMap]:
        """Read the Driver Descriptor Map from block 0.

        Returns ``None`` if block 0 doesn't contain one (zero signature). The file position of ``fh`` is left
        untouched.
        """
        position = self.fh.tell()
        try:
            self.fh.seek(self.offset)
            buf = self.fh.read(DDM_SIZE)
            if len(buf) != DDM_SIZE:
                raise TruncatedError(f"Unable to read Driver Descriptor Map, got {len(buf)} of {DDM_SIZE} bytes")

            if c_apm.uint16(buf[:2]) == 0:
                log.debug("No Driver Descriptor Map present at offset %#x", self.offset)
                return None

            return DriverDescriptorMap.from_bytes(buf)
        finally:
            self.fh.seek(position)

    def open(self, index: int) -> BinaryIO:
        """Open the data of the partition at ``index`` as a stream."""
        entry = self[index]
        return RelativeStream(self.fh, self.offset + entry.offset, entry.size)


def _check_readable(fh: BinaryIO) -> None:
    if fh is None:
        raise ValueError("A file-like object is required")

    if (hasattr(fh, "seekable") and not fh.seekable()) or (hasattr(fh, "readable") and not fh.readable()):
        raise ValueError("File-like object must be seekable and readable")
