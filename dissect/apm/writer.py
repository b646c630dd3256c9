from __future__ import annotations

import io
import logging
import os
from typing import BinaryIO, NamedTuple

from dissect.apm.c_apm import BLOCK_SIZE, DEFAULT_STATUS, PartitionStatus, PartitionType
from dissect.apm.ddm import DriverDescriptorMap
from dissect.apm.entry import PartitionMapEntry
from dissect.apm.exceptions import InvalidOperationError
from dissect.apm.fixedstring import String32

log = logging.getLogger(__name__)
log.setLevel(os.getenv("DISSECT_LOG_APM", "CRITICAL"))

PARTITION_MAP_NAME = "Apple"


class PartitionDefinition(NamedTuple):
    name: String32
    type: String32
    data: bytes
    status: PartitionStatus


class APMWriter:
    """Build a disk image with an Apple Partition Map.

    The resulting image is laid out as follows::

        block 0             Driver Descriptor Map
        blocks 1..N         partition map entries, the first one describing the map itself
        blocks N+1..        partition data, each padded to a block boundary
    """

    def __init__(self):
        self.partitions: list[PartitionDefinition] = []

    def add_partition(
        self, name: str | bytes, type: str | bytes, data: bytes, status: PartitionStatus = DEFAULT_STATUS
    ) -> None:
        if name is None:
            raise ValueError("Partition name is required")
        if type is None:
            raise ValueError("Partition type is required")
        if data is None:
            raise ValueError("Partition data is required")

        self.partitions.append(
            PartitionDefinition(String32.coerce(name), String32.coerce(type), data, PartitionStatus(status))
        )

    def layout(self) -> tuple[DriverDescriptorMap, list[PartitionMapEntry]]:
        """Calculate the Driver Descriptor Map and partition map entries for the added partitions."""
        if not self.partitions:
            raise InvalidOperationError("At least one partition must be added before writing")

        # One entry for every partition, plus the partition map itself
        map_entry_count = len(self.partitions) + 1
        # Block 0 is the Driver Descriptor Map
        data_start_block = map_entry_count + 1

        block_counts = [_block_count(len(p.data)) for p in self.partitions]
        total_blocks = data_start_block + sum(block_counts)

        ddm = DriverDescriptorMap(block_size=BLOCK_SIZE, block_count=total_blocks)

        entries = [
            PartitionMapEntry(
                map_entry_count=map_entry_count,
                partition_start=1,
                partition_count=map_entry_count,
                name=PARTITION_MAP_NAME,
                type=PartitionType.APPLE_PARTITION_MAP,
                data_start=0,
                data_count=map_entry_count,
                status=DEFAULT_STATUS,
            )
        ]

        start = data_start_block
        for partition, block_count in zip(self.partitions, block_counts):
            entries.append(
                PartitionMapEntry(
                    map_entry_count=map_entry_count,
                    partition_start=start,
                    partition_count=block_count,
                    name=partition.name,
                    type=partition.type,
                    data_start=0,
                    data_count=block_count,
                    status=partition.status,
                )
            )
            start += block_count

        log.debug(
            "Partition map layout: %d entries, data starts at block %d, %d blocks total",
            map_entry_count,
            data_start_block,
            total_blocks,
        )
        return ddm, entries

    def write(self, fh: BinaryIO) -> int:
        """Write the image to ``fh``, starting at its current position.

        Returns the number of bytes written.
        """
        if fh is None:
            raise ValueError("A file-like object is required")

        if hasattr(fh, "writable") and not fh.writable():
            raise io.UnsupportedOperation("File-like object must be writable")

        # Encode everything up front, so a failure doesn't leave a partial image behind
        ddm, entries = self.layout()
        blocks = [ddm.dumps().ljust(BLOCK_SIZE, b"\x00")]
        blocks.extend(entry.dumps_block() for entry in entries)

        written = 0
        for block in blocks:
            written += fh.write(block)

        for partition, entry in zip(self.partitions, entries[1:]):
            written += fh.write(partition.data)

            padding = entry.size - len(partition.data)
            if padding:
                written += fh.write(b"\x00" * padding)

        return written


def _block_count(size: int) -> int:
    return (size + BLOCK_SIZE - 1) // BLOCK_SIZE
