from __future__ import annotations

from dataclasses import dataclass, field

from dissect.apm.c_apm import (
    BLOCK_SIZE,
    DEFAULT_STATUS,
    PARTITION_ENTRY_SIZE,
    PM_SIGNATURE,
    PartitionStatus,
    c_apm,
)
from dissect.apm.exceptions import InvalidSignatureError
from dissect.apm.fixedstring import String16, String32


@dataclass
class PartitionMapEntry:
    """A single partition map entry.

    Every entry occupies one block of the partition map, of which only the first 136 bytes are used. The
    ``map_entry_count`` is stored redundantly in every entry and describes the size of the whole map.

    The signature, padding and reserved words are not settable, new entries always get the magic value and zeroes.
    Entries read from disk keep whatever was read, so they are written back verbatim by :meth:`dumps`.
    """

    map_entry_count: int
    partition_start: int
    partition_count: int
    name: String32 | str | bytes
    type: String32 | str | bytes
    data_start: int = 0
    data_count: int = 0
    status: PartitionStatus = DEFAULT_STATUS
    boot_code_start: int = 0
    boot_code_size: int = 0
    boot_code_address: int = 0
    boot_code_entry: int = 0
    boot_code_checksum: int = 0
    processor_type: String16 | str | bytes = field(default_factory=String16.empty)

    signature: int = field(default=PM_SIGNATURE, init=False)
    padding: int = field(default=0, init=False, repr=False)
    reserved_1: int = field(default=0, init=False, repr=False)
    reserved_2: int = field(default=0, init=False, repr=False)

    def __post_init__(self):
        self.name = String32.coerce(self.name)
        self.type = String32.coerce(self.type)
        self.processor_type = String16.coerce(self.processor_type)
        self.status = PartitionStatus(self.status)

    @classmethod
    def from_bytes(cls, data: bytes) -> PartitionMapEntry:
        if len(data) != PARTITION_ENTRY_SIZE:
            raise ValueError(f"Partition map entry must be exactly {PARTITION_ENTRY_SIZE} bytes, got {len(data)}")

        pm = c_apm.partition_entry(data)
        if pm.pm_sig != PM_SIGNATURE:
            raise InvalidSignatureError(
                f"Invalid partition map entry signature, expected {PM_SIGNATURE:#06x}, got {pm.pm_sig:#06x}"
            )

        entry = cls(
            map_entry_count=pm.pm_map_blk_cnt,
            partition_start=pm.pm_py_part_start,
            partition_count=pm.pm_part_blk_cnt,
            name=String32(pm.pm_part_name),
            type=String32(pm.pm_par_type),
            data_start=pm.pm_lg_data_start,
            data_count=pm.pm_data_cnt,
            status=PartitionStatus(pm.pm_part_status),
            boot_code_start=pm.pm_lg_boot_start,
            boot_code_size=pm.pm_boot_size,
            boot_code_address=pm.pm_boot_addr,
            boot_code_entry=pm.pm_boot_entry,
            boot_code_checksum=pm.pm_boot_cksum,
            processor_type=String16(pm.pm_processor),
        )
        entry.padding = pm.pm_sig_pad
        entry.reserved_1 = pm.pm_boot_addr2
        entry.reserved_2 = pm.pm_boot_entry2
        return entry

    @property
    def offset(self) -> int:
        """Offset of the partition in bytes, relative to the start of the volume."""
        return self.partition_start * BLOCK_SIZE

    @property
    def size(self) -> int:
        """Size of the partition in bytes."""
        return self.partition_count * BLOCK_SIZE

    def dumps(self) -> bytes:
        return c_apm.partition_entry(
            pm_sig=PM_SIGNATURE,
            pm_sig_pad=self.padding,
            pm_map_blk_cnt=self.map_entry_count,
            pm_py_part_start=self.partition_start,
            pm_part_blk_cnt=self.partition_count,
            pm_part_name=bytes(self.name),
            pm_par_type=bytes(self.type),
            pm_lg_data_start=self.data_start,
            pm_data_cnt=self.data_count,
            pm_part_status=int(self.status),
            pm_lg_boot_start=self.boot_code_start,
            pm_boot_size=self.boot_code_size,
            pm_boot_addr=self.boot_code_address,
            pm_boot_addr2=self.reserved_1,
            pm_boot_entry=self.boot_code_entry,
            pm_boot_entry2=self.reserved_2,
            pm_boot_cksum=self.boot_code_checksum,
            pm_processor=bytes(self.processor_type),
        ).dumps()

    def dumps_block(self) -> bytes:
        """Return the entry padded to a full block."""
        return self.dumps().ljust(BLOCK_SIZE, b"\x00")
