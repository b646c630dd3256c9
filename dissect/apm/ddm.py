from __future__ import annotations

from dataclasses import dataclass, field

from dissect.apm.c_apm import (
    DDM_MAX_DRIVERS,
    DDM_SIGNATURE,
    DDM_SIZE,
    c_apm,
)
from dissect.apm.exceptions import APMError, InvalidSignatureError


@dataclass
class DriverDescriptor:
    start_block: int = 0
    block_count: int = 0
    os_type: int = 0


@dataclass
class DriverDescriptorMap:
    """Driver Descriptor Map, found in block 0 of the device.

    Describes the device geometry and up to 8 device drivers. All 8 descriptor slots are always decoded and
    encoded, only the first ``driver_count`` of them carry meaning.
    """

    block_size: int = 0
    block_count: int = 0
    device_type: int = 0
    device_id: int = 0
    driver_data: int = 0
    driver_count: int = 0
    entries: list[DriverDescriptor] = field(default_factory=list)
    signature: int = field(default=DDM_SIGNATURE, init=False)

    def __post_init__(self):
        if self.driver_count > DDM_MAX_DRIVERS:
            raise ValueError(f"Driver count {self.driver_count} exceeds the maximum of {DDM_MAX_DRIVERS}")

        if len(self.entries) > DDM_MAX_DRIVERS:
            raise ValueError(f"At most {DDM_MAX_DRIVERS} driver descriptors are allowed, got {len(self.entries)}")

        self.entries = list(self.entries) + [
            DriverDescriptor() for _ in range(DDM_MAX_DRIVERS - len(self.entries))
        ]

    @classmethod
    def from_bytes(cls, data: bytes) -> DriverDescriptorMap:
        if len(data) != DDM_SIZE:
            raise ValueError(f"Driver Descriptor Map must be exactly {DDM_SIZE} bytes, got {len(data)}")

        ddm = c_apm.driver_descriptor_map(data)
        if ddm.sb_sig != DDM_SIGNATURE:
            raise InvalidSignatureError(
                f"Invalid Driver Descriptor Map signature, expected {DDM_SIGNATURE:#06x}, got {ddm.sb_sig:#06x}"
            )

        if ddm.sb_drvr_count > DDM_MAX_DRIVERS:
            raise APMError(f"Invalid Driver Descriptor Map driver count: {ddm.sb_drvr_count} > {DDM_MAX_DRIVERS}")

        return cls(
            block_size=ddm.sb_blk_size,
            block_count=ddm.sb_blk_count,
            device_type=ddm.sb_dev_type,
            device_id=ddm.sb_dev_id,
            driver_data=ddm.sb_data,
            driver_count=ddm.sb_drvr_count,
            entries=[DriverDescriptor(dd.dd_block, dd.dd_size, dd.dd_type) for dd in ddm.dd_entries],
        )

    @property
    def drivers(self) -> list[DriverDescriptor]:
        return self.entries[: self.driver_count]

    def dumps(self) -> bytes:
        return c_apm.driver_descriptor_map(
            sb_sig=DDM_SIGNATURE,
            sb_blk_size=self.block_size,
            sb_blk_count=self.block_count,
            sb_dev_type=self.device_type,
            sb_dev_id=self.device_id,
            sb_data=self.driver_data,
            sb_drvr_count=self.driver_count,
            dd_entries=[
                c_apm.driver_descriptor(dd_block=dd.start_block, dd_size=dd.block_count, dd_type=dd.os_type)
                for dd in self.entries
            ],
        ).dumps()
