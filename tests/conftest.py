from __future__ import annotations

import io
import struct
from typing import BinaryIO

import pytest

PM_FORMAT = ">HHIII32s32sIIIIIIIIII16s"
DDM_FORMAT = ">HHIHHIH" + "IHH" * 8


def pack_entry(
    map_entry_count: int,
    start: int,
    count: int,
    name: bytes,
    type: bytes,
    status: int,
    signature: int = 0x504D,
    padding: int = 0,
    boot: tuple[int, int, int, int, int] = (0, 0, 0, 0, 0),
    reserved: tuple[int, int] = (0, 0),
    processor: bytes = b"",
) -> bytes:
    boot_start, boot_size, boot_addr, boot_entry, boot_checksum = boot
    return struct.pack(
        PM_FORMAT,
        signature,
        padding,
        map_entry_count,
        start,
        count,
        name,
        type,
        0,
        count,
        status,
        boot_start,
        boot_size,
        boot_addr,
        reserved[0],
        boot_entry,
        reserved[1],
        boot_checksum,
        processor,
    )


def pack_ddm(block_count: int, drivers: list[tuple[int, int, int]], signature: int = 0x4552) -> bytes:
    slots = []
    for dd in drivers + [(0, 0, 0)] * (8 - len(drivers)):
        slots.extend(dd)
    return struct.pack(DDM_FORMAT, signature, 512, block_count, 1, 2, 3, len(drivers), *slots)


def block(data: bytes) -> bytes:
    return data.ljust(512, b"\x00")


@pytest.fixture
def apm() -> BinaryIO:
    """A disk with a Driver Descriptor Map, a driver, an HFS volume and free space.

    Only the first 64 blocks are present, the partition data itself is not.
    """
    buf = bytearray()
    buf += block(pack_ddm(156370, [(64, 32, 1)]))
    buf += block(pack_entry(4, 1, 63, b"Apple", b"Apple_partition_map", 0x37))
    buf += block(
        pack_entry(
            4,
            64,
            32,
            b"Macintosh",
            b"Apple_Driver43",
            0x37F,
            boot=(0, 0x5800, 0, 0, 0xF624),
            reserved=(0xDEAD, 0xBEEF),
            processor=b"68000",
        )
    )
    buf += block(pack_entry(4, 96, 20000, b"MacOS", b"Apple_HFS", 0xB7))
    buf += block(pack_entry(4, 20096, 136274, b"Extra", b"Apple_Free", 0x37))
    buf = buf.ljust(64 * 512, b"\x00")
    return io.BytesIO(bytes(buf))


@pytest.fixture
def apm_no_ddm() -> BinaryIO:
    buf = block(b"") + block(pack_entry(1, 1, 1, b"Apple", b"Apple_partition_map", 0x37))
    return io.BytesIO(buf)
