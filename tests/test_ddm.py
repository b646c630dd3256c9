from typing import BinaryIO

import pytest

from dissect.apm.c_apm import DDM_SIZE
from dissect.apm.ddm import DriverDescriptor, DriverDescriptorMap
from dissect.apm.exceptions import APMError, InvalidSignatureError


def test_ddm(apm: BinaryIO):
    ddm = DriverDescriptorMap.from_bytes(apm.read(DDM_SIZE))

    assert DDM_SIZE == 82
    assert ddm.signature == 0x4552
    assert ddm.block_size == 512
    assert ddm.block_count == 156370
    assert ddm.device_type == 1
    assert ddm.device_id == 2
    assert ddm.driver_data == 3
    assert ddm.driver_count == 1
    assert len(ddm.entries) == 8
    assert ddm.drivers == [DriverDescriptor(start_block=64, block_count=32, os_type=1)]
    assert all(dd == DriverDescriptor() for dd in ddm.entries[1:])


def test_ddm_dumps(apm: BinaryIO):
    buf = apm.read(DDM_SIZE)

    assert DriverDescriptorMap.from_bytes(buf).dumps() == buf


def test_ddm_new():
    ddm = DriverDescriptorMap(block_size=512, block_count=10)
    buf = ddm.dumps()

    assert len(buf) == DDM_SIZE
    assert buf[:8] == b"ER\x02\x00\x00\x00\x00\x0a"
    assert buf[8:] == b"\x00" * (DDM_SIZE - 8)
    assert len(ddm.entries) == 8


def test_ddm_signature_not_settable():
    with pytest.raises(TypeError):
        DriverDescriptorMap(signature=0x1234)


def test_ddm_invalid_signature(apm: BinaryIO):
    buf = b"XX" + apm.read(DDM_SIZE)[2:]

    with pytest.raises(InvalidSignatureError):
        DriverDescriptorMap.from_bytes(buf)


@pytest.mark.parametrize("length", [0, 18, DDM_SIZE - 1, DDM_SIZE + 1, 512])
def test_ddm_wrong_length(length: int):
    with pytest.raises(ValueError):
        DriverDescriptorMap.from_bytes(b"ER".ljust(length, b"\x00")[:length])


def test_ddm_driver_count_too_large(apm: BinaryIO):
    buf = bytearray(apm.read(DDM_SIZE))
    buf[16:18] = (9).to_bytes(2, "big")

    with pytest.raises(APMError, match="driver count"):
        DriverDescriptorMap.from_bytes(bytes(buf))


def test_ddm_new_too_many_drivers():
    with pytest.raises(ValueError):
        DriverDescriptorMap(driver_count=9)

    with pytest.raises(ValueError):
        DriverDescriptorMap(entries=[DriverDescriptor()] * 9)
