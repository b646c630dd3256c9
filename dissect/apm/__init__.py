from dissect.apm.apm import APM
from dissect.apm.c_apm import BLOCK_SIZE, DEFAULT_STATUS, PartitionStatus, PartitionType
from dissect.apm.ddm import DriverDescriptor, DriverDescriptorMap
from dissect.apm.entry import PartitionMapEntry
from dissect.apm.exceptions import (
    APMError,
    Error,
    InvalidOperationError,
    InvalidSignatureError,
    TruncatedError,
)
from dissect.apm.fixedstring import FixedString, String16, String32
from dissect.apm.writer import APMWriter, PartitionDefinition

__all__ = [
    "APM",
    "APMError",
    "APMWriter",
    "BLOCK_SIZE",
    "DEFAULT_STATUS",
    "DriverDescriptor",
    "DriverDescriptorMap",
    "Error",
    "FixedString",
    "InvalidOperationError",
    "InvalidSignatureError",
    "PartitionDefinition",
    "PartitionMapEntry",
    "PartitionStatus",
    "PartitionType",
    "String16",
    "String32",
    "TruncatedError",
]
