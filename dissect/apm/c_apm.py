from enum import IntFlag

from dissect.cstruct import cstruct

apm_def = """
#define DDM_SIGNATURE       0x4552      // 'ER'
#define PM_SIGNATURE        0x504D      // 'PM'

// Block 0 of the device
// https://ciderpress2.com/formatdoc/APM-notes.html
struct driver_descriptor {
    uint32  dd_block;               // +0x00: first block of the driver
    uint16  dd_size;                // +0x04: size of the driver in 512-byte blocks
    uint16  dd_type;                // +0x06: operating system type (MacOS = 1)
};

struct driver_descriptor_map {
    uint16  sb_sig;                 // +0x00: 'ER'
    uint16  sb_blk_size;            // +0x02: block size of the device
    uint32  sb_blk_count;           // +0x04: number of blocks on the device
    uint16  sb_dev_type;            // +0x08: (reserved)
    uint16  sb_dev_id;              // +0x0a: (reserved)
    uint32  sb_data;                // +0x0c: (reserved)
    uint16  sb_drvr_count;          // +0x10: number of driver descriptor entries
    driver_descriptor dd_entries[8];    // +0x12
};

// Blocks 1..N of the device, one entry per block
struct partition_entry {
    uint16  pm_sig;                 // +0x000: 'PM'
    uint16  pm_sig_pad;             // +0x002: (reserved)
    uint32  pm_map_blk_cnt;         // +0x004: number of blocks in the partition map
    uint32  pm_py_part_start;       // +0x008: first block of the partition
    uint32  pm_part_blk_cnt;        // +0x00c: number of blocks in the partition
    char    pm_part_name[32];       // +0x010
    char    pm_par_type[32];        // +0x030: names beginning with "Apple_" are reserved
    uint32  pm_lg_data_start;       // +0x050: first logical block of the data area
    uint32  pm_data_cnt;            // +0x054: number of blocks in the data area
    uint32  pm_part_status;         // +0x058
    uint32  pm_lg_boot_start;       // +0x05c: first logical block of the boot code
    uint32  pm_boot_size;           // +0x060: size of the boot code in bytes
    uint32  pm_boot_addr;           // +0x064: boot code load address
    uint32  pm_boot_addr2;          // +0x068: (reserved)
    uint32  pm_boot_entry;          // +0x06c: boot code entry point
    uint32  pm_boot_entry2;         // +0x070: (reserved)
    uint32  pm_boot_cksum;          // +0x074: boot code checksum
    char    pm_processor[16];       // +0x078: "68000", "68020", "68030", "68040"
};
"""

c_apm = cstruct(endian=">").load(apm_def)

BLOCK_SIZE = 512

DDM_SIGNATURE = c_apm.DDM_SIGNATURE
PM_SIGNATURE = c_apm.PM_SIGNATURE

DDM_SIZE = len(c_apm.driver_descriptor_map)
DDM_MAX_DRIVERS = 8
DRIVER_DESCRIPTOR_SIZE = len(c_apm.driver_descriptor)
PARTITION_ENTRY_SIZE = len(c_apm.partition_entry)


class PartitionStatus(IntFlag):
    NONE = 0x00000000
    VALID = 0x00000001
    ALLOCATED = 0x00000002
    IN_USE = 0x00000004
    BOOTABLE = 0x00000008
    READABLE = 0x00000010
    WRITABLE = 0x00000020
    BOOT_CODE_POSITION_INDEPENDENT = 0x00000040
    OS_SPECIFIC_1 = 0x00000080
    CHAIN_COMPATIBLE_DRIVER = 0x00000100
    REAL_DRIVER = 0x00000200
    CHAIN_DRIVER = 0x00000400
    AUTO_MOUNT = 0x40000000
    STARTUP_PARTITION = 0x80000000


DEFAULT_STATUS = (
    PartitionStatus.VALID
    | PartitionStatus.ALLOCATED
    | PartitionStatus.IN_USE
    | PartitionStatus.READABLE
    | PartitionStatus.WRITABLE
)


class PartitionType:
    """Well known partition type names."""

    APPLE_BOOT = "Apple_Boot"
    APPLE_BOOT_RAID = "Apple_Boot_RAID"
    APPLE_BOOTSTRAP = "Apple_Bootstrap"
    APPLE_DRIVER = "Apple_Driver"
    APPLE_DRIVER43 = "Apple_Driver43"
    APPLE_DRIVER43_CD = "Apple_Driver43_CD"
    APPLE_DRIVER_ATA = "Apple_Driver_ATA"
    APPLE_DRIVER_ATAPI = "Apple_Driver_ATAPI"
    APPLE_DRIVER_IOKIT = "Apple_Driver_IOKit"
    APPLE_DRIVER_OPENFIRMWARE = "Apple_Driver_OpenFirmware"
    APPLE_EXTRA = "Apple_Extra"
    APPLE_FREE = "Apple_Free"
    APPLE_FWDRIVER = "Apple_FWDriver"
    APPLE_HFS = "Apple_HFS"
    APPLE_HFSX = "Apple_HFSX"
    APPLE_LOADER = "Apple_Loader"
    APPLE_MDFW = "Apple_MDFW"
    APPLE_MFS = "Apple_MFS"
    APPLE_PARTITION_MAP = "Apple_partition_map"
    APPLE_PATCHES = "Apple_Patches"
    APPLE_PRODOS = "Apple_PRODOS"
    APPLE_RAID = "Apple_RAID"
    APPLE_RHAPSODY_UFS = "Apple_Rhapsody_UFS"
    APPLE_SCRATCH = "Apple_Scratch"
    APPLE_SECOND = "Apple_Second"
    APPLE_UFS = "Apple_UFS"
    APPLE_UNIX_SVR2 = "Apple_UNIX_SVR2"
    APPLE_VOID = "Apple_Void"
    BE_BFS = "Be_BFS"
    MFS = "MFS"
