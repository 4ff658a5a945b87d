# Entry flags (go-siva: FlagDeleted = 0x1)
FLAG_NORMAL = 0
FLAG_DELETE = 1 << 0

# CRC32 values are stored as signed 32-bit patterns; mask before comparing.
CRC32_MASK = 0xFFFFFFFF

# Index footer layout: u32 entry count, u64 index size, u64 block size, u32 crc32
FOOTER_SIZE = 4 + 8 + 8 + 4

# Index strategy names
INDEX_COMPLETE = "complete"
INDEX_FILTERED = "filtered"
DEFAULT_INDEX_KIND = INDEX_FILTERED

# Path separator used by archive entry names
PATH_SEP = "/"
