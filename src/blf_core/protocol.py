"""BLF protocol constants.

Single source of truth for on-disk magic values and record layouts.
Keep this file stable. Header reader, framer and stream engine must remain synchronized.
"""
import struct

# File and object magics
MAGIC_FILE = b"LOGG"  # File statistics header
MAGIC_OBJECT = b"LOBJ"  # Object header

# File header: [Magic(4) | StatsSize(4) | Api(4) | AppId(1) | AppVer(3) |
#               FileSize(8) | Uncompressed(8) | ObjCount(4) | ObjRead(4)] = 40 bytes
FILE_HEADER_FMT = struct.Struct("<4sIIB3BQQII")
FILE_HEADER_LEN = FILE_HEADER_FMT.size

# Present only when stats_size == CANONICAL_STATS_SIZE:
# two SYSTEMTIME blocks (8 x u16 each) and 18 reserved u32 words = 104 bytes
FILE_HEADER_EXT_FMT = struct.Struct("<8H8H18I")
CANONICAL_STATS_SIZE = 144

# stats_size, api_version, file_size, uncompressed_size, object_count, object_read
MIN_STATS_SIZE = 4 + 4 + 8 + 8 + 4 + 4

# Object header: [Magic(4) | HeaderSize(2) | HeaderVersion(2) | ObjectSize(4) | ObjectType(4)] = 16 bytes
OBJ_HEADER_FMT = struct.Struct("<4sHHII")
OBJ_HEADER_LEN = OBJ_HEADER_FMT.size

# Nested header carried by structured payloads: flags, client index, version, timestamp (ns)
OBJ_SUBHEADER_FMT = struct.Struct("<IHHQ")

# Container fields: method(2) | reserved(6) | uncompressed size(4) | reserved(4)
CONTAINER_FMT = struct.Struct("<H6sI4s")

# CAN message 2: channel, flags, dlc, id ... data ... frame length, bit count, reserved
CAN_HEAD_FMT = struct.Struct("<HBBI")
CAN_TAIL_FMT = struct.Struct("<IBBH")

# App text: source, reserved, text length, reserved
APP_TEXT_FMT = struct.Struct("<IIII")

# Object type codes
TYPE_LOG_CONTAINER = 10
TYPE_APP_TEXT = 65
TYPE_CAN_MESSAGE2 = 86

# Unstructured types followed by remaining % 4 alignment bytes
PADDED_TYPES = frozenset({6, 7, 8, 9, 72, 90, 92, 96})

# Container compression methods
COMPRESSION_NONE = 0
COMPRESSION_ZLIB = 2

# Default safety bounds
DEFAULT_MAX_CONTAINER_SIZE = 64 * 1024 * 1024  # 64 MiB declared uncompressed size per container
READ_CHUNK_SIZE = 64 * 1024  # 64 KiB; payloads are never preallocated from a declared size
