"""$R rowid format constants.

Single source of truth for record widths and the base64 alphabet.
Keep this file stable. Codec and scanner must remain synchronized.
"""
from types import MappingProxyType

# Raw record: [base64 body(12) | literal tail(2)] = 14 bytes
RAW_ROWID_LEN = 14
B64_BODY_RAW_LEN = 12
B64_GROUP_RAW_LEN = 3
B64_GROUP_CHARS = 4

# Text rowid: 16 base64 chars + 2 literal chars
ROWID_LEN = 18
B64_BODY_LEN = 16

# Hex rendering of one raw record
RECORD_HEX_WIDTH = RAW_ROWID_LEN * 2

# Chunked scanning (1400 = 100 records per read)
DEFAULT_CHUNK_SIZE = 1400

# $R table layout
DOCIDS_PER_ROW = 35000

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
ALPHABET_INDEX = MappingProxyType({ch: i for i, ch in enumerate(ALPHABET)})
