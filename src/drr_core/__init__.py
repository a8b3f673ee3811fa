"""DRR Core - $R rowid codec and format constants."""
from .errors import DrrError, InvalidAlphabetCharacter, InvalidLength, MalformedRecord, SourceReadFailure
from .rowid import decode, encode, decode_hex, encode_hex

__all__ = [
    "decode",
    "encode",
    "decode_hex",
    "encode_hex",
    "DrrError",
    "InvalidLength",
    "InvalidAlphabetCharacter",
    "MalformedRecord",
    "SourceReadFailure",
]
