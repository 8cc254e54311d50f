"""
Error types raised while decoding and accessing Bencode data.
"""
from enum import Enum


class ErrorKind(Enum):
    """Reasons a Bencode stream can be rejected."""
    INVALID_INTEGER = "invalid integer"
    LEADING_ZERO = "leading zero"
    NEGATIVE_ZERO = "negative zero"
    MISPLACED_SIGN = "misplaced sign"
    UNTERMINATED_NUMBER = "unterminated number"
    INTEGER_OVERFLOW = "integer overflow"
    TRUNCATED_BYTE_STRING = "truncated byte string"
    UNMATCHED_END = "unmatched end"
    MISPLACED_COLON = "misplaced colon"
    UNKNOWN_TOKEN = "unknown token"
    UNEXPECTED_TOKEN = "unexpected token"
    EMPTY_INTEGER = "empty integer"
    NON_STRING_DICT_KEY = "non-string dictionary key"
    INVALID_KEY_ENCODING = "invalid key encoding"
    TRAILING_DATA = "trailing data"
    DUPLICATE_KEY = "duplicate key"
    UNSORTED_KEYS = "unsorted keys"
    LIMIT_EXCEEDED = "limit exceeded"


class BencodeDecodeError(ValueError):
    """
    Raised when a byte stream is not valid Bencode.

    `position` is the zero-based offset of the byte at which the problem
    was detected.
    """
    def __init__(self, kind: ErrorKind, message: str, position: int):
        super().__init__(f"{message} (at byte {position})")
        self.kind = kind
        self.message = message
        self.position = position

    def __repr__(self):
        return f"BencodeDecodeError({self.kind.name}, {self.message!r}, position={self.position})"


class BencodeTypeError(TypeError):
    """Raised when a node is accessed as the wrong variant."""
