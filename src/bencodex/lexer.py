"""
Tokenizer for Bencoded byte streams.

The lexer pulls bytes from a forward-only source one at a time. It keeps a
single pushed-back byte and a single lookahead token, and tracks the offset
of the last byte it consumed so errors can point at the offending input.
"""
from enum import Enum
from functools import partial
from typing import Iterator, NamedTuple, Optional, Tuple

from .errors import BencodeDecodeError, ErrorKind
from .structure import INT64_MAX, INT64_MIN

COLON = ord(":")
MINUS = ord("-")
END = ord("e")

# len(str(2 ** 63))
MAX_DIGITS = 19


class TokenKind(Enum):
    INTEGER_BEGIN = "i"
    INTEGER_END = "integer end"
    LIST_BEGIN = "l"
    LIST_END = "list end"
    DICT_BEGIN = "d"
    DICT_END = "dict end"
    LENGTH = "length"
    COLON = ":"
    END_OF_INPUT = "end of input"


class Token(NamedTuple):
    kind: TokenKind
    length: int = 0


_OPENERS = {
    ord("i"): TokenKind.INTEGER_BEGIN,
    ord("l"): TokenKind.LIST_BEGIN,
    ord("d"): TokenKind.DICT_BEGIN,
}

_CLOSERS = {
    TokenKind.INTEGER_BEGIN: TokenKind.INTEGER_END,
    TokenKind.LIST_BEGIN: TokenKind.LIST_END,
    TokenKind.DICT_BEGIN: TokenKind.DICT_END,
}


def _is_digit(byte: int) -> bool:
    return 0x30 <= byte <= 0x39


def iter_bytes(source) -> Iterator[int]:
    """
    Turn a byte source into an iterator of ints.

    Accepts bytes-like objects, binary file objects (anything with `read`)
    and iterables of ints.
    """
    if isinstance(source, str):
        raise TypeError("Bencode input must be bytes, not str")

    if isinstance(source, (bytes, bytearray, memoryview)):
        return iter(bytes(source))

    if hasattr(source, "read"):
        return (chunk[0] for chunk in iter(partial(source.read, 1), b""))

    return iter(source)


class Lexer:
    """
    Converts a byte source into a stream of tokens.

    `position` is the offset of the last consumed byte (-1 before any input
    was read). A byte pushed back onto the cache is un-counted, so it is
    counted once when it is delivered again.
    """
    def __init__(self, source):
        self._stream = iter_bytes(source)
        self.position = -1
        self._cached_byte: Optional[int] = None
        self._cached_token: Optional[Token] = None
        self._stack = []
        self._last_kind: Optional[TokenKind] = None

    def _error(self, kind: ErrorKind, message: str, position: Optional[int] = None):
        return BencodeDecodeError(kind, message, self.position if position is None else position)

    # --------------------------
    # Byte level
    # --------------------------

    def next_byte(self) -> Optional[int]:
        """Return the next byte, or None once the source is exhausted."""
        self.position += 1
        if self._cached_byte is not None:
            byte, self._cached_byte = self._cached_byte, None
            return byte
        return next(self._stream, None)

    def _push_back(self, byte: int):
        self._cached_byte = byte
        self.position -= 1

    def read_integer_before(self, initial: bytes, terminator: int) -> Tuple[int, int]:
        """
        Read a decimal literal up to (not including) `terminator`.

        `initial` holds bytes of the literal that were already consumed.
        Returns (value, digits_read); a lone sign or an empty literal reads
        zero digits and yields 0.
        """
        literal = bytearray(initial)

        while True:
            byte = self.next_byte()
            if byte is None:
                raise self._error(ErrorKind.UNTERMINATED_NUMBER,
                                  f"expected {bytes([terminator])!r} before end of input")

            if byte == terminator:
                self._push_back(byte)
                break

            if byte == MINUS:
                if literal:
                    raise self._error(ErrorKind.MISPLACED_SIGN,
                                      "'-' can only appear at the start of an integer")
            elif _is_digit(byte):
                if literal in (b"0", b"-0"):
                    raise self._error(ErrorKind.LEADING_ZERO, "leading zeros are not permitted")
                if len(literal) - literal.startswith(b"-") >= MAX_DIGITS:
                    raise self._error(ErrorKind.INTEGER_OVERFLOW,
                                      f"integer longer than {MAX_DIGITS} digits")
            else:
                raise self._error(ErrorKind.INVALID_INTEGER,
                                  f"invalid byte {bytes([byte])!r} in integer")

            literal.append(byte)

        if literal == b"-0":
            raise self._error(ErrorKind.NEGATIVE_ZERO, "negative zero is not permitted")

        digits = len(literal) - literal.startswith(b"-")
        if digits == 0:
            return 0, 0

        value = int(literal)
        if not INT64_MIN <= value <= INT64_MAX:
            raise self._error(ErrorKind.INTEGER_OVERFLOW,
                              f"{literal.decode()} does not fit in 64 bits")
        return value, digits

    def read_exact_bytes(self, n: int) -> bytes:
        """Consume exactly `n` bytes."""
        data = bytearray()
        for _ in range(n):
            byte = self.next_byte()
            if byte is None:
                raise self._error(ErrorKind.TRUNCATED_BYTE_STRING,
                                  f"expected {n} bytes but only {len(data)} were available")
            data.append(byte)
        return bytes(data)

    # --------------------------
    # Token level
    # --------------------------

    def _emit(self, token: Token) -> Token:
        self._last_kind = token.kind
        return token

    def next_token(self) -> Token:
        """Consume and return the next token."""
        if self._cached_token is not None:
            token, self._cached_token = self._cached_token, None
            return token

        byte = self.next_byte()
        if byte is None:
            return self._emit(Token(TokenKind.END_OF_INPUT))

        if byte in _OPENERS:
            kind = _OPENERS[byte]
            self._stack.append(kind)
            return self._emit(Token(kind))

        if byte == END:
            if not self._stack:
                raise self._error(ErrorKind.UNMATCHED_END,
                                  "'e' does not close an integer, list or dictionary")
            return self._emit(Token(_CLOSERS[self._stack.pop()]))

        if _is_digit(byte):
            length, _ = self.read_integer_before(bytes([byte]), COLON)
            return self._emit(Token(TokenKind.LENGTH, length))

        if byte == COLON:
            if self._last_kind is not TokenKind.LENGTH:
                raise self._error(ErrorKind.MISPLACED_COLON,
                                  "':' must follow the length of a byte string")
            return self._emit(Token(TokenKind.COLON))

        raise self._error(ErrorKind.UNKNOWN_TOKEN, f"unknown token {bytes([byte])!r}")

    def look_ahead(self) -> Token:
        """Return the next token without consuming it."""
        if self._cached_token is None:
            self._cached_token = self.next_token()
        return self._cached_token
