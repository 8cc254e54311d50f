"""
Bencode decoder for BitTorrent metainfo and tracker responses.

Recursive-descent parser driven by the token stream of `Lexer`.
"""
import logging
from typing import Optional

from .errors import BencodeDecodeError, ErrorKind
from .lexer import Lexer, TokenKind
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

logger = logging.getLogger(__name__)

# Each nesting level costs two Python frames, keep well under the recursion limit.
DEFAULT_MAX_DEPTH = 256
DEFAULT_MAX_LENGTH = None


class BencodeDecoder:
    """
    Decodes a Bencoded byte source into a tree of Bencode nodes.

    With `strict` set, dictionaries must have unique keys in ascending byte
    order (canonical form). Otherwise a repeated key overwrites the earlier
    value. `max_depth` bounds container nesting and `max_length` bounds the
    declared length of any byte string; None disables a limit.
    """
    def __init__(self, source, *, strict: bool = False,
                 max_depth: Optional[int] = DEFAULT_MAX_DEPTH,
                 max_length: Optional[int] = DEFAULT_MAX_LENGTH):
        self.lexer = Lexer(source)
        self.strict = strict
        self.max_depth = max_depth
        self.max_length = max_length
        self._depth = 0

    def decode(self) -> BencodeType:
        """Main decode entry point. Decodes exactly one value from the source."""
        try:
            result = self._parse_value()
            self._expect_end_of_input()
        except BencodeDecodeError as exc:
            logger.debug("Bencode decode failed: %s at byte %d", exc.kind.name, exc.position)
            raise

        logger.debug("Decoded %s from %d bytes", type(result).__name__, self.lexer.position)
        return result

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _error(self, kind: ErrorKind, message: str, position: Optional[int] = None):
        return BencodeDecodeError(kind, message, self.lexer.position if position is None else position)

    def _expect(self, kind: TokenKind):
        token = self.lexer.next_token()
        if token.kind is not kind:
            raise self._error(ErrorKind.UNEXPECTED_TOKEN,
                              f"expected {kind.value!r}, found {token.kind.value!r}")
        return token

    def _expect_end_of_input(self):
        start = self.lexer.position + 1
        try:
            token = self.lexer.next_token()
        except BencodeDecodeError as exc:
            raise self._error(ErrorKind.TRAILING_DATA, "unexpected data after value", start) from exc
        if token.kind is not TokenKind.END_OF_INPUT:
            raise self._error(ErrorKind.TRAILING_DATA, "unexpected data after value", start)

    def _enter(self):
        self._depth += 1
        if self.max_depth is not None and self._depth > self.max_depth:
            raise self._error(ErrorKind.LIMIT_EXCEEDED,
                              f"nesting deeper than {self.max_depth} levels")

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self) -> BencodeType:
        token = self.lexer.look_ahead()

        if token.kind is TokenKind.INTEGER_BEGIN:
            return BencodeInt(self._parse_int())

        if token.kind is TokenKind.LENGTH:
            return BencodeString(self._parse_string())

        if token.kind is TokenKind.LIST_BEGIN:
            return self._parse_list()

        if token.kind is TokenKind.DICT_BEGIN:
            return self._parse_dict()

        raise self._error(ErrorKind.UNEXPECTED_TOKEN, f"expected a value, found {token.kind.value!r}")

    def _parse_int(self) -> int:
        """Parses an integer from the Bencoded data."""
        self._expect(TokenKind.INTEGER_BEGIN)

        value, digits = self.lexer.read_integer_before(b"", ord("e"))
        if digits == 0:
            raise self._error(ErrorKind.EMPTY_INTEGER, "integer has no digits")

        self._expect(TokenKind.INTEGER_END)
        return value

    def _parse_string(self) -> bytes:
        """Parses a byte string from the Bencoded data."""
        length = self._expect(TokenKind.LENGTH).length
        if self.max_length is not None and length > self.max_length:
            raise self._error(ErrorKind.LIMIT_EXCEEDED,
                              f"byte string of {length} bytes exceeds limit of {self.max_length}")

        self._expect(TokenKind.COLON)
        return self.lexer.read_exact_bytes(length)

    def _parse_list(self) -> BencodeList:
        """Parses a list from the Bencoded data."""
        self._expect(TokenKind.LIST_BEGIN)
        self._enter()
        items = []

        while self.lexer.look_ahead().kind is not TokenKind.LIST_END:
            items.append(self._parse_value())

        self.lexer.next_token()
        self._depth -= 1
        return BencodeList(items)

    def _parse_dict(self) -> BencodeDict:
        """Parses a dictionary from the Bencoded data."""
        self._expect(TokenKind.DICT_BEGIN)
        self._enter()
        obj = {}
        previous = None

        while True:
            token = self.lexer.look_ahead()
            if token.kind is TokenKind.DICT_END:
                break
            if token.kind is TokenKind.END_OF_INPUT:
                raise self._error(ErrorKind.UNEXPECTED_TOKEN, "dictionary is not terminated")
            # keys MUST be strings
            if token.kind is not TokenKind.LENGTH:
                raise self._error(ErrorKind.NON_STRING_DICT_KEY,
                                  f"dictionary key must be a byte string, found {token.kind.value!r}")

            key = self._parse_string()
            key_start = self.lexer.position - len(key) + 1
            try:
                key.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise self._error(ErrorKind.INVALID_KEY_ENCODING,
                                  f"dictionary key {key!r} is not valid UTF-8", key_start) from exc

            if self.strict and previous is not None:
                if key == previous:
                    raise self._error(ErrorKind.DUPLICATE_KEY, f"duplicate key {key!r}", key_start)
                if key < previous:
                    raise self._error(ErrorKind.UNSORTED_KEYS,
                                      f"key {key!r} sorts before {previous!r}", key_start)
            previous = key

            obj[key] = self._parse_value()

        self.lexer.next_token()
        self._depth -= 1
        return BencodeDict(obj)


def decode(data, *, strict: bool = False,
           max_depth: Optional[int] = DEFAULT_MAX_DEPTH,
           max_length: Optional[int] = DEFAULT_MAX_LENGTH) -> BencodeType:
    """
    Convenience function to decode Bencoded data.

    `data` may be bytes, a binary file object or an iterable of ints.
    Raises BencodeDecodeError if the input is not valid Bencode.
    """
    return BencodeDecoder(data, strict=strict, max_depth=max_depth, max_length=max_length).decode()


parse = decode
