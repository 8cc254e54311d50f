"""
Data structures for representing Bencoded types.

Every decoded value is a `BencodeType` node. Lists own their elements and
dictionaries own their values, so a decoded document is a plain tree.
"""
from collections.abc import Mapping

from .errors import BencodeTypeError

__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "to_node",
    "INT64_MIN",
    "INT64_MAX",
]

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class BencodeType:
    """Base class for all Bencode data types."""
    value = None

    def as_integer(self) -> int:
        raise BencodeTypeError(f"{type(self).__name__} is not an integer")

    def as_byte_string(self) -> bytes:
        raise BencodeTypeError(f"{type(self).__name__} is not a byte string")

    def as_list(self) -> list:
        raise BencodeTypeError(f"{type(self).__name__} is not a list")

    def as_dictionary(self) -> dict:
        raise BencodeTypeError(f"{type(self).__name__} is not a dictionary")

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.value == other.value

    __hash__ = None

    def __str__(self):
        from .encoder import to_text
        return to_text(self)


class BencodeInt(BencodeType):
    """Represents a Bencoded integer (signed, 64 bits)."""
    def __init__(self, value: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("BencodeInt requires an integer.")
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError(f"BencodeInt out of 64-bit range: {value}")
        self.value = value

    def as_integer(self) -> int:
        return self.value

    def __repr__(self):
        return f"BencodeInt({self.value})"


class BencodeString(BencodeType):
    """Represents a Bencoded byte string."""
    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("BencodeString requires bytes.")
        self.value = bytes(value)

    def as_byte_string(self) -> bytes:
        return self.value

    def __len__(self):
        return len(self.value)

    def __repr__(self):
        return f"BencodeString({self.value!r})"


class BencodeList(BencodeType):
    """Represents a Bencoded list."""
    def __init__(self, value: list):
        if not isinstance(value, list):
            raise TypeError("BencodeList requires a list.")
        for item in value:
            if not isinstance(item, BencodeType):
                raise TypeError(f"BencodeList items must be Bencode nodes, got {type(item).__name__}.")
        self.value = list(value)

    def as_list(self) -> list:
        return self.value

    def __len__(self):
        return len(self.value)

    def __getitem__(self, index):
        return self.value[index]

    def __iter__(self):
        return iter(self.value)

    def __repr__(self):
        return f"BencodeList({self.value!r})"


def _key_bytes(key) -> bytes:
    if isinstance(key, str):
        return key.encode()
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    raise TypeError("BencodeDict keys must be bytes or str.")


class BencodeDict(BencodeType):
    """
    Represents a Bencoded dictionary.

    Keys are byte strings; `str` keys are stored UTF-8 encoded and lookups
    accept either form. Iteration follows the raw byte order of the keys,
    which is the order the encoder writes them in. A `str` key and a
    `bytes` key with the same encoding are rejected.
    """
    def __init__(self, value: dict):
        if not isinstance(value, dict):
            raise TypeError("BencodeDict requires a dict.")
        entries = {}
        for k, v in value.items():
            if not isinstance(v, BencodeType):
                raise TypeError(f"BencodeDict values must be Bencode nodes, got {type(v).__name__}.")
            key = _key_bytes(k)
            if key in entries:
                raise ValueError(f"BencodeDict key {key!r} given more than once.")
            entries[key] = v
        self.value = dict(sorted(entries.items()))

    def as_dictionary(self) -> dict:
        return self.value

    def keys(self):
        return list(self.value)

    def items(self):
        return list(self.value.items())

    def get(self, key, default=None):
        return self.value.get(_key_bytes(key), default)

    def __len__(self):
        return len(self.value)

    def __contains__(self, key):
        return _key_bytes(key) in self.value

    def __getitem__(self, key):
        return self.value[_key_bytes(key)]

    def __iter__(self):
        return iter(self.keys())

    def __repr__(self):
        return f"BencodeDict({dict(self.items())!r})"


def to_node(obj) -> BencodeType:
    """
    Convert a native Python value into a Bencode node, recursively.

    Raises TypeError for values with no Bencode representation.
    """
    if isinstance(obj, BencodeType):
        return obj

    if isinstance(obj, bool):
        raise TypeError("Cannot bencode object of type <class 'bool'>")

    if isinstance(obj, int):
        return BencodeInt(obj)

    if isinstance(obj, str):
        return BencodeString(obj.encode())

    if isinstance(obj, (bytes, bytearray, memoryview)):
        return BencodeString(obj)

    if isinstance(obj, (list, tuple)):
        return BencodeList([to_node(x) for x in obj])

    if isinstance(obj, Mapping):
        return BencodeDict({k: to_node(v) for k, v in obj.items()})

    raise TypeError(f"Cannot bencode object of type {type(obj)}")
