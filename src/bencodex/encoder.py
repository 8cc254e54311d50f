"""
Bencode encoder for BitTorrent metainfo and tracker responses.

Dictionaries are always written with their keys in raw byte order, so the
output is the canonical encoding of the value.
"""
import io
import logging

from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, to_node

logger = logging.getLogger(__name__)


def marshal(node, sink) -> int:
    """
    Write the canonical encoding of `node` to `sink` (anything with a
    binary `write` method) and return the number of bytes written.

    Errors raised by the sink propagate unchanged.
    """
    return _marshal(to_node(node), sink)


def encode(obj) -> bytes:
    """Encodes a Python object or BencodeType into bencoded bytes."""
    buf = io.BytesIO()
    written = marshal(obj, buf)
    logger.debug("Encoded %s into %d bytes", type(obj).__name__, written)
    return buf.getvalue()


def to_text(node) -> str:
    """
    Return the canonical encoding as text.

    Byte strings that are not valid UTF-8 are shown with backslash escapes.
    """
    return encode(node).decode("utf-8", errors="backslashreplace")


def _marshal(node, sink) -> int:
    if isinstance(node, BencodeInt):
        return encode_int(node.value, sink)

    if isinstance(node, BencodeString):
        return encode_bytes(node.value, sink)

    if isinstance(node, BencodeList):
        return encode_list(node.value, sink)

    if isinstance(node, BencodeDict):
        return encode_dict(node.value, sink)

    raise TypeError(f"Cannot bencode object of type {type(node)}")


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def _write(sink, chunk: bytes) -> int:
    # text-mode style sinks may return None
    written = sink.write(chunk)
    return len(chunk) if written is None else written


def encode_int(n: int, sink) -> int:
    """Writes an integer as bencoded bytes (e.g., i123e)."""
    return _write(sink, b"i%de" % n)


def encode_bytes(b: bytes, sink) -> int:
    """Writes bytes as bencoded bytes (e.g., 4:spam)."""
    return _write(sink, b"%d:" % len(b)) + _write(sink, b)


def encode_list(lst: list, sink) -> int:
    """Writes a list as bencoded bytes (e.g., l4:spame)."""
    written = _write(sink, b"l")
    for item in lst:
        written += _marshal(item, sink)
    return written + _write(sink, b"e")


def encode_dict(d: dict, sink) -> int:
    """Writes a dictionary as bencoded bytes (e.g., d3:cow3:moo4:spam4:eggse)."""
    written = _write(sink, b"d")
    for key in sorted(d):
        written += encode_bytes(key, sink)
        written += _marshal(d[key], sink)
    return written + _write(sink, b"e")
