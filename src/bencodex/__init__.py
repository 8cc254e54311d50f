"""
Bencode package for encoding and decoding BitTorrent data.
"""
from .decoder import BencodeDecoder, decode, parse
from .encoder import encode, marshal, to_text
from .errors import BencodeDecodeError, BencodeTypeError, ErrorKind
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType, to_node

__all__ = [
    'decode', 'parse', 'encode', 'marshal', 'to_text', 'to_node',
    'BencodeDecoder', 'BencodeDecodeError', 'BencodeTypeError', 'ErrorKind',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict',
]
