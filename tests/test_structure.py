import pytest

from bencodex.errors import BencodeTypeError
from bencodex.structure import BencodeDict, BencodeInt, BencodeList, BencodeString, to_node


def test_typed_accessors():
    assert BencodeInt(7).as_integer() == 7
    assert BencodeString(b"abc").as_byte_string() == b"abc"
    assert BencodeList([BencodeInt(1)]).as_list() == [BencodeInt(1)]
    assert BencodeDict({b"k": BencodeInt(1)}).as_dictionary() == {b"k": BencodeInt(1)}


@pytest.mark.parametrize("node, accessor", [
    (BencodeInt(7), "as_byte_string"),
    (BencodeString(b"abc"), "as_integer"),
    (BencodeList([]), "as_dictionary"),
    (BencodeDict({}), "as_list"),
])
def test_wrong_variant(node, accessor):
    with pytest.raises(BencodeTypeError):
        getattr(node, accessor)()


def test_wrong_variant_is_type_error():
    assert issubclass(BencodeTypeError, TypeError)


def test_int_range():
    BencodeInt(2 ** 63 - 1)
    BencodeInt(-(2 ** 63))
    with pytest.raises(ValueError):
        BencodeInt(2 ** 63)
    with pytest.raises(TypeError):
        BencodeInt(True)
    with pytest.raises(TypeError):
        BencodeInt("1")


def test_constructors_validate():
    with pytest.raises(TypeError):
        BencodeString("text")
    with pytest.raises(TypeError):
        BencodeList([1, 2])
    with pytest.raises(TypeError):
        BencodeDict({b"a": 1})
    with pytest.raises(TypeError):
        BencodeDict({1: BencodeInt(1)})


def test_dict_keys():
    d = BencodeDict({"name": BencodeString(b"x"), b"length": BencodeInt(3)})
    assert d["name"] is d[b"name"]
    assert "length" in d and b"length" in d
    assert d.get("missing") is None
    assert list(d) == [b"length", b"name"]
    assert len(d) == 2


def test_to_node():
    node = to_node({"foo": [1, "two", b"three", (4,)], b"bar": {}})
    assert node == BencodeDict({
        b"foo": BencodeList([
            BencodeInt(1),
            BencodeString(b"two"),
            BencodeString(b"three"),
            BencodeList([BencodeInt(4)]),
        ]),
        b"bar": BencodeDict({}),
    })

    existing = BencodeInt(5)
    assert to_node(existing) is existing


def test_equality():
    assert BencodeInt(1) == BencodeInt(1)
    assert BencodeInt(1) != BencodeInt(2)
    assert BencodeInt(1) != BencodeString(b"1")
    assert BencodeList([BencodeInt(1)]) == BencodeList([BencodeInt(1)])


def test_repr():
    assert repr(BencodeInt(42)) == "BencodeInt(42)"
    assert repr(BencodeString(b"spam")) == "BencodeString(b'spam')"


def test_list_does_not_alias_caller_list():
    items = [BencodeInt(1)]
    node = BencodeList(items)
    items.append("not a node")
    assert node.as_list() == [BencodeInt(1)]


def test_dict_sorted_at_construction():
    d = BencodeDict({b"b": BencodeInt(1), b"a": BencodeInt(2)})
    assert list(d.as_dictionary()) == [b"a", b"b"]


def test_dict_rejects_str_bytes_key_collision():
    with pytest.raises(ValueError):
        BencodeDict({"a": BencodeInt(1), b"a": BencodeInt(2)})
    with pytest.raises(ValueError):
        to_node({"a": 1, b"a": 2})
