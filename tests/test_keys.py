import os
import struct
import sys
from unittest.mock import patch

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../src")))

import pytest

from pyxxh64 import (
    BuildXxh64,
    Xxh64,
    Xxh64Digest,
    hash_arrow_array,
    hash_key,
    hash_pandas_series,
    hash_polars_series,
    stable_hash,
)
from pyxxh64.canonical import encode_key, feed_key
from pyxxh64.xxhash64 import xxh64_intdigest


def test_equal_numbers_encode_alike():
    assert encode_key(1) == encode_key(1.0) == encode_key(True) == encode_key(1 + 0j)
    assert encode_key(0) == encode_key(-0.0) == encode_key(False)
    assert encode_key(2**70) == encode_key(float(2**70))
    assert hash_key(3, seed=9) == hash_key(3.0, seed=9)


def test_distinct_numbers_encode_differently():
    assert encode_key(1) != encode_key(-1)
    assert encode_key(0.5) != encode_key(1)
    assert encode_key(1 + 2j) != encode_key(1)


def test_int_encoding_layout():
    assert encode_key(0) == b"I" + struct.pack("<Q", 1) + b"\x00"
    assert encode_key(-1) == b"I" + struct.pack("<Q", 1) + b"\xff"
    assert encode_key(255) == b"I" + struct.pack("<Q", 2) + b"\xff\x00"


def test_float_special_values():
    assert encode_key(float("nan")) == encode_key(-float("nan"))
    assert encode_key(float("inf")) != encode_key(float("-inf"))
    assert encode_key(1.5) == b"F" + struct.pack("<d", 1.5)


def test_str_is_terminated():
    assert encode_key("ab") == b"Sab\xff"
    assert encode_key(("a", "b")) != encode_key(("ab", ""))
    assert hash_key("a") != hash_key(b"a")


def test_bytes_like_encode_alike():
    expected = b"Y" + struct.pack("<Q", 5) + b"hello"
    assert encode_key(b"hello") == expected
    assert encode_key(bytearray(b"hello")) == expected
    assert encode_key(memoryview(b"hello")) == expected


def test_tuple_is_ordered():
    assert encode_key((1, 2)) != encode_key((2, 1))
    assert encode_key((1, (2, "x"))).startswith(b"T" + struct.pack("<Q", 2))


def test_sets_are_order_independent():
    assert encode_key(frozenset([3, 2, 1])) == encode_key({1, 2, 3})
    assert encode_key(frozenset(["b", "a"])) == encode_key(frozenset(["a", "b"]))
    assert encode_key(frozenset()) == b"E" + struct.pack("<Q", 0)


def test_none():
    assert encode_key(None) == b"N"


def test_rejects_unhashable_types():
    with pytest.raises(TypeError) as excinfo:
        hash_key([1, 2])
    assert "Unsupported type" in str(excinfo.value)
    with pytest.raises(TypeError):
        hash_key((1, {"a": 1}))


def test_feed_key_streams_into_hasher():
    hasher = Xxh64(4)
    feed_key(("key", 7), hasher.write)
    assert hasher.finish() == xxh64_intdigest(encode_key(("key", 7)), 4)
    assert hasher.finish() == hash_key(("key", 7), seed=4)


def test_numpy_normalization_mock():
    class FakeNumpyInt:
        def __init__(self, val):
            self.val = val

        def item(self):
            return self.val

    with patch("pyxxh64.canonical._NUMPY_GENERIC", (FakeNumpyInt,)):
        assert encode_key(FakeNumpyInt(99)) == encode_key(99)


def test_builder_ignores_its_seed():
    builder = BuildXxh64(seed=123)
    hasher = builder.build_hasher()
    assert isinstance(hasher, Xxh64)
    assert hasher.seed == 0
    assert builder.hash_one("qwer") == hash_key("qwer", seed=0)
    assert builder.hash_one("qwer") != hash_key("qwer", seed=123)
    assert BuildXxh64().hash_one("qwer") == builder.hash_one("qwer")


def test_builder_hashers_are_fresh():
    builder = BuildXxh64()
    first = builder.build_hasher()
    first.write(b"abc")
    assert builder.build_hasher().finish() == xxh64_intdigest(b"")


def test_builder_equality_and_seed_check():
    assert BuildXxh64(5) == BuildXxh64(5)
    assert BuildXxh64(5) != BuildXxh64(6)
    with pytest.raises(ValueError):
        BuildXxh64(-1)


def test_stable_hash_result():
    result = stable_hash({"a", "b"}, seed=1)
    assert isinstance(result, Xxh64Digest)
    assert result.intdigest() == hash_key(frozenset({"b", "a"}), seed=1)
    assert result.digest() == result.intdigest().to_bytes(8, "big")
    assert result.hexdigest() == result.digest().hex()
    assert int(result) == result.intdigest()
    assert stable_hash("x", seed=1) != stable_hash("x", seed=2)


def test_hash_pandas_series():
    pd = pytest.importorskip("pandas")
    values = ["a", b"b", 3]
    series = pd.Series(values, index=[10, 20, 30], name="keys", dtype=object)
    result = hash_pandas_series(series, seed=2)
    assert str(result.dtype) == "uint64"
    assert list(result.index) == [10, 20, 30]
    assert result.name == "keys"
    assert [int(v) for v in result] == [hash_key(v, seed=2) for v in values]


def test_hash_arrow_array():
    pa = pytest.importorskip("pyarrow")
    result = hash_arrow_array(pa.array(["x", None, "y"]), seed=3)
    assert result.type == pa.uint64()
    assert result.to_pylist() == [hash_key("x", seed=3), hash_key(None, seed=3), hash_key("y", seed=3)]
    assert hash_arrow_array([1, 2]).to_pylist() == [hash_key(1), hash_key(2)]


def test_hash_polars_series():
    pl = pytest.importorskip("polars")
    result = hash_polars_series(pl.Series("ids", [1, 2, 3]))
    assert result.dtype == pl.UInt64
    assert result.name == "ids"
    assert result.to_list() == [hash_key(v) for v in (1, 2, 3)]
    assert hash_polars_series(["a"]).name == "hash"
