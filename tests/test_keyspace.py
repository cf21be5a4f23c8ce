from __future__ import annotations

import pytest

from lcg_keys.errors import IllegalCharactersError, KeyOverflowError
from lcg_keys.utils.entities import (CENSORED_KEYSPACE, DEFAULT_KEYSPACE, Keyspace, RequestKey,
                                     to_request_id, to_request_key)


def test_default_alphabet_drops_ambiguous_characters() -> None:
    assert DEFAULT_KEYSPACE.symbols == "2346789ABCDEFGHJKLMNPQRTUVWXY"
    assert DEFAULT_KEYSPACE.base == 29
    assert DEFAULT_KEYSPACE.modulus == 17_249_876_309
    assert CENSORED_KEYSPACE.base == 28
    assert "9" not in CENSORED_KEYSPACE.symbols
    assert CENSORED_KEYSPACE.modulus == 13_492_928_512


@pytest.mark.parametrize(
    "n, key",
    [
        (0, "B2222222"),
        (828, "B22222YK"),
        (15_469, "B2222MEF"),
        (30_110, "B22239TB"),
        (689_996_466, "B37MKBML"),
        (12_814_213_900, "BQJQKKEU"),
        (29**7 - 1, "BYYYYYYY"),
    ],
)
def test_reference_keys(n: int, key: str) -> None:
    assert DEFAULT_KEYSPACE.encode(n) == key
    assert DEFAULT_KEYSPACE.decode(key) == n


def test_round_trip_first_ten_thousand() -> None:
    for n in range(10_001):
        assert DEFAULT_KEYSPACE.decode(DEFAULT_KEYSPACE.encode(n)) == n


def test_round_trip_censored_keyspace() -> None:
    assert CENSORED_KEYSPACE.encode(828) == "B222233L"
    for n in (0, 1, 27, 28, 12_345, 28**7 - 1):
        assert CENSORED_KEYSPACE.decode(CENSORED_KEYSPACE.encode(n)) == n


def test_keys_have_fixed_width() -> None:
    keys = {DEFAULT_KEYSPACE.encode(n) for n in range(0, 29**7, 29**5 + 7)}
    assert {len(key) for key in keys} == {8}
    assert all(key.startswith("B") for key in keys)


@pytest.mark.parametrize("text", ["B2222!YK", "b22222yk", "B22222ZK", "B22222OK", "B22 22YK", ""])
def test_decode_rejects_illegal_characters(text: str) -> None:
    with pytest.raises(IllegalCharactersError):
        DEFAULT_KEYSPACE.decode(text)
    assert not DEFAULT_KEYSPACE.is_valid(text)


def test_illegal_characters_error_is_value_error() -> None:
    with pytest.raises(ValueError, match="Illegal chars"):
        to_request_id("B2222!YK")


@pytest.mark.parametrize("n", [-1, 29**7, 29**8])
def test_encode_rejects_numbers_outside_width(n: int) -> None:
    with pytest.raises(KeyOverflowError):
        DEFAULT_KEYSPACE.encode(n)


def test_censored_keyspace_rejects_nine() -> None:
    with pytest.raises(IllegalCharactersError):
        CENSORED_KEYSPACE.decode("B22239TB")


def test_from_config() -> None:
    assert Keyspace.from_config({}) == DEFAULT_KEYSPACE
    assert Keyspace.from_config({'excluded': '0159OISZ'}) == CENSORED_KEYSPACE

    short = Keyspace.from_config({'symbols': "ABCDEFGH", 'width': 3, 'partition': "H"})
    assert short.base == 8
    assert short.modulus == 512
    assert short.encode(9) == "HABB"
    assert short.decode("HABB") == 9


@pytest.mark.parametrize(
    "kwargs",
    [
        {'symbols': "A"},
        {'symbols': "AAB", 'partition': "A"},
        {'symbols': "ABC", 'partition': "Z"},
        {'symbols': "ABC", 'partition': "AB"},
        {'symbols': "ABC", 'partition': "A", 'width': 0},
    ],
)
def test_invalid_keyspace_rejected(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        Keyspace(**kwargs)


def test_keyspace_is_immutable() -> None:
    with pytest.raises(AttributeError):
        DEFAULT_KEYSPACE.width = 8


def test_request_key_value_type() -> None:
    key = RequestKey.from_int(828)
    assert str(key) == "B22222YK"
    assert key.to_int() == 828
    assert RequestKey.parse("B22222YK") == key
    assert to_request_key(828) == "B22222YK"

    with pytest.raises(IllegalCharactersError):
        RequestKey.parse("B2222!YK")
