from __future__ import annotations

import pytest

from geo.lnglat import coordinate_precision, format_number, round_half_up
from urlhash.codec import (
    HashComponents,
    InvalidHashError,
    decode_hash,
    encode_hash,
    round_components,
)


def test_decode_hash():
    assert decode_hash("#10/51.505/-0.09") == HashComponents(
        zoom=10, center=(-0.09, 51.505), layers="", additional={}
    )
    assert decode_hash("#10/51.505/-0.09/A,B,C") == HashComponents(
        zoom=10, center=(-0.09, 51.505), layers="A,B,C", additional={}
    )


def test_decode_hash_with_parameters():
    c = decode_hash("#10/51.505/-0.09//m=foo")
    assert c.layers == ""
    assert c.additional == {"m": "foo"}

    c = decode_hash("#10/51.505/-0.09/A,B/m=foo/long_key=x=y")
    assert c.layers == "A,B"
    assert c.additional == {"m": "foo", "long_key": "x=y"}


def test_decode_hash_keeps_last_plain_segment():
    assert decode_hash("#1/2/3/A/a=1/B").layers == "B"


def test_decode_short_hash_is_empty():
    assert decode_hash("") == HashComponents()
    assert decode_hash("#") == HashComponents()
    assert decode_hash("#10/51.505") == HashComponents()


def test_decode_without_leading_hash():
    assert decode_hash("3/1.5/2.5").center == (2.5, 1.5)


def test_decode_rejects_non_numeric_position():
    with pytest.raises(InvalidHashError):
        decode_hash("#ten/51.505/-0.09")


def test_encode_requires_position():
    assert encode_hash(HashComponents()) == ""
    assert encode_hash(HashComponents(zoom=3)) == ""
    assert encode_hash(HashComponents(center=(1.0, 2.0))) == ""


def test_encode_hash_layout():
    c = HashComponents(
        zoom=10,
        center=(-0.09, 51.505),
        layers="A,B,C",
        additional={"foo": "bar", "a": "b"},
    )
    assert encode_hash(c) == "#10/51.505/-0.09/A,B,C/foo=bar/a=b"
    assert encode_hash(HashComponents(zoom=10, center=(-0.09, 51.505), additional={"m": "x"})) == (
        "#10/51.505/-0.09/m=x"
    )


def test_encode_rounds_to_zoom_precision():
    assert encode_hash(HashComponents(zoom=10.123, center=(-0.0912345, 51.5054321))) == (
        "#10.12/51.5054/-0.0912"
    )
    assert encode_hash(HashComponents(zoom=0, center=(12.34, -45.67))) == "#0/-45.7/12.3"


def test_hash_round_trip():
    components = HashComponents()
    assert decode_hash(encode_hash(components)) == components

    components = HashComponents(zoom=10, center=(-0.09, 51.505))
    assert decode_hash(encode_hash(components)) == components

    components = HashComponents(zoom=10, center=(-0.09, 51.505), layers="A,B,C")
    assert decode_hash(encode_hash(components)) == components

    components = HashComponents(
        zoom=10, center=(-0.09, 51.505), layers="A,B,C", additional={"foo": "bar", "a": "b"}
    )
    assert decode_hash(encode_hash(components)) == components


def test_round_trip_holds_after_one_rounding_pass():
    raw = HashComponents(zoom=13.4567, center=(14.437812345, 50.075512345), layers="w")
    rounded = round_components(raw)
    assert rounded != raw
    assert decode_hash(encode_hash(rounded)) == rounded
    assert encode_hash(rounded) == encode_hash(raw)


def test_coordinate_precision():
    assert coordinate_precision(0) == 1
    assert coordinate_precision(10) == 4
    assert coordinate_precision(18) == 6
    assert coordinate_precision(22) == 8


def test_round_half_up_matches_browser_rounding():
    assert round_half_up(0.5, 0) == 1
    assert round_half_up(2.5, 0) == 3
    assert round_half_up(-2.5, 0) == -2
    assert round_half_up(1.005, 1) == 1.0


def test_format_number():
    assert format_number(10.0, 2) == "10"
    assert format_number(10.5, 2) == "10.5"
    assert format_number(-0.0, 4) == "0"
    assert format_number(-0.00001, 4) == "0"
    assert format_number(51.505, 4) == "51.505"
    assert format_number(-0.09, 4) == "-0.09"
    assert format_number(0.00001, 6) == "0.00001"


def test_encode_tiny_coordinates_without_exponent():
    assert encode_hash(HashComponents(zoom=16, center=(0.00005, 0.00001))) == "#16/0.00001/0.00005"
    assert encode_hash(HashComponents(zoom=20, center=(-0.0000012, 0.0))) == "#20/0/-0.0000012"


@pytest.mark.parametrize(
    "fragment",
    [
        "#nan/1/2",
        "#1/nan/2",
        "#1/2/inf",
        "#inf/1/2",
        "#-Infinity/1/2",
        "#1e400/0/0",
        "#1/0/1e400",
        "#100000/1/2",
        "#-1/1/2",
        "#24.5/1/2",
        "#1/91/2",
        "#1/0/1e7",
        "#1_0/1/2",
        "# 10/1/2",
        "#10/1 /2",
        "#10\n/1/2",
        "#/1/2",
        "#0x10/1/2",
    ],
)
def test_decode_rejects_unusable_position(fragment: str):
    with pytest.raises(InvalidHashError):
        decode_hash(fragment)


def test_decode_accepts_browser_number_spellings():
    c = decode_hash("#1e1/.5/-2.")
    assert c.zoom == 10
    assert c.center == (-2.0, 0.5)
    assert decode_hash("#24/-90/180").zoom == 24


def test_encode_rejects_unusable_position():
    with pytest.raises(InvalidHashError):
        encode_hash(HashComponents(zoom=100000, center=(1.0, 2.0)))
    with pytest.raises(InvalidHashError):
        encode_hash(HashComponents(zoom=3, center=(float("nan"), 2.0)))
