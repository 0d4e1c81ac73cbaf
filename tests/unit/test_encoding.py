from __future__ import annotations

import pytest

from apinet.encoding import (
    EncodingMode,
    build_file_part,
    build_multipart_data,
    flatten_parameters,
    generate_boundary,
    multipart_content_type,
)

########################################
#     Tests for flatten_parameters     #
########################################


def test_flatten_parameters_none() -> None:
    assert flatten_parameters(None) == []


def test_flatten_parameters_scalars() -> None:
    assert flatten_parameters({"name": "kim", "age": 31}) == [("name", "kim"), ("age", "31")]


def test_flatten_parameters_list_keeps_order() -> None:
    assert flatten_parameters({"tags": ["b", "a", 3]}) == [
        ("tags[]", "b"),
        ("tags[]", "a"),
        ("tags[]", "3"),
    ]


def test_flatten_parameters_tuple() -> None:
    assert flatten_parameters({"ids": (1, 2)}) == [("ids[]", "1"), ("ids[]", "2")]


def test_flatten_parameters_empty_list() -> None:
    assert flatten_parameters({"tags": []}) == []


@pytest.mark.parametrize("value", [1.5, None, True, {"a": 1}, [1.5]])
def test_flatten_parameters_invalid_value(value: object) -> None:
    with pytest.raises(TypeError, match=r"parameter 'key' must be a string"):
        flatten_parameters({"key": value})


##########################################
#     Tests for build_multipart_data     #
##########################################


def test_build_multipart_data() -> None:
    assert build_multipart_data({"name": "kim", "age": 31, "tags": ["a", "b"]}) == {
        "name": "kim",
        "age": "31",
        "tags[]": ["a", "b"],
    }


def test_build_multipart_data_none() -> None:
    assert build_multipart_data(None) == {}


#####################################
#     Tests for build_file_part     #
#####################################


def test_build_file_part() -> None:
    assert build_file_part("avatar", b"\xff\xd8") == (
        "file",
        ("avatar.jpg", b"\xff\xd8", "image/jpg"),
    )


##################################
#     Tests for the boundary     #
##################################


def test_generate_boundary_is_fresh() -> None:
    assert generate_boundary() != generate_boundary()


def test_multipart_content_type() -> None:
    boundary = generate_boundary()
    assert multipart_content_type(boundary) == f"multipart/form-data; boundary={boundary}"


def test_encoding_mode_values() -> None:
    assert [mode.value for mode in EncodingMode] == ["query", "json", "multipart"]
