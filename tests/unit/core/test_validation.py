from __future__ import annotations

import pytest

from apinet.core.validation import (
    validate_base_url,
    validate_max_connections,
    validate_path,
    validate_timeout,
)

######################################
#     Tests for validate_timeout     #
######################################


@pytest.mark.parametrize("timeout", [0.1, 1, 20.0])
def test_validate_timeout_valid(timeout: float) -> None:
    validate_timeout(timeout)


@pytest.mark.parametrize("timeout", [0, -0.5])
def test_validate_timeout_invalid(timeout: float) -> None:
    with pytest.raises(ValueError, match=r"timeout must be > 0"):
        validate_timeout(timeout)


##############################################
#     Tests for validate_max_connections     #
##############################################


def test_validate_max_connections_valid() -> None:
    validate_max_connections(1)
    validate_max_connections(3)


def test_validate_max_connections_invalid() -> None:
    with pytest.raises(ValueError, match=r"max_connections_per_host must be >= 1, got 0"):
        validate_max_connections(0)


#######################################
#     Tests for validate_base_url     #
#######################################


@pytest.mark.parametrize("url", ["http://localhost:8000", "https://api.example.com/v1"])
def test_validate_base_url_valid(url: str) -> None:
    validate_base_url(url)


def test_validate_base_url_invalid() -> None:
    with pytest.raises(ValueError, match=r"absolute http\(s\) URL"):
        validate_base_url("/relative")


###################################
#     Tests for validate_path     #
###################################


@pytest.mark.parametrize("path", ["/users", "users/1", "https://cdn.example.com/a.jpg"])
def test_validate_path_valid(path: str) -> None:
    validate_path(path)


@pytest.mark.parametrize("path", ["", "   "])
def test_validate_path_invalid(path: str) -> None:
    with pytest.raises(ValueError, match=r"path must be a non-empty string"):
        validate_path(path)
