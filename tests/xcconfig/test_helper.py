"""Tests for xcconfig value helpers."""

from __future__ import annotations

import pytest

from podsettings.xcconfig.helper import inherited, quote, relative_path


@pytest.mark.parametrize(
    "path, start, expected",
    [
        ("/work/Pods", "/work/App", "../Pods"),
        ("/work/App/Pods", "/work/App/", "Pods"),
        ("/work", "/work", "."),
        ("Pods", ".", "Pods"),
        ("./Pods/../Vendor", "App/Sub", "../../Vendor"),
        ("../../Pods", "App", "../../../Pods"),
    ],
)
def test_relative_path(path: str, start: str, expected: str) -> None:
    """Relative paths are computed from the path text alone."""
    assert relative_path(path, start) == expected


def test_relative_path_rejects_unrelatable_paths() -> None:
    """Mixed or escaping inputs would need the working directory."""
    with pytest.raises(ValueError, match="absolute and relative"):
        relative_path("/work/Pods", ".")
    with pytest.raises(ValueError, match="leave its base"):
        relative_path("Pods", "../App")


def test_inherited_and_quote() -> None:
    """Quoted values are sorted and the placeholder leads."""
    assert inherited(quote(["b", "a"])) == '$(inherited) "a" "b"'
    assert inherited("") == "$(inherited)"
