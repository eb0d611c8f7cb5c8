"""Tests for validation message helpers."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from docroutes.models import RouteAnnotation
from docroutes.utils.text import format_location, prettify_validation_error


def _error_for(candidate: dict) -> ValidationError:
    with pytest.raises(ValidationError) as exc_info:
        RouteAnnotation.model_validate(candidate)
    return exc_info.value


class TestFormatLocation:
    """Test format_location function."""

    def test_simple(self) -> None:
        """Should render a single field name."""
        assert format_location(("caption",)) == "caption"

    def test_nested_with_index(self) -> None:
        """Should render list indexes in brackets."""
        assert format_location(("children", 0, "path")) == "children[0].path"

    def test_empty(self) -> None:
        """Should render an empty location as an empty string."""
        assert format_location(()) == ""


class TestPrettifyValidationError:
    """Test prettify_validation_error function."""

    def test_missing_field(self) -> None:
        """Should name the missing field."""
        message = prettify_validation_error(_error_for({"path": "/a"}))

        assert message.startswith("✖ ")
        assert "→ at caption" in message

    def test_unknown_field(self) -> None:
        """Should point at the unknown key."""
        message = prettify_validation_error(
            _error_for({"path": "/a", "caption": "A", "foo": 1})
        )

        assert "→ at foo" in message

    def test_one_block_per_error(self) -> None:
        """Should list every error."""
        message = prettify_validation_error(_error_for({"foo": 1}))

        assert message.count("✖") == 3
