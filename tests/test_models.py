"""Tests for core data models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from docroutes.models import CodeCell, Notebook, RouteAnnotation, ValidationIssue


class TestRouteAnnotation:
    """Test RouteAnnotation model."""

    def test_create_from_wire_names(self) -> None:
        """Should accept camelCase field names."""
        route = RouteAnnotation.model_validate(
            {
                "path": "/docs/report.sql",
                "caption": "Report",
                "pathBasename": "report.sql",
                "siblingOrder": 2,
                "abbreviatedCaption": "Rpt",
                "elaboration": {"lang": {"fr": {"caption": "Rapport"}}},
                "children": [{"path": "/docs/report/a.sql"}],
            }
        )

        assert route.path == "/docs/report.sql"
        assert route.path_basename == "report.sql"
        assert route.sibling_order == 2
        assert route.abbreviated_caption == "Rpt"
        assert route.elaboration == {"lang": {"fr": {"caption": "Rapport"}}}
        assert route.children is not None
        assert route.children[0].path == "/docs/report/a.sql"

    def test_python_names_rejected(self) -> None:
        """Should only accept camelCase names on the wire."""
        with pytest.raises(ValidationError) as exc_info:
            RouteAnnotation.model_validate({"path": "/a.sql", "caption": "A", "path_extns": []})

        assert exc_info.value.errors()[0]["type"] == "extra_forbidden"

    @pytest.mark.parametrize(
        "extra",
        [{"siblingOrder": "2"}, {"siblingOrder": True}, {"title": None}, {"pathExtns": ("sql",)}],
    )
    def test_no_coercion(self, extra: dict) -> None:
        """Should reject values of the wrong type instead of converting them."""
        with pytest.raises(ValidationError):
            RouteAnnotation.model_validate({"path": "/a.sql", "caption": "A", **extra})

    def test_integer_sibling_order(self) -> None:
        """Should accept whole numbers as sibling order."""
        route = RouteAnnotation.model_validate({"path": "/a", "caption": "A", "siblingOrder": 2})

        assert route.sibling_order == 2

    def test_missing_caption(self) -> None:
        """Should require caption."""
        with pytest.raises(ValidationError):
            RouteAnnotation.model_validate({"path": "/a.sql"})

    def test_unknown_field_rejected(self) -> None:
        """Should reject fields outside the schema."""
        with pytest.raises(ValidationError) as exc_info:
            RouteAnnotation.model_validate({"path": "/a.sql", "caption": "A", "foo": 1})

        assert exc_info.value.errors()[0]["type"] == "extra_forbidden"

    def test_wrong_type(self) -> None:
        """Should not coerce numbers into strings."""
        with pytest.raises(ValidationError):
            RouteAnnotation.model_validate({"path": "/a.sql", "caption": 42})

    def test_child_extra_keys_ignored(self) -> None:
        """Should drop unknown keys of child references."""
        route = RouteAnnotation.model_validate(
            {"path": "/a", "caption": "A", "children": [{"path": "/a/b", "x": 1}]}
        )

        assert route.children is not None
        assert route.children[0].model_dump() == {"path": "/a/b"}

    def test_path_is_frozen(self) -> None:
        """Should refuse to change the path after validation."""
        route = RouteAnnotation(path="/a.sql", caption="A")

        with pytest.raises(ValidationError):
            route.path = "/b.sql"

    def test_effective_defaults(self) -> None:
        """Should fall back to caption and path for unset display fields."""
        route = RouteAnnotation(path="/a.sql", caption="A")

        assert route.effective_title == "A"
        assert route.effective_abbreviated_caption == "A"
        assert route.effective_description == "A"
        assert route.href == "/a.sql"

    def test_effective_values_when_set(self) -> None:
        """Should prefer explicit display fields."""
        route = RouteAnnotation(
            path="/a.sql",
            caption="A",
            title="Alpha",
            abbreviatedCaption="α",
            description="First",
            url="https://example.com/a",
        )

        assert route.effective_title == "Alpha"
        assert route.effective_abbreviated_caption == "α"
        assert route.effective_description == "First"
        assert route.href == "https://example.com/a"

    def test_to_record(self) -> None:
        """Should dump wire names and omit unset fields."""
        route = RouteAnnotation(path="/a.sql", caption="A", pathBasename="a.sql")

        assert route.to_record() == {
            "path": "/a.sql",
            "caption": "A",
            "pathBasename": "a.sql",
        }


class TestValidationIssue:
    """Test ValidationIssue dataclass."""

    def test_located_returns_copy(self) -> None:
        """Should attach a location without touching the source issue."""
        issue = ValidationIssue(
            kind="route-schema-parse",
            disposition="error",
            error=ValueError("bad"),
            message="bad",
        )

        located = issue.located("docs/a.md", 3, 7)

        assert located.provenance == "docs/a.md"
        assert (located.start_line, located.end_line) == (3, 7)
        assert issue.provenance is None
        assert located.error is issue.error


class TestNotebook:
    """Test Notebook and CodeCell dataclasses."""

    def test_defaults(self) -> None:
        """Should start with no cells and no attributes."""
        notebook = Notebook(provenance="a.md")
        cell = CodeCell(language="sql", source="select 1")

        assert notebook.cells == []
        assert cell.info is None
        assert cell.attrs is None
