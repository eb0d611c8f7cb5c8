"""Tests for the route collection pipeline."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from docroutes.config import AppConfig
from docroutes.models import CodeCell, Notebook
from docroutes.routes.collector import CollectStats, RouteCollector
from docroutes.routes.issues import IssueCollector

SITE = """# Home

```sql index.sql {"route": {"caption": "Home"}}
select 1;
```

```sql {"route": {"path": "/docs/report.sql.ts", "caption": "Report"}}
select 2;
```

```sql {"route": {"path": "/docs/broken.sql"}}
select 3;
```

```bash
echo plain
```
"""


class TestCollectStats:
    """Test CollectStats dataclass."""

    def test_defaults(self) -> None:
        """Should start empty."""
        stats = CollectStats()

        assert stats.documents == 0
        assert stats.failed == 0
        assert stats.processed_files == []
        assert stats.collected == []


class TestRouteCollector:
    """Test RouteCollector pipeline."""

    @pytest.fixture
    def sink(self) -> IssueCollector:
        return IssueCollector()

    @pytest.fixture
    def collector(self, sink: IssueCollector) -> RouteCollector:
        return RouteCollector(sink=sink)

    def test_collect_notebook(self, collector: RouteCollector, sink: IssueCollector) -> None:
        """Should return only validated routes and report the rest."""
        notebook = Notebook(
            provenance="nb.md",
            cells=[
                CodeCell(language="sql", source="", info="a.sql", attrs={"route": {"caption": "A"}}),
                CodeCell(language="sql", source="", attrs={"route": {"path": "/b.sql"}}),
                CodeCell(language="sql", source=""),
            ],
        )

        routes = collector.collect_notebook(notebook)

        assert [route.path for route in routes] == ["a.sql"]
        assert len(sink) == 1

    def test_collect_files(
        self, collector: RouteCollector, sink: IssueCollector, tmp_path: Path
    ) -> None:
        """Should walk markdown files and count what it found."""
        (tmp_path / "site.md").write_text(SITE, encoding="utf-8")
        (tmp_path / "notes.txt").write_text(SITE, encoding="utf-8")

        stats = collector.collect([tmp_path])

        assert stats.documents == 1
        assert stats.cells == 4
        assert stats.routes == 2
        assert stats.issues == 1
        assert stats.failed == 0
        assert stats.processed_files == [tmp_path / "site.md"]
        assert [route.path for route in stats.collected] == ["index.sql", "/docs/report.sql.ts"]
        assert stats.collected[1].path_extns == [".sql", "ts"]
        assert sink.issues[0].kind == "route-schema-parse"
        assert sink.issues[0].start_line == 11

    def test_collect_counts_attribute_issues(
        self, collector: RouteCollector, tmp_path: Path
    ) -> None:
        """Should count malformed fence attributes as issues."""
        path = tmp_path / "bad.md"
        path.write_text("```sql a.sql {oops}\n```\n", encoding="utf-8")

        stats = collector.collect([path])

        assert stats.issues == 1
        assert stats.routes == 0

    def test_no_documents(self, collector: RouteCollector, tmp_path: Path) -> None:
        """Should return empty stats when nothing matches."""
        stats = collector.collect([tmp_path])

        assert stats.documents == 0
        assert stats.processed_files == []

    def test_unreadable_file(self, collector: RouteCollector, tmp_path: Path) -> None:
        """Should log and count files that cannot be read."""
        good = tmp_path / "a.md"
        bad = tmp_path / "b.md"
        good.write_text(SITE, encoding="utf-8")
        bad.write_bytes(b"\xff\xfe\x00bad")

        stats = collector.collect([tmp_path])

        assert stats.documents == 1
        assert stats.failed == 1
        assert set(stats.processed_files) == {good, bad}

    @patch("docroutes.routes.collector.load_notebook")
    def test_os_error(self, mock_load, collector: RouteCollector, tmp_path: Path) -> None:
        """Should keep going after an OSError."""
        path = tmp_path / "a.md"
        path.write_text("", encoding="utf-8")
        mock_load.side_effect = PermissionError("denied")

        stats = collector.collect([path])

        assert stats.failed == 1
        assert stats.documents == 0

    def test_configured_delimiter(self, sink: IssueCollector) -> None:
        """Should derive path fields with the configured delimiter."""
        collector = RouteCollector(sink=sink, config=AppConfig(path_delim=":"))
        notebook = Notebook(
            provenance="nb.md",
            cells=[
                CodeCell(
                    language="sql",
                    source="",
                    attrs={"route": {"path": "a:b.sql", "caption": "B"}},
                )
            ],
        )

        routes = collector.collect_notebook(notebook)

        assert routes[0].path_basename == "b.sql"
        assert routes[0].path_dirname == "a"
        assert len(sink) == 0

    def test_default_sink(self) -> None:
        """Should create its own sink when none is given."""
        collector = RouteCollector()

        assert isinstance(collector.sink, IssueCollector)
        assert len(collector.sink) == 0
