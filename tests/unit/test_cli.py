"""
Thumbmark v1 - CLI Tests
"""

import pytest
from click.testing import CliRunner

from ingest.cli import Services, cli
from ingest.netscape_codec import decode


@pytest.fixture
def services(store, thumbnails, capturer) -> Services:
    return Services(store=store, thumbnails=thumbnails, capturer=capturer)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestImportCommand:
    """Tests for `thumbmark import`."""

    def test_import_file(self, runner, services, tmp_path, sample_file):
        path = tmp_path / "bookmarks.html"
        path.write_bytes(sample_file)

        result = runner.invoke(cli, ["import", str(path)], obj=services)

        assert result.exit_code == 0, result.output
        assert "Successfully imported 4 new bookmarks" in result.output
        assert services.store.count() == 4

    def test_import_malformed_file(self, runner, services, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("shopping list")

        result = runner.invoke(cli, ["import", str(path)], obj=services)

        assert result.exit_code == 1
        assert "Failed to parse Netscape bookmark file" in result.output
        assert services.store.count() == 0


class TestSingleBookmarkCommands:
    """Tests for add, list and delete."""

    def test_add_and_list(self, runner, services):
        result = runner.invoke(cli, ["add", "https://example.com"], obj=services)
        assert result.exit_code == 0, result.output
        assert "Bookmark added successfully" in result.output

        result = runner.invoke(cli, ["list"], obj=services)
        assert result.exit_code == 0
        assert "https://example.com" in result.output
        assert "1.png" in result.output

    def test_add_duplicate(self, runner, services):
        runner.invoke(cli, ["add", "https://example.com"], obj=services)

        result = runner.invoke(cli, ["add", "https://example.com"], obj=services)

        assert result.exit_code == 1
        assert "already bookmarked" in result.output
        assert services.store.count() == 1

    def test_add_capture_failure(self, runner, services, capturer):
        capturer.failing.add("https://unreachable.example")

        result = runner.invoke(cli, ["add", "https://unreachable.example"], obj=services)

        assert result.exit_code == 1
        assert "Failed to capture screenshot" in result.output

    def test_delete_is_idempotent(self, runner, services):
        runner.invoke(cli, ["add", "https://example.com"], obj=services)

        first = runner.invoke(cli, ["delete", "1"], obj=services)
        second = runner.invoke(cli, ["delete", "1"], obj=services)

        assert first.exit_code == 0
        assert second.exit_code == 0
        assert "No bookmark with id 1" in second.output
        assert services.store.count() == 0


class TestExportStatsRecapture:
    """Tests for export, stats and recapture."""

    def test_export_writes_file(self, runner, services, tmp_path):
        services.store.insert("https://example.com")
        output = tmp_path / "out.html"

        result = runner.invoke(cli, ["export", "-o", str(output)], obj=services)

        assert result.exit_code == 0, result.output
        assert [e.url for e in decode(output.read_bytes())] == ["https://example.com"]

    def test_stats_shows_folders(self, runner, services, tmp_path, sample_file):
        path = tmp_path / "bookmarks.html"
        path.write_bytes(sample_file)

        result = runner.invoke(cli, ["stats", str(path)], obj=services)

        assert result.exit_code == 0, result.output
        assert "Total bookmarks: 4" in result.output
        assert "Reading" in result.output
        assert services.store.count() == 0

    def test_recapture(self, runner, services):
        bookmark_id = services.store.insert("https://example.com")

        result = runner.invoke(cli, ["recapture"], obj=services)

        assert result.exit_code == 0, result.output
        assert services.store.get(bookmark_id).thumbnail_ref == f"{bookmark_id}.png"

    def test_recapture_nothing_missing(self, runner, services):
        result = runner.invoke(cli, ["recapture"], obj=services)

        assert result.exit_code == 0
        assert "Every bookmark has a thumbnail" in result.output


class TestServicesFromEnvironment:
    """Tests for commands run without injected services."""

    def test_store_commands_open_configured_database(self, runner, tmp_path):
        db_path = tmp_path / "data" / "bookmarks.db"

        result = runner.invoke(
            cli,
            ["--env-file", str(tmp_path / "none.env"), "list"],
            env={"THUMBMARK_DB_PATH": str(db_path)},
        )

        assert result.exit_code == 0, result.output
        assert "No bookmarks stored yet" in result.output
        assert db_path.exists()

    def test_unusable_database_reports_error(self, runner, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        result = runner.invoke(
            cli,
            ["--env-file", str(tmp_path / "none.env"), "list"],
            env={"THUMBMARK_DB_PATH": str(blocker / "sub" / "bookmarks.db")},
        )

        assert result.exit_code == 1
        assert "Database error" in result.output

    def test_stats_does_not_open_database(self, runner, tmp_path, sample_file):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        path = tmp_path / "bookmarks.html"
        path.write_bytes(sample_file)

        result = runner.invoke(
            cli,
            ["--env-file", str(tmp_path / "none.env"), "stats", str(path)],
            env={"THUMBMARK_DB_PATH": str(blocker / "sub" / "bookmarks.db")},
        )

        assert result.exit_code == 0, result.output
        assert "Total bookmarks: 4" in result.output

    def test_invalid_setting_reports_error(self, runner, tmp_path):
        result = runner.invoke(
            cli,
            ["--env-file", str(tmp_path / "none.env"), "list"],
            env={"CAPTURE_WAIT_UNTIL": "loaded"},
        )

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
