"""
Tests for the folio run logs.

A FolioLogger writes tagged START/SKIP/DONE events to ``<component>.log``
and command failures to ``errors.log``. NullLogger and safe_logger let
library code log without holding a logger.
"""
import json
from pathlib import Path
from unittest.mock import MagicMock

import click
import pytest

from folio.core.cli import LoadStats, PublishStats
from folio.core.exceptions import MissingFieldError, NotFoundError, UnknownLayoutError
from folio.core.logging_manager import (
    FolioLogger,
    NullLogger,
    format_cli_error,
    handle_cli_error,
    safe_logger,
)


@pytest.fixture
def run_log(tmp_path: Path):
    """A logger for the 'build' component plus a reader for its files."""
    logger = FolioLogger(tmp_path, component_name="build")

    def read(name: str = "build.log") -> str:
        logger.close()
        return (tmp_path / name).read_text(encoding="utf-8")

    yield logger, read
    logger.close()


def event_fields(text: str, tag: str) -> dict:
    """Parse the JSON fields of the first line carrying ``tag``."""
    line = next(line for line in text.splitlines() if f" {tag} " in line)
    return json.loads(line[line.index("{"):])


# ==================== Run Events ====================

class TestRunEvents:
    """START, SKIP and DONE lines in the run log."""

    def test_log_files_created(self, run_log, tmp_path: Path):
        logger, read = run_log
        logger.log_info("hello")
        assert "hello" in read()
        assert (tmp_path / "errors.log").exists()

    def test_start(self, run_log):
        logger, read = run_log
        logger.log_operation("load", {"sources": 3, "content_dir": Path("_posts")})
        assert event_fields(read(), "START load") == {"content_dir": "_posts", "sources": 3}

    def test_skip_load(self, run_log):
        logger, read = run_log
        logger.log_skip("load", MissingFieldError("date", source="draft.md"), source="draft.md")
        text = read()
        assert "WARNING" in text
        assert event_fields(text, "SKIP load") == {
            "kind": "MissingFieldError",
            "reason": "missing required field 'date'",
            "source": "draft.md",
        }

    def test_skip_render(self, run_log):
        logger, read = run_log
        error = UnknownLayoutError("gallery", "odd")
        logger.log_skip("render", error, source="odd.md", slug="odd")
        fields = event_fields(read(), "SKIP render")
        assert fields["kind"] == "UnknownLayoutError"
        assert fields["slug"] == "odd"
        assert fields["source"] == "odd.md"
        assert "gallery" in fields["reason"]

    def test_load_summary(self, run_log):
        logger, read = run_log
        logger.log_summary("load", LoadStats(files_processed=4, posts_loaded=3, files_skipped=1))
        fields = event_fields(read(), "DONE load")
        assert fields["posts_loaded"] == 3
        assert fields["files_skipped"] == 1

    def test_publish_summary(self, run_log):
        logger, read = run_log
        stats = PublishStats()
        stats.record("created")
        stats.record("unchanged")
        logger.log_summary("publish", stats)
        fields = event_fields(read(), "DONE publish")
        assert fields["pages_created"] == 1
        assert fields["pages_unchanged"] == 1
        assert "duration" in fields

    def test_debug_stays_out_of_error_log(self, run_log):
        logger, read = run_log
        logger.log_debug("Loaded a.md", {"slug": "a"})
        assert 'Loaded a.md {"slug": "a"}' in read()
        assert "a.md" not in read("errors.log")

    def test_reopening_does_not_duplicate_lines(self, tmp_path: Path):
        FolioLogger(tmp_path, component_name="build").close()
        logger = FolioLogger(tmp_path, component_name="build")
        logger.log_info("once")
        logger.close()
        assert (tmp_path / "build.log").read_text(encoding="utf-8").count("once") == 1


# ==================== Failures ====================

class TestFailures:
    """Errors that end a command."""

    def test_error_log_has_context_and_traceback(self, run_log):
        logger, read = run_log
        try:
            raise NotFoundError("intro")
        except NotFoundError as e:
            logger.log_error(e, {"operation": "show"})
        text = read("errors.log")
        assert "NotFoundError: no post with slug 'intro'" in text
        assert '{"operation": "show"}' in text
        assert "Traceback" in text

    def test_unraised_error_has_no_traceback(self, run_log):
        logger, read = run_log
        logger.log_error(NotFoundError("intro"))
        assert "Traceback" not in read("errors.log")

    def test_cli_error_message(self, run_log):
        logger, read = run_log
        message = logger.log_cli_error(NotFoundError("intro"), {"operation": "show"})
        assert message == "❌ NotFoundError: no post with slug 'intro'"
        assert "operation" in read("errors.log")

    def test_format_with_traceback(self):
        try:
            raise NotFoundError("intro")
        except NotFoundError as e:
            message = format_cli_error(e, show_traceback=True)
        assert message.startswith("❌ NotFoundError")
        assert "Traceback (most recent call last)" in message


class TestHandleCliError:
    """Tests for handle_cli_error."""

    def test_exits_with_code(self):
        ctx = click.Context(click.Command("x"), obj={"logger": None})
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_error(ctx, NotFoundError("intro"), "show", exit_code=2)
        assert exc_info.value.code == 2

    def test_prints_error(self, capsys):
        ctx = click.Context(click.Command("x"), obj={"logger": None})
        with pytest.raises(SystemExit):
            handle_cli_error(ctx, NotFoundError("intro"), "show")
        assert "no post with slug 'intro'" in capsys.readouterr().err

    def test_logs_through_context_logger(self, tmp_path: Path):
        logger = FolioLogger(tmp_path, component_name="show")
        ctx = click.Context(click.Command("x"), obj={"logger": logger})
        with pytest.raises(SystemExit):
            handle_cli_error(ctx, NotFoundError("intro"), "show", {"slug": "intro"})
        logger.close()
        text = (tmp_path / "errors.log").read_text(encoding="utf-8")
        assert '{"operation": "show", "slug": "intro"}' in text


# ==================== Null Logging ====================

class TestNullLogger:
    """NullLogger accepts every FolioLogger call and records nothing."""

    def test_accepts_run_events(self):
        logger = NullLogger()
        logger.log_operation("load", {"sources": 1})
        logger.log_skip("load", MissingFieldError("date"), source="a.md")
        logger.log_summary("load", LoadStats())
        logger.log_warning("w")

    def test_cli_error_still_formatted(self):
        assert NullLogger().log_cli_error(ValueError("bad")) == "❌ ValueError: bad"

    def test_interface_matches(self):
        public = {name for name in dir(FolioLogger) if name.startswith("log_")}
        assert public <= set(dir(NullLogger))


class TestSafeLogger:
    """Tests for safe_logger."""

    def test_returns_given_logger(self):
        mock_logger = MagicMock(spec=FolioLogger)
        assert safe_logger(mock_logger) is mock_logger

    def test_none_gives_shared_null_logger(self):
        assert isinstance(safe_logger(None), NullLogger)
        assert safe_logger(None) is safe_logger(None)
