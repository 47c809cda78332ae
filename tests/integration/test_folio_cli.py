"""
Integration tests for the folio command line.

Each test writes sources into a temporary content directory and runs
a command through click's CliRunner.
"""
from pathlib import Path

import pytest


@pytest.fixture
def site(write_sources, hello_source, specflow_source, page_source) -> Path:
    return write_sources({
        "2020-01-01-hello-world.md": hello_source,
        "2021-03-04-specflow-steps.md": specflow_source,
        "about.md": page_source,
    })


# ==================== build ====================

class TestBuildCommand:
    """Tests for folio build."""

    def test_build(self, invoke, site: Path, output_dir: Path):
        result = invoke("build", str(site), "-o", str(output_dir))
        assert result.exit_code == 0, result.output
        assert "Loaded 3 posts (0 failed)" in result.output
        assert "Created: " in result.output
        assert (output_dir / "index.html").exists()
        assert (output_dir / "posts" / "hello-world.html").exists()
        assert (output_dir / "tags" / "specflow.html").exists()

    def test_rebuild_unchanged(self, invoke, site: Path, output_dir: Path):
        invoke("build", str(site), "-o", str(output_dir))
        result = invoke("build", str(site), "-o", str(output_dir))
        assert result.exit_code == 0
        assert "Created: 0" in result.output
        assert "Updated: 0" in result.output

    def test_build_with_jobs(self, invoke, site: Path, output_dir: Path):
        result = invoke("build", str(site), "-o", str(output_dir), "-j", "3")
        assert result.exit_code == 0, result.output
        assert (output_dir / "posts" / "specflow-steps.html").exists()

    def test_build_reports_failures(self, invoke, write_sources, hello_source,
                                    missing_date_source, output_dir: Path):
        """Bad sources are listed, good ones still built, exit code 1."""
        content = write_sources({"good.md": hello_source, "bad.md": missing_date_source})
        result = invoke("build", str(content), "-o", str(output_dir))
        assert result.exit_code == 1
        assert "Loaded 1 posts (1 failed)" in result.output
        assert "bad.md: MissingFieldError: missing required field 'date'" in result.output
        assert (output_dir / "posts" / "good.html").exists()

    def test_build_reports_unknown_layout(self, invoke, write_sources, output_dir: Path):
        content = write_sources({
            "odd.md": "---\ntitle: Odd\ndate: 2020-01-01\nlayout: gallery\n---\nx\n",
        })
        result = invoke("build", str(content), "-o", str(output_dir))
        assert result.exit_code == 1
        assert "unknown layout 'gallery'" in result.output

    def test_missing_content_dir(self, invoke, tmp_path: Path):
        result = invoke("build", str(tmp_path / "nope"))
        assert result.exit_code == 2
        assert "Content directory not found" in result.output

    def test_config_file(self, invoke, site: Path, tmp_path: Path):
        config = tmp_path / "folio.yaml"
        config.write_text(
            f"title: Config Blog\noutput_dir: {tmp_path / 'public'}\n"
            "permalink: '{year}/{slug}.html'\n",
            encoding="utf-8",
        )
        result = invoke("-c", str(config), "build", str(site))
        assert result.exit_code == 0, result.output
        page = tmp_path / "public" / "2020" / "hello-world.html"
        assert "Config Blog" in page.read_text(encoding="utf-8")

    def test_invalid_config(self, invoke, site: Path, tmp_path: Path):
        config = tmp_path / "folio.yaml"
        config.write_text("titel: Typo\n", encoding="utf-8")
        result = invoke("-c", str(config), "build", str(site))
        assert result.exit_code == 1
        assert "ConfigError" in result.output

    def test_writes_logs(self, invoke, site: Path, output_dir: Path, tmp_path: Path):
        invoke("build", str(site), "-o", str(output_dir))
        text = (tmp_path / "logs" / "operations" / "folio.log").read_text(encoding="utf-8")
        assert "START load" in text
        assert "START publish" in text
        assert 'DONE publish {"duration": ' in text
        assert '"pages_created": 9' in text

    def test_logs_skipped_sources(self, invoke, write_sources, hello_source,
                                  missing_date_source, output_dir: Path, tmp_path: Path):
        content = write_sources({"good.md": hello_source, "bad.md": missing_date_source})
        invoke("build", str(content), "-o", str(output_dir))
        text = (tmp_path / "logs" / "operations" / "folio.log").read_text(encoding="utf-8")
        assert (
            'SKIP load {"kind": "MissingFieldError", '
            '"reason": "missing required field \'date\'", "source": "bad.md"}'
        ) in text
        assert '"files_skipped": 1' in text

    def test_colliding_pages(self, invoke, write_sources, hello_source,
                             output_dir: Path, tmp_path: Path):
        """A post whose page would replace index.html fails the build."""
        content = write_sources({"index.md": hello_source})
        config = tmp_path / "folio.yaml"
        config.write_text("permalink: '{slug}.html'\n", encoding="utf-8")
        result = invoke("-c", str(config), "build", str(content), "-o", str(output_dir))
        assert result.exit_code == 1
        assert "PublishError" in result.output
        assert "both write index.html" in result.output
        assert not (output_dir / "index.html").exists()


# ==================== check ====================

class TestCheckCommand:
    """Tests for folio check."""

    def test_all_valid(self, invoke, site: Path):
        result = invoke("check", str(site))
        assert result.exit_code == 0
        assert "All posts valid" in result.output

    def test_problems(self, invoke, write_sources, hello_source):
        content = write_sources({
            "good.md": hello_source,
            "nofm.md": "# No front matter\n",
            "odd.md": "---\ntitle: Odd\ndate: 2020-01-01\nlayout: gallery\n---\n",
        })
        result = invoke("check", str(content))
        assert result.exit_code == 1
        assert "nofm.md: MissingFrontMatterError" in result.output
        assert "odd.md: UnknownLayoutError" in result.output
        assert "2 problem(s) found" in result.output


# ==================== list / tags / show ====================

class TestListCommand:
    """Tests for folio list."""

    def test_list(self, invoke, site: Path):
        result = invoke("list", str(site))
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines[0].startswith("2021-03-04  specflow-steps  SpecFlow: sharing steps")
        assert lines[1] == "2020-01-01  hello-world  Hello  [a, b]"
        assert lines[2] == "2019-06-01  about  About"

    def test_list_by_tag(self, invoke, site: Path):
        result = invoke("list", str(site), "--tag", "CSharp")
        assert result.exit_code == 0
        assert result.output.strip().splitlines() == [
            "2021-03-04  specflow-steps  SpecFlow: sharing steps between features"
            "  [csharp, specflow, testing]"
        ]

    def test_list_no_match(self, invoke, site: Path):
        result = invoke("list", str(site), "-t", "rust")
        assert "No posts found" in result.output


class TestTagsCommand:
    """Tests for folio tags."""

    def test_tags(self, invoke, site: Path):
        result = invoke("tags", str(site))
        assert result.exit_code == 0
        lines = [line.split() for line in result.output.strip().splitlines()]
        assert lines == [
            ["a", "1"], ["b", "1"], ["csharp", "1"], ["specflow", "1"], ["testing", "1"],
        ]

    def test_no_tags(self, invoke, content_dir: Path):
        result = invoke("tags", str(content_dir))
        assert "No tags found" in result.output


class TestShowCommand:
    """Tests for folio show."""

    def test_show_body(self, invoke, site: Path):
        result = invoke("show", "hello-world", str(site))
        assert result.exit_code == 0
        assert result.output == '<h1 id="hi">Hi</h1>\n'

    def test_show_page(self, invoke, site: Path):
        result = invoke("show", "about", str(site), "--page")
        assert result.exit_code == 0
        assert result.output.startswith("<!DOCTYPE html>")

    def test_show_missing(self, invoke, site: Path):
        result = invoke("show", "nope", str(site))
        assert result.exit_code == 1
        assert "NotFoundError: no post with slug 'nope'" in result.output
