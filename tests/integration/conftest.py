"""
Fixtures for CLI integration tests.
"""
from pathlib import Path
from typing import List

import pytest
from click.testing import CliRunner, Result

from folio.pipeline.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def invoke(runner: CliRunner, tmp_path: Path):
    """Run the folio CLI with logs kept under tmp_path."""
    def _invoke(*args: str) -> Result:
        argv: List[str] = ["--log-dir", str(tmp_path / "logs"), *args]
        return runner.invoke(cli, argv, obj={})
    return _invoke
