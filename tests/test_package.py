"""Package-level smoke tests."""

from click.testing import CliRunner

import mythpms
from mythpms.cli import main


def test_version_matches_cli() -> None:
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert mythpms.__version__ in result.output


def test_commands_registered() -> None:
    assert {"inspect", "process", "prune-library", "prune-logs"} <= set(main.commands)
