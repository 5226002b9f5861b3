import json
from pathlib import Path
import re

import pytest
from typer.testing import CliRunner

from lanekit import __version__
from lanepack.cli.app import TargetError, app, load_target


def _write_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, name: str, source: str) -> str:
    (tmp_path / f"{name}.py").write_text(source, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    return name


def test_cli_version_matches_package_version() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    printed = result.stdout.strip()
    assert re.fullmatch(r"\d+\.\d+\.\d+", printed)
    assert printed == __version__


def test_capture_prints_compact_json() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["capture", "lanepack.core.types:VALUE_KINDS"])

    assert result.exit_code == 0
    assert result.stdout.strip() == '["null","bool","number","string","array","object"]'


def test_capture_pretty_json(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    module = _write_module(tmp_path, monkeypatch, "cli_pretty_values", 'VALUE = {"b": 1, "a": 2}\n')

    runner = CliRunner()
    result = runner.invoke(app, ["--pretty-json", "capture", f"{module}:VALUE"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"a": 2, "b": 1}
    assert '\n  "a": 2' in result.stdout


def test_capture_pretty_json_from_env(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    module = _write_module(tmp_path, monkeypatch, "cli_env_values", "VALUE = [1]\n")
    monkeypatch.setenv("LANEKIT_PRETTY_JSON", "1")

    runner = CliRunner()
    result = runner.invoke(app, ["capture", f"{module}:VALUE"])

    assert result.exit_code == 0
    assert result.stdout.strip() == "[\n  1\n]"


def test_capture_cyclic_value(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    module = _write_module(
        tmp_path,
        monkeypatch,
        "cli_ring_values",
        "class Node:\n"
        "    def __init__(self, name):\n"
        "        self.name = name\n"
        "        self.next = None\n"
        "\n"
        "RING = Node('only')\n"
        "RING.next = RING\n",
    )

    runner = CliRunner()
    result = runner.invoke(app, ["capture", f"{module}:RING"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload[""].startswith("Address: 0x")
    assert payload["name"] == "only"
    assert payload["next"] == payload[""].replace("Address: ", "(pointer: ") + ")"


def test_capture_with_message_and_max_length(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    module = _write_module(
        tmp_path,
        monkeypatch,
        "cli_long_values",
        "BIG = {str(n): n for n in range(50)}\n",
    )

    runner = CliRunner()
    result = runner.invoke(
        app,
        ["capture", f"{module}:BIG", "--message", "bigMap", "--max-length", "20"],
    )

    assert result.exit_code == 0
    line = result.stdout.rstrip("\n")
    assert line.startswith("bigMap: {")
    assert len(line) == 20
    assert line.endswith("…")


def test_capture_output_survives_quiet_mode() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--quiet", "capture", "lanepack.core.types:NAN_TEXT"])

    assert result.exit_code == 0
    assert result.stdout.strip() == '"NaN"'


@pytest.mark.parametrize(
    "target",
    [
        "no_separator",
        "lanepack.core.types:MISSING",
        "lanepack_missing_module:VALUE",
        ":VALUE",
    ],
)
def test_capture_bad_target_exits_2(target: str) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["capture", target])

    assert result.exit_code == 2
    assert "capture failed" in result.output


def test_capture_unsupported_value_exits_1(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    module = _write_module(tmp_path, monkeypatch, "cli_bad_values", "BAD = [slice(1, 2)]\n")

    runner = CliRunner()
    result = runner.invoke(app, ["capture", f"{module}:BAD"])

    assert result.exit_code == 1
    assert "can't capture value of type builtins.slice" in result.output


def test_load_target_walks_attribute_paths() -> None:
    assert load_target("lanepack.config:LaneConfig.from_env").__name__ == "from_env"

    with pytest.raises(TargetError):
        load_target("lanepack.config:LaneConfig.missing")
