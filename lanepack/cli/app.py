from dataclasses import dataclass
import importlib
from importlib.metadata import PackageNotFoundError, version as package_version
import json
from pathlib import Path
from typing import Any

import typer

from lanepack.capture import CaptureError, capture
from lanepack.config import LaneConfig
from lanepack.core.canonical import to_json
from lanepack.diff import DiffReport, compare, diff_values, render_diff_report
from lanepack.lane import constrain

app = typer.Typer(help="lanekit CLI: capture and diff in-process values.")


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()


class TargetError(ValueError):
    """Raised when a ``module:attribute`` target can't be resolved."""


def _resolve_cli_version() -> str:
    try:
        return package_version("lanekit")
    except PackageNotFoundError:
        from lanepack import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(_resolve_cli_version(), color=False)
    raise typer.Exit()


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show lanekit version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    stable_json: bool | None = typer.Option(
        None,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON). Defaults to LANEKIT_PRETTY_JSON.",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    if stable_json is None:
        stable_json = not LaneConfig.from_env().pretty_json
    _OUTPUT_OPTIONS.stable_json = stable_json


def _echo(message: str, *, err: bool = False, force: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err and not force:
        return
    typer.echo(message, err=err)


def _echo_json(payload: dict[str, Any], *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.stable_json:
        rendered = json.dumps(
            payload,
            ensure_ascii=False,
            sort_keys=True,
            separators=(",", ":"),
        )
    else:
        rendered = json.dumps(
            payload,
            ensure_ascii=False,
            sort_keys=True,
            indent=2,
        )
    typer.echo(rendered, err=err)


def load_target(target: str) -> Any:
    """Import ``package.module:attr.path`` and return the referenced value."""
    module_name, separator, attribute_path = target.partition(":")
    module_name = module_name.strip()
    if not separator or not module_name or not attribute_path.strip():
        raise TargetError(f"target must look like 'module:attribute', got {target!r}")

    try:
        value: Any = importlib.import_module(module_name)
    except ImportError as error:
        raise TargetError(f"can't import module {module_name!r}: {error}") from error

    for name in attribute_path.strip().split("."):
        try:
            value = getattr(value, name)
        except AttributeError as error:
            raise TargetError(f"{target!r} has no attribute {name!r}") from error
    return value


def _load_json_document(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _emit_report(
    report: DiffReport,
    *,
    json_output: bool,
    fail_on_change: bool,
    left: str,
    right: str,
) -> None:
    exit_code = 1 if fail_on_change and not report.identical else 0
    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": exit_code,
                "identical": report.identical,
                "changes": report.changes,
                "left_path": left,
                "right_path": right,
            }
        )
    else:
        _echo(render_diff_report(report))
    if exit_code:
        raise typer.Exit(code=exit_code)


def _emit_error(message: str, *, json_output: bool, exit_code: int, **fields: Any) -> None:
    if json_output:
        _echo_json({"status": "error", "exit_code": exit_code, "message": message, **fields})
    else:
        _echo(message, err=True)


@app.command(name="capture")
def capture_command(
    target: str = typer.Argument(..., help="Value to capture, as 'module:attribute'."),
    message: str | None = typer.Option(
        None,
        "--message",
        help="Prefix the output like an object log line: '<message>: <json>'.",
    ),
    max_length: int | None = typer.Option(
        None,
        "--max-length",
        help="Truncate output to this many characters. Defaults to LANEKIT_MAX_LENGTH.",
    ),
) -> None:
    """Capture a module-level value and print it as JSON."""
    try:
        value = load_target(target)
    except TargetError as error:
        _echo(f"capture failed: {error}", err=True)
        raise typer.Exit(code=2) from error

    try:
        captured = capture(value)
        rendered = to_json(captured, pretty=not _OUTPUT_OPTIONS.stable_json)
    except CaptureError as error:
        _echo(f"capture failed: {error}", err=True)
        raise typer.Exit(code=1) from error

    if message is not None:
        rendered = f"{message}: {rendered}"
    limit = max_length if max_length is not None else LaneConfig.from_env().max_length
    _echo(constrain(rendered, limit), force=True)


@app.command()
def diff(
    left: Path = typer.Argument(..., help="Path to left JSON document."),
    right: Path = typer.Argument(..., help="Path to right JSON document."),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable diff output.",
    ),
    fail_on_change: bool = typer.Option(
        False,
        "--fail-on-change",
        help="Exit with code 1 when the documents differ.",
    ),
) -> None:
    """Diff two JSON documents and print change tokens."""
    try:
        left_value = _load_json_document(left)
        right_value = _load_json_document(right)
        report = DiffReport(
            left=left_value,
            right=right_value,
            changes=diff_values(left_value, right_value),
        )
    except (OSError, ValueError, CaptureError) as error:
        _emit_error(
            f"diff failed: {error}",
            json_output=json_output,
            exit_code=1,
            left_path=str(left),
            right_path=str(right),
        )
        raise typer.Exit(code=1) from error

    _emit_report(
        report,
        json_output=json_output,
        fail_on_change=fail_on_change,
        left=str(left),
        right=str(right),
    )


@app.command(name="diff-targets")
def diff_targets(
    left: str = typer.Argument(..., help="Left value, as 'module:attribute'."),
    right: str = typer.Argument(..., help="Right value, as 'module:attribute'."),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable diff output.",
    ),
    fail_on_change: bool = typer.Option(
        False,
        "--fail-on-change",
        help="Exit with code 1 when the values differ.",
    ),
) -> None:
    """Capture two module-level values and diff them."""
    try:
        left_value = load_target(left)
        right_value = load_target(right)
    except TargetError as error:
        _emit_error(
            f"diff failed: {error}",
            json_output=json_output,
            exit_code=2,
            left_path=left,
            right_path=right,
        )
        raise typer.Exit(code=2) from error

    try:
        report = compare(left_value, right_value)
    except CaptureError as error:
        _emit_error(
            f"diff failed: {error}",
            json_output=json_output,
            exit_code=1,
            left_path=left,
            right_path=right,
        )
        raise typer.Exit(code=1) from error

    _emit_report(
        report,
        json_output=json_output,
        fail_on_change=fail_on_change,
        left=left,
        right=right,
    )


def main() -> None:
    app()
