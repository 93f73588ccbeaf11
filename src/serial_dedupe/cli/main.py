"""serial-dedupe CLI entry point."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer

from serial_dedupe.cli.script import ScriptCommand, ScriptError, parse_script
from serial_dedupe.engine.config import DedupIndexConfig
from serial_dedupe.engine.index import ApplyStats, DedupIndex
from serial_dedupe.errors import PartitionInvariantError

app = typer.Typer(
    name="sdedupe",
    help="serial-dedupe - replay operations against a deduplicating partition index",
    no_args_is_help=True,
)


@app.callback()
def _root() -> None:
    """serial-dedupe developer tools."""


def output_result(data: dict[str, Any], as_json: bool = False) -> None:
    """Output result in appropriate format."""
    if as_json:
        typer.echo(json.dumps(data, indent=2, default=str))
        return

    groups = data["groups"]
    if not groups:
        typer.echo("No groups.")
    for group in groups:
        typer.secho(f"{group['serial']}", fg=typer.colors.CYAN, bold=True, nl=False)
        typer.echo(f"  rep={group['representative_id']}", nl=False)
        members = ", ".join(str(m) for m in group["member_ids"])
        typer.echo(f"  members=[{members}]")
    typer.echo(f"\n{data['items']} item(s) in {len(groups)} group(s)")


def _merge_stats(total: dict[str, int], stats: ApplyStats) -> None:
    for key, value in stats.to_dict().items():
        total[key] = total.get(key, 0) + value


def _run(index: DedupIndex, commands: list[ScriptCommand]) -> dict[str, int]:
    totals: dict[str, int] = {}
    for command in commands:
        if command.name == "upsert":
            index.upsert(command.args[0], command.args[1])
        elif command.name == "remove":
            index.remove(command.args[0])
        elif command.name == "apply":
            _merge_stats(totals, index.apply_pending())
        elif command.name == "rebuild":
            _merge_stats(totals, index.rebuild_from_scratch())
    if index.pending_count:
        _merge_stats(totals, index.apply_pending())
    return totals


@app.command("replay")
def replay_cmd(
    script: Annotated[
        Path,
        typer.Argument(help="Script file: upsert <id> <serial> | remove <id> | apply | rebuild"),
    ],
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    verify: Annotated[
        bool,
        typer.Option("--verify", help="Check partition invariants after every apply"),
    ] = False,
) -> None:
    """Replay a script of operations and print the resulting groups.

    Pending operations are applied once the script ends.

    Examples:
        sdedupe replay ops.txt
        sdedupe replay ops.txt --json --verify
    """
    if not script.is_file():
        typer.secho(f"Script not found: {script}", fg=typer.colors.RED)
        raise typer.Exit(1)

    try:
        commands = parse_script(script.read_text(encoding="utf-8").splitlines())
    except ScriptError as e:
        typer.secho(f"Invalid script: {e}", fg=typer.colors.RED)
        raise typer.Exit(1) from e

    with DedupIndex(config=DedupIndexConfig(verify_after_apply=verify)) as index:
        try:
            totals = _run(index, commands)
        except PartitionInvariantError as e:
            typer.secho(str(e), fg=typer.colors.RED)
            raise typer.Exit(1) from e

        result = {
            "groups": [view.to_dict() for view in map(index.group_for, index.serials()) if view],
            "items": len(index),
            "stats": totals,
        }

    output_result(result, json_output)


def main() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    main()
