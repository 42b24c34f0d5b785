"""Temporium snapshot tools - export, import and preview."""
from __future__ import annotations

import json
from pathlib import Path

import click

from temporium_verify.const import describe

from .frame import catalog_stats, write_parquet
from .reader import import_snapshot, preview_snapshot
from .store import DuckDBGameStore, GameFilter
from .writer import export_snapshot


def _fatal(reason: str) -> None:
    # Fail closed with a single-line reason, no stack trace.
    click.echo(f"FATAL: {reason}")
    raise SystemExit(1)


@click.group()
def main() -> None:
    pass


@main.command("export")
@click.argument("database", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("out", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--owner", type=int, required=True, help="User id whose games are exported")
@click.option("--genre", default=None)
@click.option("--tag", default=None)
@click.option("--completed/--not-completed", default=None)
@click.option("--favorite/--not-favorite", default=None)
@click.option("--installed/--not-installed", default=None)
def export_cmd(database: Path, out: Path, owner: int, genre, tag, completed, favorite, installed) -> None:
    """Export a user's games from DATABASE into the snapshot OUT."""
    game_filter = None
    if any(v is not None for v in (genre, tag, completed, favorite, installed)):
        game_filter = GameFilter(
            completed=completed,
            genre=genre,
            tag=tag,
            favorite=favorite,
            installed=installed,
        )

    try:
        with DuckDBGameStore(database) as store:
            result = export_snapshot(out, store, owner, game_filter)
    except Exception as e:
        _fatal(str(e))

    if not result:
        _fatal(result.error)
    click.echo(f"PASS: Snapshot written to {out}")
    click.echo(f"  Records: {result.record_count}")
    click.echo(f"  SHA-256: {result.digest}")
    if result.truncated:
        click.echo(f"  Truncated text in {len(result.truncated)} record(s)")


@main.command("import")
@click.argument("snapshot", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("database", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--owner", type=int, required=True, help="User id that receives the imported games")
def import_cmd(snapshot: Path, database: Path, owner: int) -> None:
    """Import a verified SNAPSHOT into DATABASE for --owner."""
    try:
        with DuckDBGameStore(database) as store:
            result = import_snapshot(snapshot, owner, store)
    except Exception as e:
        _fatal(str(e))

    if not result:
        _fatal(result.error or describe(result.outcome))
    click.echo(f"PASS: Imported {snapshot}")
    click.echo(f"  Added: {result.added}")
    click.echo(f"  Rejected: {result.rejected}")


@main.command("preview")
@click.argument("snapshot", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--parquet", "parquet_out", type=click.Path(dir_okay=False, path_type=Path), default=None)
def preview_cmd(snapshot: Path, parquet_out: Path | None) -> None:
    """Show the contents of SNAPSHOT without verifying it."""
    preview = preview_snapshot(snapshot)
    if preview.error:
        _fatal(preview.error)

    for game in preview.records:
        rating = game.rating if game.has_rating else "-"
        click.echo(f"{game.id:>6}  {game.name}  [{game.genre}]  rating={rating}")

    click.echo(json.dumps(catalog_stats(preview.records), sort_keys=True, separators=(",", ":")))

    if parquet_out is not None:
        write_parquet(preview.records, parquet_out)
        click.echo(f"Parquet written to {parquet_out}")


if __name__ == "__main__":
    main()
