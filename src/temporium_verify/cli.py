import json
from pathlib import Path
import click
from .logic import verify_report

@click.group()
def main():
    pass

@main.command("snapshot")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
def snapshot_cmd(path: Path):
    result = verify_report(path)
    click.echo(json.dumps(result, sort_keys=True, separators=(",", ":"), ensure_ascii=False))
    if result["status"] != "PASS":
        raise SystemExit(1)

if __name__ == "__main__":
    main()
