from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Iterable

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from temporium_core.protocol import NO_RATING
from temporium_core.records import Game

SCHEMA = pa.schema(
    [
        ("id", pa.int32()),
        ("name", pa.string()),
        ("disk_space", pa.float64()),
        ("ram_usage", pa.float64()),
        ("vram_required", pa.float64()),
        ("genre", pa.string()),
        ("completed", pa.bool_()),
        ("url", pa.string()),
        ("user_id", pa.int32()),
        ("rating", pa.int32()),
        ("is_favorite", pa.bool_()),
        ("is_installed", pa.bool_()),
        ("notes", pa.string()),
        ("tags", pa.string()),
    ]
)


def games_frame(games: Iterable[Game]) -> pd.DataFrame:
    """One row per game, columns in on-disk field order."""
    rows = [asdict(g) for g in games]
    return pd.DataFrame(rows, columns=SCHEMA.names)


def write_parquet(games: Iterable[Game], out_path: Path) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df = games_frame(games)
    if df.empty:
        table = SCHEMA.empty_table()
    else:
        table = pa.Table.from_pandas(df, schema=SCHEMA, preserve_index=False)
    pq.write_table(table, out_path)
    return out_path


def catalog_stats(games: Iterable[Game]) -> dict:
    """Status bar figures for a set of games."""
    df = games_frame(games)
    if df.empty:
        return {
            "total_games": 0,
            "favorites_count": 0,
            "completed_count": 0,
            "no_rating_count": 0,
            "installed_count": 0,
            "installed_disk_space": 0.0,
            "no_url_count": 0,
        }

    installed = df["is_installed"].astype(bool)
    return {
        "total_games": int(len(df)),
        "favorites_count": int(df["is_favorite"].astype(bool).sum()),
        "completed_count": int(df["completed"].astype(bool).sum()),
        "no_rating_count": int((df["rating"] == NO_RATING).sum()),
        "installed_count": int(installed.sum()),
        "installed_disk_space": float(df.loc[installed, "disk_space"].sum()),
        "no_url_count": int((df["url"].fillna("") == "").sum()),
    }
