"""Query a snapshot preview - disk usage per genre."""
from __future__ import annotations

import sys
from pathlib import Path

import duckdb

from temporium_snapshot.frame import write_parquet
from temporium_snapshot.reader import read_snapshot


def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: python query.py <snapshot> [installed_only]")
        print("Example: python query.py catalog-v3.tmps yes")
        sys.exit(1)

    snapshot = Path(sys.argv[1])
    installed_only = len(sys.argv) > 2 and sys.argv[2].lower() in {"1", "yes", "true"}

    parquet_path = snapshot.with_suffix(".parquet")
    write_parquet(read_snapshot(snapshot), parquet_path)

    con = duckdb.connect(":memory:")
    con.execute(f"CREATE VIEW games AS SELECT * FROM '{parquet_path}'")

    sql = """
    SELECT
        genre,
        COUNT(*) AS games,
        ROUND(SUM(disk_space), 1) AS disk_gb,
        ROUND(AVG(CASE WHEN rating >= 0 THEN rating END), 1) AS avg_rating
    FROM games
    WHERE ? = FALSE OR is_installed
    GROUP BY genre
    ORDER BY disk_gb DESC
    """

    print(f"--- Disk usage by genre: {snapshot.name} ---")
    print(f"--- Installed only: {installed_only} ---\n")

    df = con.execute(sql, [installed_only]).fetchdf()
    if df.empty:
        print("No games in snapshot.")
    else:
        for _, row in df.iterrows():
            print(f"GENRE: {row['genre']}")
            print(f"  Games: {row['games']}")
            print(f"  Disk: {row['disk_gb']} GB")
            print(f"  Avg rating: {row['avg_rating']}")
            print()


if __name__ == "__main__":
    main()
