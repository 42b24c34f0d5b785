"""Game store collaborator.

The snapshot code only needs `add_game`, `list_games` and `list_filtered`.
`DuckDBGameStore` is an embedded reference store with the same table shape
as the application database.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol
from warnings import warn

import duckdb

from temporium_core.protocol import NO_RATING
from temporium_core.records import Game


class GameStore(Protocol):
    def add_game(self, game: Game) -> bool: ...

    def list_games(self, owner: int) -> list[Game]: ...

    def list_filtered(self, owner: int, game_filter: "GameFilter") -> list[Game]: ...


@dataclass
class GameFilter:
    """Browse filter. A field left as None is not filtered on."""

    completed: bool | None = None
    genre: str | None = None
    disk_space_min: float | None = None
    disk_space_max: float | None = None
    ram_min: float | None = None
    ram_max: float | None = None
    vram_min: float | None = None
    vram_max: float | None = None
    tag: str | None = None
    favorite: bool | None = None
    installed: bool | None = None
    rating_min: int | None = None
    rating_max: int | None = None
    has_rating: bool | None = None

    def where(self, owner: int) -> tuple[str, list]:
        """Build a parameterized WHERE clause scoped to `owner`."""
        clauses = ["user_id = ?"]
        params: list = [owner]

        def add(sql: str, value) -> None:
            clauses.append(sql)
            params.append(value)

        if self.completed is not None:
            add("completed = ?", self.completed)
        if self.genre:
            add("genre = ?", self.genre)
        if self.disk_space_min is not None:
            add("disk_space >= ?", self.disk_space_min)
        if self.disk_space_max is not None:
            add("disk_space <= ?", self.disk_space_max)
        if self.ram_min is not None:
            add("ram_usage >= ?", self.ram_min)
        if self.ram_max is not None:
            add("ram_usage <= ?", self.ram_max)
        if self.vram_min is not None:
            add("vram_required >= ?", self.vram_min)
        if self.vram_max is not None:
            add("vram_required <= ?", self.vram_max)
        if self.tag:
            add("tags LIKE ?", f"%{self.tag}%")
        if self.favorite is not None:
            add("is_favorite = ?", self.favorite)
        if self.installed is not None:
            add("is_installed = ?", self.installed)
        if self.rating_min is not None:
            add("rating >= ?", self.rating_min)
        if self.rating_max is not None:
            # An upper bound never matches unrated games.
            add("rating <= ?", self.rating_max)
            clauses.append("rating >= 0")
        if self.has_rating is not None:
            clauses.append("rating >= 0" if self.has_rating else f"rating = {NO_RATING}")

        return " AND ".join(clauses), params


_SCHEMA = [
    "CREATE SEQUENCE IF NOT EXISTS games_id_seq START 1",
    """
    CREATE TABLE IF NOT EXISTS games (
        id INTEGER PRIMARY KEY DEFAULT nextval('games_id_seq'),
        name VARCHAR NOT NULL,
        disk_space DOUBLE NOT NULL,
        ram_usage DOUBLE NOT NULL,
        vram_required DOUBLE NOT NULL,
        genre VARCHAR NOT NULL,
        completed BOOLEAN DEFAULT FALSE,
        url VARCHAR DEFAULT '',
        user_id INTEGER NOT NULL,
        rating INTEGER DEFAULT -1,
        is_favorite BOOLEAN DEFAULT FALSE,
        is_installed BOOLEAN DEFAULT FALSE,
        notes VARCHAR DEFAULT '',
        tags VARCHAR DEFAULT '',
        UNIQUE (name, user_id)
    )
    """,
]

_COLUMNS = (
    "id, name, disk_space, ram_usage, vram_required, genre, completed, url, user_id, "
    "rating, is_favorite, is_installed, notes, tags"
)


def _row_to_game(row: tuple) -> Game:
    return Game(
        id=row[0],
        name=row[1],
        disk_space=row[2],
        ram_usage=row[3],
        vram_required=row[4],
        genre=row[5],
        completed=bool(row[6]),
        url=row[7] or "",
        user_id=row[8],
        rating=NO_RATING if row[9] is None else row[9],
        is_favorite=bool(row[10]),
        is_installed=bool(row[11]),
        notes=row[12] or "",
        tags=row[13] or "",
    )


class DuckDBGameStore:
    def __init__(self, database: str | Path = ":memory:"):
        self.database = str(database)
        self.con = duckdb.connect(self.database)
        for stmt in _SCHEMA:
            self.con.execute(stmt)

    def __enter__(self) -> "DuckDBGameStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self.con.close()

    def add_game(self, game: Game) -> bool:
        """Insert a game; the store assigns the id. False on constraint violation."""
        try:
            self.con.execute(
                "INSERT INTO games (name, disk_space, ram_usage, vram_required, genre, completed, "
                "url, user_id, rating, is_favorite, is_installed, notes, tags) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                [
                    game.name,
                    game.disk_space,
                    game.ram_usage,
                    game.vram_required,
                    game.genre,
                    game.completed,
                    game.url,
                    game.user_id,
                    game.rating,
                    game.is_favorite,
                    game.is_installed,
                    game.notes,
                    game.tags,
                ],
            )
        except duckdb.Error as e:
            warn(f"Add game {game.name!r} for user {game.user_id} rejected: {e}")
            return False
        return True

    def list_games(self, owner: int) -> list[Game]:
        rows = self.con.execute(
            f"SELECT {_COLUMNS} FROM games WHERE user_id = ? ORDER BY name", [owner]
        ).fetchall()
        return [_row_to_game(r) for r in rows]

    def list_filtered(self, owner: int, game_filter: GameFilter) -> list[Game]:
        where, params = game_filter.where(owner)
        rows = self.con.execute(
            f"SELECT {_COLUMNS} FROM games WHERE {where} ORDER BY name", params
        ).fetchall()
        return [_row_to_game(r) for r in rows]

    def list_tags(self, owner: int) -> list[str]:
        """Distinct, trimmed tags across the owner's games, sorted."""
        rows = self.con.execute(
            "SELECT DISTINCT tags FROM games WHERE user_id = ? AND tags != ''", [owner]
        ).fetchall()
        unique: set[str] = set()
        for (tag_str,) in rows:
            unique.update(t.strip() for t in tag_str.split(",") if t.strip())
        return sorted(unique)
