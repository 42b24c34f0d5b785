"""Temporium domain record."""
from __future__ import annotations

from dataclasses import dataclass

from .protocol import NO_RATING, UNSET_ID


@dataclass
class Game:
    """One catalog item as held by the store.

    Disk, RAM and VRAM figures are in GB. ``rating`` is 0-10, or
    ``NO_RATING`` when the user has not rated the game. ``tags`` is a
    comma-separated list.
    """

    id: int = UNSET_ID
    name: str = ""
    disk_space: float = 0.0
    ram_usage: float = 0.0
    vram_required: float = 0.0
    genre: str = ""
    completed: bool = False
    url: str = ""
    user_id: int = 0
    rating: int = NO_RATING
    is_favorite: bool = False
    is_installed: bool = False
    notes: str = ""
    tags: str = ""

    @property
    def has_rating(self) -> bool:
        return self.rating != NO_RATING
