import pytest

from temporium_core.records import Game


@pytest.fixture
def games():
    return [
        Game(
            id=7,
            name="Half-Life 2",
            disk_space=6.5,
            ram_usage=2.0,
            vram_required=1.0,
            genre="Shooter",
            completed=True,
            url="https://store.steampowered.com/app/220",
            user_id=3,
            rating=10,
            is_favorite=True,
            is_installed=True,
            notes="Replay with commentary",
            tags="classic,singleplayer",
        ),
        Game(
            id=12,
            name="Stardew Valley",
            disk_space=0.5,
            ram_usage=2.0,
            vram_required=0.5,
            genre="Simulation",
            completed=False,
            url="",
            user_id=3,
            is_installed=False,
            tags="coop, indie",
        ),
        Game(
            id=31,
            name="Ведьмак 3",
            disk_space=50.0,
            ram_usage=8.0,
            vram_required=2.0,
            genre="RPG",
            completed=False,
            url="https://www.gog.com/game/the_witcher_3_wild_hunt",
            user_id=3,
            rating=9,
            is_installed=True,
            notes="Кровь и вино осталось",
            tags="open-world",
        ),
    ]
