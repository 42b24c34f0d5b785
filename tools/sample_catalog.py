import argparse
import random
from pathlib import Path

from temporium_core.protocol import CURRENT_LAYOUT, LEGACY_LAYOUT, NO_RATING
from temporium_core.records import Game
from temporium_snapshot.writer import build_snapshot

# --- CONFIGURATION ---
GENRES = [
    "Action", "Adventure", "RPG", "Strategy", "Simulation", "Sports", "Racing",
    "Puzzle", "Horror", "Shooter", "Fighting", "Platformer", "Sandbox", "MMO", "Other",
]
TAGS = ["coop", "singleplayer", "indie", "open-world", "retro", "vr"]

def make_games(count, owner, seed=0):
    # Seeded so fixture files are byte-identical across runs.
    rng = random.Random(seed)
    games = []
    for i in range(count):
        games.append(Game(
            id=i + 1,
            name=f"Sample Game {i + 1:03d}",
            disk_space=round(rng.uniform(0.1, 150.0), 1),
            ram_usage=float(rng.choice([2, 4, 8, 16, 32])),
            vram_required=float(rng.choice([1, 2, 4, 6, 8, 12])),
            genre=rng.choice(GENRES),
            completed=rng.random() < 0.4,
            url=f"https://store.example.com/app/{1000 + i}",
            user_id=owner,
            rating=rng.choice([NO_RATING] + list(range(11))),
            is_favorite=rng.random() < 0.2,
            is_installed=rng.random() < 0.5,
            notes="",
            tags=",".join(rng.sample(TAGS, rng.randint(0, 3))),
        ))
    return games

def generate(out_dir, count, owner, legacy=False):
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    layout = LEGACY_LAYOUT if legacy else CURRENT_LAYOUT
    image, digest, _ = build_snapshot(make_games(count, owner), layout)
    path = out / f"catalog-v{layout.version}.tmps"
    path.write_bytes(image)
    print(f"Generated: {path} ({count} records, v{layout.version}, sha256={digest[:12]}...)")
    return path

if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Generate demo Temporium snapshots")
    ap.add_argument("out_dir")
    ap.add_argument("--count", type=int, default=25)
    ap.add_argument("--owner", type=int, default=1)
    ap.add_argument("--legacy", action="store_true", help="also write a version 1 snapshot")
    args = ap.parse_args()

    generate(args.out_dir, args.count, args.owner)
    if args.legacy:
        generate(args.out_dir, args.count, args.owner, legacy=True)
