from __future__ import annotations
import argparse
import csv
import logging
import sys
from pathlib import Path
from typing import Dict, List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from models.loader import load_teams  # noqa: E402
from core_sim.match import simulate_match  # noqa: E402

logger = logging.getLogger("run_batch")


def simulate_many(n: int = 200, team_a: str | None = None, team_b: str | None = None,
                  weather: str = "clear") -> List[Dict]:
    teams = load_teams()
    if team_a is None:
        team_a = list(teams.keys())[0]
    if team_b is None:
        team_b = next((k for k in teams.keys() if k != team_a), team_a)
    A, B = teams[team_a], teams[team_b]

    results: List[Dict] = []
    for seed in range(n):
        res = simulate_match(seed, A, B, weather)
        st = res.stats
        results.append({
            "seed": seed,
            "score_a": res.home_score,
            "score_b": res.away_score,
            "shots_a": st.shots.home,
            "shots_b": st.shots.away,
            "on_a": st.shots_on_target.home,
            "on_b": st.shots_on_target.away,
            "xg_a": round(st.xg.home, 3),
            "xg_b": round(st.xg.away, 3),
            "pos_a": round(st.possession.home, 1),
            "pos_b": round(st.possession.away, 1),
            "corners_a": st.corners.home,
            "corners_b": st.corners.away,
            "fouls_a": st.fouls.home,
            "fouls_b": st.fouls.away,
            "yellows_a": st.yellow_cards.home,
            "yellows_b": st.yellow_cards.away,
            "reds_a": st.red_cards.home,
            "reds_b": st.red_cards.away,
            "events": len(res.events),
            "stoppage": res.stoppage_time,
        })
    return results


def write_csv(rows: List[Dict], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if not rows:
        return
    with path.open("w", encoding="utf-8", newline="") as f:
        w = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        w.writeheader()
        w.writerows(rows)


if __name__ == "__main__":
    p = argparse.ArgumentParser(description="Simulate N seeded matches and write per-match aggregates to CSV")
    p.add_argument("-n", type=int, default=200)
    p.add_argument("--home", type=str)
    p.add_argument("--away", type=str)
    p.add_argument("--weather", type=str, default="clear")
    p.add_argument("--out", type=str, default=str(ROOT / "reports" / "batch_stats.csv"))
    args = p.parse_args()
    logging.basicConfig(level=logging.WARNING)

    data = simulate_many(n=args.n, team_a=args.home, team_b=args.away, weather=args.weather)
    out = Path(args.out)
    write_csv(data, out)
    print(f"Wrote {len(data)} rows to {out}")
