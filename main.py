from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict

from models.loader import TEAMS_JSON, load_teams
from models.team import Team
from core_sim.config import EngineConfig, get_config, load_config
from core_sim.events import KEY_EVENT_TYPES, EventType
from core_sim.golden import run_golden_match_tests
from core_sim.match import simulate_match
from core_sim.quick import quick_result
from core_sim.report import build_report, export, write_ndjson
from core_sim.weather import Weather, get_weather_description

logger = logging.getLogger("main")

KEY_TYPES = {t.value for t in KEY_EVENT_TYPES} | {EventType.YELLOW_CARD.value}


def _flag(v: str) -> bool:
    return str(v).lower() not in ("0", "false", "no")


def read_teams(path: Path = TEAMS_JSON) -> Dict[str, Team]:
    try:
        teams = load_teams(path)
    except FileNotFoundError:
        print(f"[ERROR] Teams file not found: {path}", file=sys.stderr)
        sys.exit(1)
    except (ValueError, KeyError) as e:
        print(f"[ERROR] Could not read {path}: {e}", file=sys.stderr)
        sys.exit(1)
    if not teams:
        print(f"[ERROR] No teams defined in {path}", file=sys.stderr)
        sys.exit(1)
    return teams


def pick_teams(teams: Dict[str, Team], home: str | None, away: str | None) -> tuple[Team, Team]:
    names = list(teams.keys())
    home_name = home or names[0]
    if home_name not in teams:
        logger.warning("Team %r not found, using %r", home_name, names[0])
        home_name = names[0]
    away_name = away or next((n for n in names if n != home_name), home_name)
    if away_name not in teams:
        fallback = next((n for n in names if n != home_name), home_name)
        logger.warning("Team %r not found, using %r", away_name, fallback)
        away_name = fallback
    return teams[home_name], teams[away_name]


def print_match_report(report: Dict, *, timeline_mode: str = "all", timeline_limit: int = 120) -> None:
    a, b = report["team_a"], report["team_b"]
    print("\n" + "=" * 70)
    print(f"MATCH REPORT: {a} vs {b}")
    print("=" * 70 + "\n")
    print(f"FINAL SCORE: {a} {report['score_a']} - {report['score_b']} {b}"
          f"  ({report['duration']} min, +{report['stoppage_time']} added)\n")

    if report["goals_a"] or report["goals_b"]:
        print("GOALS:")
        for team_name, goals in ((a, report["goals_a"]), (b, report["goals_b"])):
            for g in goals:
                print(f"   {team_name}: {g['minute']}' {g['scorer']} (xG {g['xg']:.2f})")
    else:
        print("GOALS: none")

    print("\nSTATS:")
    rows = [
        ("Possession %", "possession"),
        ("Shots", "shots"),
        ("On target", "shots_on_target"),
        ("xG", "xg"),
        ("Passes", "passes"),
        ("Pass accuracy %", "pass_accuracy"),
        ("Fouls", "fouls"),
        ("Corners", "corners"),
        ("Yellow cards", "yellow_cards"),
        ("Red cards", "red_cards"),
    ]
    for label, key in rows:
        print(f"   {label:<16} {report[key][a]:>7} | {report[key][b]:<7}")

    timeline = report["events"]
    if timeline_mode == "key":
        timeline = [e for e in timeline if e["event_type"] in KEY_TYPES]
        title = "TIMELINE (key events)"
    elif timeline_mode == "last":
        limit = max(1, int(timeline_limit))
        timeline = timeline[-limit:]
        title = f"TIMELINE (last {limit})"
    else:
        title = "TIMELINE (full)"

    if timeline:
        print(f"\n{title}:")
        for e in timeline:
            print(f"   [{e['team']}] {e['description']}")
    print("\n" + "=" * 70 + "\n")


def run_golden() -> int:
    summary = run_golden_match_tests()
    for run in summary.results:
        status = "PASS" if run.validation.passed else "FAIL"
        r = run.result
        print(f"{run.match.id} {status}  {r.home_score}-{r.away_score}  {run.match.description}")
        for failure in run.validation.failures:
            print(f"      {failure}")
    print(f"\nGolden matches: {summary.passed} passed, {summary.failed} outside expected ranges")
    return 0


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Deterministic football match simulator")
    p.add_argument("--home", type=str, help="Home team name from data/teams.json")
    p.add_argument("--away", type=str, help="Away team name from data/teams.json")
    p.add_argument("--seed", type=str, default="42", help="Match seed (string or number)")
    p.add_argument("--weather", type=str, default="clear", choices=[w.value for w in Weather])
    p.add_argument("--timeline", type=str, default="all", choices=["all", "key", "last"],
                   help="Timeline display mode")
    p.add_argument("--timeline-limit", type=int, default=120, help="Event limit for 'last' mode")
    p.add_argument("--save-json", dest="save_json", type=_flag, default=True,
                   help="Write the report to a JSON file (default True)")
    p.add_argument("--json-path", type=str, default=str(Path("out") / "last_report.json"))
    p.add_argument("--save-ndjson", dest="save_ndjson", type=_flag, default=False,
                   help="Write the event log as NDJSON plus a stats JSON file")
    p.add_argument("--ndjson-path", type=str, default=None,
                   help="NDJSON target; defaults to out/match_<seed>.ndjson")
    p.add_argument("--config", type=str, default=None, help="YAML engine config")
    p.add_argument("--golden", action="store_true", help="Run the golden match suite and exit")
    p.add_argument("--quick", action="store_true", help="Sample a score only (Poisson)")
    p.add_argument("--verbose", action="store_true")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cfg: EngineConfig = load_config(args.config) if args.config else get_config()

    if args.golden:
        return run_golden()

    if args.quick:
        q = quick_result(args.seed)
        print(f"Quick result (seed {args.seed}): {q.home_goals} - {q.away_goals}")
        return 0

    teams = read_teams()
    home, away = pick_teams(teams, args.home, args.away)

    print(f"\nMATCH ENGINE: {home.name} vs {away.name}")
    print(f"   Weather: {get_weather_description(args.weather)}\n")

    result = simulate_match(args.seed, home, away, args.weather, config=cfg)
    report = build_report(result, home, away)
    print_match_report(report, timeline_mode=args.timeline, timeline_limit=args.timeline_limit)

    if args.save_json:
        out_path = Path(args.json_path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(report, ensure_ascii=False, indent=2), encoding="utf-8")
        logger.info("Report written to %s", out_path)

    if args.save_ndjson:
        if args.ndjson_path:
            path = write_ndjson(result, args.ndjson_path)
            logger.info("Events written to %s", path)
        else:
            paths = export(result, seed=args.seed, out_dir="out", home=home, away=away)
            logger.info("Events written to %s, stats to %s", paths["ndjson"], paths["stats"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
