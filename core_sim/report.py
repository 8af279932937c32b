"""
core_sim/report.py

Final match report for the CLI, plus NDJSON/JSON export of a finished match.
API: build_report(result, home, away) -> dict, export(result, seed, ...) -> paths
"""
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from models.team import Team
from core_sim.events import EventType
from core_sim.match import MatchResult


def _goals(result: MatchResult, side: str) -> List[Dict[str, Any]]:
    return [
        {'minute': e.minute, 'scorer': e.player, 'xg': round(e.xg or 0.0, 3)}
        for e in result.events
        if e.type == EventType.GOAL and e.team == side
    ]


def build_report(result: MatchResult, home: Team, away: Team) -> Dict[str, Any]:
    names = {'home': home.name, 'away': away.name}
    st = result.stats

    def per_team(stat, digits: Optional[int] = None) -> Dict[str, Any]:
        if digits is None:
            return {home.name: int(stat.home), away.name: int(stat.away)}
        return {home.name: round(stat.home, digits), away.name: round(stat.away, digits)}

    timeline = [
        {
            'minute': e.minute,
            'team': names[e.team],
            'event_type': e.type.value,
            'player': e.player,
            'description': f"{e.minute}' {e.description}",
        }
        for e in result.events
    ]
    return {
        'team_a': home.name,
        'team_b': away.name,
        'score': (result.home_score, result.away_score),
        'score_a': result.home_score,
        'score_b': result.away_score,
        'duration': result.duration,
        'stoppage_time': result.stoppage_time,
        'goals_a': _goals(result, 'home'),
        'goals_b': _goals(result, 'away'),
        'possession': per_team(st.possession, 1),
        'shots': per_team(st.shots),
        'shots_on_target': per_team(st.shots_on_target),
        'xg': per_team(st.xg, 2),
        'passes': per_team(st.passes),
        'pass_accuracy': per_team(st.pass_accuracy, 1),
        'fouls': per_team(st.fouls),
        'corners': per_team(st.corners),
        'yellow_cards': per_team(st.yellow_cards),
        'red_cards': per_team(st.red_cards),
        'events': timeline,
    }


def event_records(result: MatchResult) -> List[Dict[str, Any]]:
    return [
        {
            'seq': i,
            'minute': e.minute,
            'type': e.type.value,
            'team': e.team,
            'player': e.player,
            'description': e.description,
            'xg': e.xg,
        }
        for i, e in enumerate(result.events, start=1)
    ]


def write_ndjson(result: MatchResult, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open('w', encoding='utf-8') as f:
        for rec in event_records(result):
            f.write(json.dumps(rec, ensure_ascii=False) + '\n')
    return path


def export(result: MatchResult, seed: Any = None, out_dir: Union[str, Path] = 'out',
           home: Optional[Team] = None, away: Optional[Team] = None) -> Dict[str, str]:
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    sid = str(seed) if seed is not None else 'na'

    ndjson_path = write_ndjson(result, out / f"match_{sid}.ndjson")

    stats_path = out / f"stats_{sid}.json"
    data = {
        'seed': seed,
        'home': home.name if home is not None else 'home',
        'away': away.name if away is not None else 'away',
        'home_score': result.home_score,
        'away_score': result.away_score,
        'duration': result.duration,
        'stoppage_time': result.stoppage_time,
        'stats': result.stats.to_dict(),
    }
    with stats_path.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    return {'ndjson': str(ndjson_path), 'stats': str(stats_path)}
