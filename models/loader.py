from __future__ import annotations
import json
from pathlib import Path
from typing import Dict, Union

from models.team import Team

DATA_DIR = Path(__file__).resolve().parents[1] / "data"
TEAMS_JSON = DATA_DIR / "teams.json"


def load_teams(path: Union[str, Path] = TEAMS_JSON) -> Dict[str, Team]:
    """Read ``{"teams": [...]}`` and key the teams by name (file order kept).

    Raises:
        FileNotFoundError: the file does not exist.
        ValueError: the file is not valid JSON or holds an invalid team.
    """
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    teams: Dict[str, Team] = {}
    for t in data.get("teams", []):
        team = Team.from_dict(t)
        teams[team.name] = team
    return teams
