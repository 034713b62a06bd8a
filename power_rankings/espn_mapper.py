"""Map raw ESPN fantasy API payloads to League / Schedule models.

Two payload shapes are understood:

  teams:            {'teams': [{'record': {...}, 'teamId': 1, 'teamLocation': ..., 'teamNickname': ...}]}
  leagueSchedules:  {'leagueSchedule': {'scheduleItems': [{'matchups': [{...}]}]}}

Anything missing or of the wrong type raises LeagueDataError with the JSON path
of the offending value; nothing is defaulted except a team's own `overallWins`.
"""
import json
import math
from pathlib import Path
from typing import Any, Dict, List, Mapping

from .models import League, Matchup, Record, Schedule, Team, Week


class LeagueDataError(Exception):
    pass


def _require(obj: Any, key: str, path: str) -> Any:
    if not isinstance(obj, Mapping):
        raise LeagueDataError(f"{path or '<root>'}: expected an object, got {type(obj).__name__}")
    if key not in obj or obj[key] is None:
        where = f"{path}.{key}" if path else key
        raise LeagueDataError(f"{where}: missing required field")
    return obj[key]


def _int(value: Any, path: str) -> int:
    # bool is an int subclass but never a valid count or id
    if isinstance(value, bool) or not isinstance(value, (int, float)) or (
        isinstance(value, float) and not value.is_integer()
    ):
        raise LeagueDataError(f"{path}: expected an integer, got {value!r}")
    return int(value)


def _float(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise LeagueDataError(f"{path}: expected a number, got {value!r}")
    if not math.isfinite(value):
        raise LeagueDataError(f"{path}: expected a finite number, got {value!r}")
    return float(value)


def _str(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise LeagueDataError(f"{path}: expected a string, got {value!r}")
    return value


def _list(value: Any, path: str) -> List[Any]:
    if not isinstance(value, list):
        raise LeagueDataError(f"{path}: expected a list, got {type(value).__name__}")
    return value


def record_from_payload(raw: Any, path: str = 'record') -> Record:
    return Record(
        overall_losses=_int(_require(raw, 'overallLosses', path), f"{path}.overallLosses"),
        overall_percentage=_float(_require(raw, 'overallPercentage', path), f"{path}.overallPercentage"),
        overall_wins=_int(_require(raw, 'overallWins', path), f"{path}.overallWins"),
        points_for=_float(_require(raw, 'pointsFor', path), f"{path}.pointsFor"),
    )


def team_from_payload(raw: Any, path: str = 'team') -> Team:
    overall_wins = raw.get('overallWins') if isinstance(raw, Mapping) else None
    return Team(
        team_id=_int(_require(raw, 'teamId', path), f"{path}.teamId"),
        team_location=_str(_require(raw, 'teamLocation', path), f"{path}.teamLocation"),
        team_nickname=_str(_require(raw, 'teamNickname', path), f"{path}.teamNickname"),
        record=record_from_payload(_require(raw, 'record', path), f"{path}.record"),
        overall_wins=0 if overall_wins is None else _int(overall_wins, f"{path}.overallWins"),
    )


def league_from_payload(payload: Any) -> League:
    teams_raw = _list(_require(payload, 'teams', ''), 'teams')
    teams = [team_from_payload(t, f"teams[{i}]") for i, t in enumerate(teams_raw)]
    seen: Dict[int, str] = {}
    for i, t in enumerate(teams):
        if t.team_id in seen:
            raise LeagueDataError(f"teams[{i}].teamId: duplicate team id {t.team_id} (also {seen[t.team_id]})")
        seen[t.team_id] = t.display_name
    league = League(teams=teams)
    league.set_league_size()
    return league


def _scores(raw: Any, key: str, path: str) -> List[float]:
    where = f"{path}.{key}"
    values = _list(_require(raw, key, path), where)
    if not values:
        raise LeagueDataError(f"{where}: empty score list")
    return [_float(v, f"{where}[{i}]") for i, v in enumerate(values)]


def matchup_from_payload(raw: Any, path: str = 'matchup') -> Matchup:
    return Matchup(
        away_team_id=_int(_require(raw, 'awayTeamId', path), f"{path}.awayTeamId"),
        home_team_id=_int(_require(raw, 'homeTeamId', path), f"{path}.homeTeamId"),
        away_team_scores=_scores(raw, 'awayTeamScores', path),
        home_team_scores=_scores(raw, 'homeTeamScores', path),
        outcome=_int(_require(raw, 'outcome', path), f"{path}.outcome"),
    )


def schedule_from_payload(payload: Any) -> Schedule:
    base = 'leagueSchedule'
    sched = _require(payload, 'leagueSchedule', '')
    items = _list(_require(sched, 'scheduleItems', base), f"{base}.scheduleItems")
    weeks: List[Week] = []
    for wi, item in enumerate(items):
        wpath = f"{base}.scheduleItems[{wi}]"
        raw_matchups = _list(_require(item, 'matchups', wpath), f"{wpath}.matchups")
        weeks.append(Week(matchups=[
            matchup_from_payload(m, f"{wpath}.matchups[{mi}]") for mi, m in enumerate(raw_matchups)
        ]))
    return Schedule(weeks=weeks)


def _read_json(path: str) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise LeagueDataError(f"{path}: invalid JSON ({e})") from e


def load_league(path: str) -> League:
    return league_from_payload(_read_json(path))


def load_schedule(path: str) -> Schedule:
    return schedule_from_payload(_read_json(path))
