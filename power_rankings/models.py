from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Record:
    overall_losses: int
    overall_percentage: float
    overall_wins: int
    points_for: float

    @property
    def weeks_played(self) -> int:
        return self.overall_wins + self.overall_losses


@dataclass
class Team:
    team_id: int
    team_location: str
    team_nickname: str
    record: Record
    # all-play win total, attached by the ranking engine
    overall_wins: int = 0

    @property
    def display_name(self) -> str:
        return f"{self.team_location} {self.team_nickname}"

    @property
    def weeks_played(self) -> int:
        return self.record.weeks_played


@dataclass(frozen=True)
class Score:
    team_id: int
    score: float


@dataclass
class Matchup:
    away_team_id: int
    home_team_id: int
    away_team_scores: List[float]
    home_team_scores: List[float]
    outcome: int

    @property
    def is_decided(self) -> bool:
        return self.outcome != 0

    def scores(self) -> List[Score]:
        # only the first entry is the current accumulated score
        return [
            Score(team_id=self.away_team_id, score=self.away_team_scores[0]),
            Score(team_id=self.home_team_id, score=self.home_team_scores[0]),
        ]


@dataclass
class Week:
    matchups: List[Matchup] = field(default_factory=list)

    def scores(self) -> List[Score]:
        """Scores of every decided matchup, two per matchup in matchup order."""
        out: List[Score] = []
        for m in self.matchups:
            if m.is_decided:
                out.extend(m.scores())
        return out


@dataclass
class Schedule:
    weeks: List[Week] = field(default_factory=list)


@dataclass
class League:
    teams: List[Team]
    league_size: int = 0

    def set_league_size(self) -> None:
        self.league_size = len(self.teams)

    def max_points_for(self) -> float:
        best = 0.0
        for team in self.teams:
            if team.record.points_for > best:
                best = team.record.points_for
        return best

    def team_ids(self) -> List[int]:
        return [t.team_id for t in self.teams]

    def get_team(self, team_id: int) -> Optional[Team]:
        for t in self.teams:
            if t.team_id == team_id:
                return t
        return None
