import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .models import League, Team

logger = logging.getLogger(__name__)


class RankingError(Exception):
    pass


class NoScoringDataError(RankingError):
    pass


class UnknownTeamError(RankingError):
    pass


@dataclass
class RankingConfig:
    # None derives the all-play pool from the league size; 10 reproduces the old fixed pool
    all_play_pool: Optional[int] = None
    # weeks played -> win percentage multiplier; anything not listed uses the default
    win_pct_multipliers: Dict[int, float] = field(default_factory=lambda: {1: 1.2, 2: 2.4})
    default_win_pct_multiplier: float = 3.0


@dataclass
class RankedTeam:
    rank: int
    team: Team
    weight: float
    win_pct_weight: float
    points_for_weight: float
    all_play_weight: Optional[float] = None


class RankingEngine:
    """Composite power ranking: win% weight + points-for weight (+ all-play weight).

    The all-play term only takes part when an all-play win mapping is passed to
    `rank`; without one the engine ranks on record and points alone.
    """

    def __init__(self, config: Optional[RankingConfig] = None):
        self.config = config or RankingConfig()

    def win_percentage_weight(self, team: Team) -> float:
        weeks = team.weeks_played
        factor = self.config.win_pct_multipliers.get(weeks, self.config.default_win_pct_multiplier)
        return team.record.overall_percentage * factor

    def points_for_weight(self, team: Team, max_points_for: float) -> float:
        if max_points_for == 0:
            raise NoScoringDataError('no scoring data: every team has 0 points for')
        return team.record.points_for / max_points_for

    def possible_total_wins(self, team: Team, pool: int) -> int:
        weeks = team.weeks_played
        return sum(range(pool + 1)) * weeks - pool * weeks

    def all_play_weight(self, team: Team, all_play_wins: int, pool: int) -> float:
        possible = self.possible_total_wins(team, pool)
        if possible <= 0:
            return 0.0
        return all_play_wins / possible

    def pool_size(self, league: League) -> int:
        if self.config.all_play_pool is not None:
            return self.config.all_play_pool
        return league.league_size or len(league.teams)

    def overall_weight(
        self,
        team: Team,
        max_points_for: float,
        all_play_wins: Optional[int] = None,
        pool: Optional[int] = None,
    ) -> float:
        total = self.win_percentage_weight(team) + self.points_for_weight(team, max_points_for)
        if all_play_wins is not None:
            if pool is None:
                raise ValueError('pool is required when all_play_wins is given')
            total += self.all_play_weight(team, all_play_wins, pool)
        return total

    def rank(self, league: League, all_play_wins: Optional[Dict[int, int]] = None) -> List[RankedTeam]:
        max_pf = league.max_points_for()
        if max_pf == 0:
            raise NoScoringDataError(
                f'no scoring data: max points for is 0 across {len(league.teams)} teams'
            )

        pool = self.pool_size(league)
        if all_play_wins is not None:
            known = set(league.team_ids())
            unknown = sorted(tid for tid in all_play_wins if tid not in known)
            if unknown:
                raise UnknownTeamError(f'schedule references team ids not in the league: {unknown}')
        logger.info(
            "ranking %d teams (all-play %s, pool %d)",
            len(league.teams), 'on' if all_play_wins is not None else 'off', pool,
        )

        scored = []
        for team in league.teams:
            wp = self.win_percentage_weight(team)
            pf = self.points_for_weight(team, max_pf)
            ap = None
            if all_play_wins is not None:
                team.overall_wins = all_play_wins.get(team.team_id, 0)
                ap = self.all_play_weight(team, team.overall_wins, pool)
            weight = wp + pf + (ap or 0.0)
            logger.debug("%s: win%%=%.4f pf=%.4f all-play=%s total=%.4f", team.display_name, wp, pf, ap, weight)
            scored.append((team, weight, wp, pf, ap))

        # stable: equal weights keep league order
        scored.sort(key=lambda row: row[1], reverse=True)
        return [
            RankedTeam(rank=i, team=team, weight=w, win_pct_weight=wp, points_for_weight=pf, all_play_weight=ap)
            for i, (team, w, wp, pf, ap) in enumerate(scored, start=1)
        ]
