"""ESPN fantasy league power rankings: record, points for and all-play wins."""
from .all_play import calculate_all_play_wins, week_all_play_wins
from .models import League, Matchup, Record, Schedule, Score, Team, Week
from .ranking import (
    NoScoringDataError,
    RankedTeam,
    RankingConfig,
    RankingEngine,
    RankingError,
    UnknownTeamError,
)

__version__ = '0.1.0'
