import logging
from typing import Dict

from .models import Schedule, Week

logger = logging.getLogger(__name__)


def week_all_play_wins(week: Week) -> Dict[int, int]:
    """Wins each team would have earned that week playing every other scorer.

    Scores are ranked high to low; the team at position i out of n gets n - (i + 1)
    wins. Undecided matchups (outcome 0) are left out entirely.
    """
    scores = sorted(week.scores(), key=lambda s: s.score, reverse=True)
    n = len(scores)
    wins: Dict[int, int] = {}
    for index, score in enumerate(scores):
        wins[score.team_id] = wins.get(score.team_id, 0) + n - (index + 1)
    return wins


def calculate_all_play_wins(schedule: Schedule) -> Dict[int, int]:
    """Cumulative all-play wins per team id across every week of the schedule.

    Teams that never appear in a decided matchup are absent from the result.
    """
    totals: Dict[int, int] = {}
    for week_no, week in enumerate(schedule.weeks, start=1):
        week_wins = week_all_play_wins(week)
        if not week_wins:
            continue
        logger.debug("week %d: all-play wins %s", week_no, week_wins)
        for team_id, wins in week_wins.items():
            totals[team_id] = totals.get(team_id, 0) + wins
    return totals
