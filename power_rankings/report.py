import json
from typing import Any, Dict, List, Tuple

import pandas as pd

from .ranking import RankedTeam


def ranking_triples(ranked: List[RankedTeam]) -> List[Tuple[int, str, str]]:
    return [(r.rank, r.team.team_location, r.team.team_nickname) for r in ranked]


def ranking_lines(ranked: List[RankedTeam]) -> List[str]:
    return [f"{rank}. {location} {nickname}" for rank, location, nickname in ranking_triples(ranked)]


def _row(r: RankedTeam) -> Dict[str, Any]:
    rec = r.team.record
    return {
        'rank': r.rank,
        'team_id': r.team.team_id,
        'team': r.team.display_name,
        'record': f"{rec.overall_wins}-{rec.overall_losses}",
        'points_for': rec.points_for,
        'all_play_wins': r.team.overall_wins if r.all_play_weight is not None else None,
        'win_pct_weight': r.win_pct_weight,
        'points_for_weight': r.points_for_weight,
        'all_play_weight': r.all_play_weight,
        'weight': r.weight,
    }


def rankings_frame(ranked: List[RankedTeam]) -> pd.DataFrame:
    """One row per team in ranked order, with every weight component."""
    df = pd.DataFrame([_row(r) for r in ranked])
    if df.empty:
        return df
    # two-signal run: no all-play columns to show
    if df['all_play_weight'].isna().all():
        df = df.drop(columns=['all_play_wins', 'all_play_weight'])
    return df


def rankings_table(ranked: List[RankedTeam]) -> str:
    df = rankings_frame(ranked)
    if df.empty:
        return ''
    df = df.drop(columns=['team_id'])
    return df.to_string(index=False, float_format=lambda v: f"{v:.4f}")


def explain_lines(ranked: List[RankedTeam]) -> List[str]:
    out = []
    for r in ranked:
        parts = [f"win%={r.win_pct_weight:.4f}", f"pf={r.points_for_weight:.4f}"]
        if r.all_play_weight is not None:
            parts.append(f"all-play={r.all_play_weight:.4f} ({r.team.overall_wins} wins)")
        out.append(f"{r.team.display_name}: {r.weight:.4f} -> " + ', '.join(parts))
    return out


def rankings_json(ranked: List[RankedTeam]) -> str:
    return json.dumps([_row(r) for r in ranked], indent=2)
