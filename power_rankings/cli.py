import argparse
import hashlib
import json
import logging
import os
import sys
from typing import Any, Callable, Dict, List, Optional

from .all_play import calculate_all_play_wins
from .espn_api import EspnAPIError, EspnClient
from .espn_mapper import LeagueDataError, league_from_payload, load_league, load_schedule, schedule_from_payload
from .ranking import RankedTeam, RankingConfig, RankingEngine, RankingError
from .report import explain_lines, ranking_lines, rankings_json, rankings_table

logger = logging.getLogger(__name__)


def prompt_league_id(input_fn: Optional[Callable[[str], str]] = None) -> int:
    print("Please enter your league ID.")
    read = input_fn or input
    return parse_league_id(read(''))


def parse_league_id(raw: Any) -> int:
    text = str(raw).strip()
    try:
        league_id = int(text)
    except ValueError:
        raise LeagueDataError(f"league id must be a whole number, got {text!r}") from None
    if league_id < 0:
        raise LeagueDataError(f"league id must not be negative, got {league_id}")
    return league_id


def _cache_path(cache_dir: str, key: str) -> str:
    return os.path.join(cache_dir, hashlib.sha256(key.encode()).hexdigest() + '.json')


def cache_load(cache_dir: Optional[str], key: str) -> Any:
    if not cache_dir:
        return None
    path = _cache_path(cache_dir, key)
    if not os.path.exists(path):
        return None
    try:
        with open(path, 'r', encoding='utf-8') as fh:
            return json.load(fh)
    except (OSError, ValueError) as e:
        # a broken cache entry is refetched, not fatal
        logger.warning("ignoring unreadable cache entry %s: %s", path, e)
        return None


def cache_save(cache_dir: Optional[str], key: str, obj: Any) -> None:
    if not cache_dir:
        return
    os.makedirs(cache_dir, exist_ok=True)
    with open(_cache_path(cache_dir, key), 'w', encoding='utf-8') as fh:
        json.dump(obj, fh)


def fetch_cached(fetch: Callable[[], Any], cache_dir: Optional[str], key: str) -> Any:
    cached = cache_load(cache_dir, key)
    if cached is not None:
        logger.info("using cached %s", key)
        return cached
    payload = fetch()
    cache_save(cache_dir, key, payload)
    return payload


def needs_api(league_file: Optional[str], schedule_file: Optional[str], all_play: bool) -> bool:
    return league_file is None or (all_play and schedule_file is None)


def run_rankings(
    league_id: Optional[int] = None,
    season: Optional[int] = None,
    league_file: Optional[str] = None,
    schedule_file: Optional[str] = None,
    all_play: bool = True,
    all_play_pool: Optional[int] = None,
    cache_dir: Optional[str] = None,
    client: Optional[EspnClient] = None,
) -> List[RankedTeam]:
    """Load the league (and schedule) from files or the ESPN API and rank it.

    Files win over the API for whichever payload they supply.
    """
    need_api = needs_api(league_file, schedule_file, all_play)
    if need_api and league_id is None:
        raise LeagueDataError('a league id is required when no league/schedule file is given')
    if need_api and client is None:
        client = EspnClient()
    if season is None and cache_dir:
        # current-season standings change weekly; only a pinned season is cached
        logger.info("no season given, not using the cache in %s", cache_dir)
        cache_dir = None

    if league_file is not None:
        league = load_league(league_file)
    else:
        logger.info("Fetching teams for league %s...", league_id)
        payload = fetch_cached(
            lambda: client.get_teams(league_id, season), cache_dir, f"espn-teams-{league_id}-{season}"
        )
        league = league_from_payload(payload)

    wins_map: Optional[Dict[int, int]] = None
    if all_play:
        if schedule_file is not None:
            schedule = load_schedule(schedule_file)
        else:
            logger.info("Fetching schedule for league %s...", league_id)
            payload = fetch_cached(
                lambda: client.get_league_schedule(league_id, season),
                cache_dir,
                f"espn-schedule-{league_id}-{season}",
            )
            schedule = schedule_from_payload(payload)
        wins_map = calculate_all_play_wins(schedule)

    engine = RankingEngine(RankingConfig(all_play_pool=all_play_pool))
    return engine.rank(league, wins_map)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='power-rankings', description='Power rankings for an ESPN fantasy football league')
    parser.add_argument('--league', help='ESPN league id (default: $ESPN_LEAGUE_ID, else prompt)')
    parser.add_argument('--season', type=int, default=os.environ.get('ESPN_SEASON'), help='Season id (default: $ESPN_SEASON, else current)')
    parser.add_argument('--league-file', help='Saved teams JSON to use instead of fetching')
    parser.add_argument('--schedule-file', help='Saved leagueSchedules JSON to use instead of fetching')
    parser.add_argument('--no-all-play', dest='all_play', action='store_false', help='Rank on record and points for only')
    parser.add_argument('--all-play-pool', type=int, default=None, help='Teams in the all-play pool (default: league size; 10 matches the old fixed pool)')
    parser.add_argument('--cache-dir', default=os.environ.get('POWER_RANKINGS_CACHE_DIR'), help='Directory to cache downloaded payloads (only used with --season)')
    parser.add_argument('--format', choices=['text', 'table', 'json'], default='text', help='Output format')
    parser.add_argument('--explain', action='store_true', help='Print per-team weight breakdown after the ranking')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='-v for progress, -vv for per-team weights')
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.WARNING if args.verbose == 0 else logging.INFO if args.verbose == 1 else logging.DEBUG
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')

    if args.all_play_pool is not None and args.all_play_pool < 0:
        print("Error: --all-play-pool must not be negative", file=sys.stderr)
        return 1

    try:
        league_id = None
        raw_id = args.league or os.environ.get('ESPN_LEAGUE_ID')
        if raw_id:
            league_id = parse_league_id(raw_id)
        elif needs_api(args.league_file, args.schedule_file, args.all_play):
            league_id = prompt_league_id()
        ranked = run_rankings(
            league_id=league_id,
            season=args.season,
            league_file=args.league_file,
            schedule_file=args.schedule_file,
            all_play=args.all_play,
            all_play_pool=args.all_play_pool,
            cache_dir=args.cache_dir,
        )
    except (RankingError, LeagueDataError, EspnAPIError, OSError, EOFError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.format == 'json':
        print(rankings_json(ranked))
    elif args.format == 'table':
        print(rankings_table(ranked))
    else:
        for line in ranking_lines(ranked):
            print(line)
    if args.explain:
        for line in explain_lines(ranked):
            print(line)
    return 0


if __name__ == '__main__':
    sys.exit(main())
