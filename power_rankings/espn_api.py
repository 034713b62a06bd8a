import logging
import requests
from typing import Any, Dict, Optional

BASE = 'https://games.espn.com/ffl/api/v2'

logger = logging.getLogger(__name__)


class EspnAPIError(Exception):
    pass


class EspnClient:
    def __init__(self, base_url: str = BASE, timeout: int = 10):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.info("GET %s %s", url, params or '')
        resp = requests.get(url, params=params, timeout=self.timeout)
        if not resp.ok:
            raise EspnAPIError(f"GET {url} failed: {resp.status_code} {resp.text}")
        try:
            return resp.json()
        except ValueError as e:
            raise EspnAPIError(f"GET {url} returned a non-JSON body: {e}") from e

    @staticmethod
    def _params(league_id: int, season_id: Optional[int]) -> Dict[str, Any]:
        params: Dict[str, Any] = {'leagueId': league_id}
        if season_id is not None:
            params['seasonId'] = season_id
        return params

    def get_teams(self, league_id: int, season_id: Optional[int] = None) -> Dict[str, Any]:
        """Season snapshot: {'teams': [{record, teamId, teamLocation, teamNickname}, ...]}"""
        return self._get('/teams', params=self._params(league_id, season_id))

    def get_league_schedule(self, league_id: int, season_id: Optional[int] = None) -> Dict[str, Any]:
        """Schedule history: {'leagueSchedule': {'scheduleItems': [{'matchups': [...]}, ...]}}"""
        return self._get('/leagueSchedules', params=self._params(league_id, season_id))
