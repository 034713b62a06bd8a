import copy
import json
import tempfile
import unittest
from pathlib import Path

from power_rankings.espn_mapper import (
    LeagueDataError,
    league_from_payload,
    load_league,
    load_schedule,
    schedule_from_payload,
)

DATA = Path(__file__).parent / 'data'
TEAMS = json.loads((DATA / 'teams.json').read_text())
SCHEDULE = json.loads((DATA / 'schedule.json').read_text())


class TestLeagueMapping(unittest.TestCase):
    def test_league_from_payload(self):
        league = league_from_payload(TEAMS)
        self.assertEqual(league.league_size, 4)
        boston = league.get_team(1)
        self.assertEqual(boston.display_name, 'Boston Bruisers')
        self.assertEqual(boston.record.points_for, 221.5)
        self.assertEqual(boston.weeks_played, 2)
        self.assertEqual(boston.overall_wins, 0)
        self.assertEqual(league.max_points_for(), 238.0)

    def test_missing_record_field(self):
        payload = copy.deepcopy(TEAMS)
        del payload['teams'][2]['record']['pointsFor']
        with self.assertRaises(LeagueDataError) as ctx:
            league_from_payload(payload)
        self.assertIn('teams[2].record.pointsFor', str(ctx.exception))

    def test_nan_points_for_rejected(self):
        payload = json.loads((DATA / 'teams.json').read_text().replace('"pointsFor": 209.5', '"pointsFor": NaN'))
        with self.assertRaises(LeagueDataError) as ctx:
            league_from_payload(payload)
        self.assertIn('teams[2].record.pointsFor', str(ctx.exception))

    def test_infinite_score_rejected(self):
        payload = copy.deepcopy(SCHEDULE)
        payload['leagueSchedule']['scheduleItems'][0]['matchups'][0]['awayTeamScores'] = [float('inf')]
        with self.assertRaises(LeagueDataError):
            schedule_from_payload(payload)

    def test_wrong_type(self):
        payload = copy.deepcopy(TEAMS)
        payload['teams'][0]['record']['overallWins'] = 'two'
        with self.assertRaises(LeagueDataError):
            league_from_payload(payload)

    def test_missing_teams_key(self):
        with self.assertRaises(LeagueDataError):
            league_from_payload({'team': []})

    def test_duplicate_team_id(self):
        payload = copy.deepcopy(TEAMS)
        payload['teams'][1]['teamId'] = 1
        with self.assertRaises(LeagueDataError):
            league_from_payload(payload)


class TestScheduleMapping(unittest.TestCase):
    def test_schedule_from_payload(self):
        schedule = schedule_from_payload(SCHEDULE)
        self.assertEqual(len(schedule.weeks), 3)
        first = schedule.weeks[0].matchups[0]
        self.assertEqual((first.away_team_id, first.home_team_id), (1, 2))
        self.assertEqual(first.away_team_scores, [120.5, 0.0])
        self.assertTrue(first.is_decided)
        self.assertFalse(schedule.weeks[2].matchups[0].is_decided)
        self.assertEqual(schedule.weeks[2].scores(), [])

    def test_empty_score_list_fails_fast(self):
        payload = copy.deepcopy(SCHEDULE)
        payload['leagueSchedule']['scheduleItems'][1]['matchups'][0]['homeTeamScores'] = []
        with self.assertRaises(LeagueDataError) as ctx:
            schedule_from_payload(payload)
        self.assertIn('scheduleItems[1].matchups[0].homeTeamScores', str(ctx.exception))

    def test_missing_outcome(self):
        payload = copy.deepcopy(SCHEDULE)
        del payload['leagueSchedule']['scheduleItems'][0]['matchups'][1]['outcome']
        with self.assertRaises(LeagueDataError):
            schedule_from_payload(payload)


class TestFileLoading(unittest.TestCase):
    def test_load_files(self):
        self.assertEqual(len(load_league(str(DATA / 'teams.json')).teams), 4)
        self.assertEqual(len(load_schedule(str(DATA / 'schedule.json')).weeks), 3)

    def test_invalid_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / 'bad.json'
            path.write_text('{"teams": [', encoding='utf-8')
            with self.assertRaises(LeagueDataError):
                load_league(str(path))


if __name__ == '__main__':
    unittest.main()
