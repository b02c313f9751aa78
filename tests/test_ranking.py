# Area: Engine Tests
"""Tests for final standings and tie reporting."""

from alias_engine._engine.ranking import build_game_result, rank_teams
from alias_engine._engine.team import Player, Team


def team(team_id, guessed, total_ms):
    t = Team(team_id, (Player(f"{team_id}-a", "A"), Player(f"{team_id}-b", "B")))
    t.guessed_count = guessed
    t.total_elapsed_ms = total_ms
    return t


class TestRankTeams:
    """Tests for rank ordering."""

    def test_more_guesses_rank_higher(self):
        standings = rank_teams([team("t1", 1, 1000), team("t2", 3, 9000)])
        assert [s.team_id for s in standings] == ["t2", "t1"]
        assert [s.rank for s in standings] == [1, 2]

    def test_lower_time_breaks_equal_guesses(self):
        standings = rank_teams([team("t1", 2, 8000), team("t2", 2, 5000)])
        assert [s.team_id for s in standings] == ["t2", "t1"]

    def test_equal_scores_share_rank(self):
        standings = rank_teams([team("t1", 2, 5000), team("t2", 2, 5000), team("t3", 1, 100)])
        assert [s.rank for s in standings] == [1, 1, 3]
        assert [s.tied for s in standings] == [True, True, False]

    def test_members_listed(self):
        standings = rank_teams([team("t1", 0, 0)])
        assert standings[0].members == ["t1-a", "t1-b"]


class TestBuildGameResult:
    """Tests for the finished-game summary."""

    def test_single_winner(self):
        result = build_game_result("chat-1", [team("t1", 1, 5000), team("t2", 0, 2000)],
                                   reason="words_exhausted", rounds_completed=1)
        assert result.winner_team_id == "t1"
        assert result.is_tie is False
        assert result.ties == []

    def test_tie_for_first_has_no_winner(self):
        result = build_game_result("chat-1", [team("t1", 1, 5000), team("t2", 1, 5000)],
                                   reason="ended", rounds_completed=0)
        assert result.winner_team_id is None
        assert result.is_tie is True
        assert result.ties == [["t1", "t2"]]

    def test_lower_ties_reported_too(self):
        result = build_game_result(
            "chat-1",
            [team("t1", 3, 0), team("t2", 1, 10), team("t3", 1, 10)],
            reason="rounds_completed",
            rounds_completed=3,
        )
        assert result.winner_team_id == "t1"
        assert result.is_tie is False
        assert result.ties == [["t2", "t3"]]

    def test_no_teams(self):
        result = build_game_result("chat-1", [], reason="ended", rounds_completed=0)
        assert result.standings == []
        assert result.winner_team_id is None
        assert result.is_tie is False

    def test_to_dict(self):
        data = build_game_result("chat-1", [team("t1", 1, 5000)], "ended", 0).to_dict()
        assert data["reason"] == "ended"
        assert data["standings"][0]["rank"] == 1
        assert data["standings"][0]["total_elapsed_ms"] == 5000
