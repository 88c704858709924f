"""Tests for Elo rating updates."""
import sys
import os
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from agent.rating import RatingSystem, expected_score


class TestExpectedScore:
    def test_even_ratings(self):
        assert expected_score(1200, 1200) == pytest.approx(0.5)

    def test_perspectives_sum_to_one(self):
        assert expected_score(1400, 1250) + expected_score(1250, 1400) == pytest.approx(1.0)

    def test_four_hundred_point_gap(self):
        assert expected_score(1600, 1200) == pytest.approx(10 / 11)


class TestLogistic:
    def test_even_match(self):
        update = RatingSystem().update(1200, 1200)
        assert update.winner_rating == 1216
        assert update.loser_rating == 1184
        assert update.winner_delta == 16
        assert update.loser_delta == -16

    def test_upset_pays_more(self):
        update = RatingSystem().update(1000, 1400)
        assert update.winner_rating == 1029
        assert update.loser_rating == 1371

    def test_minimum_delta_for_decisive_result(self):
        update = RatingSystem().update(2400, 1200)
        assert update.winner_rating == 2401
        assert update.loser_rating == 1199

    def test_loser_floor(self):
        update = RatingSystem().update(100, 105)
        assert update.winner_rating > 100
        assert update.loser_rating == 100
        assert update.loser_delta == -5

    @pytest.mark.parametrize("winner,loser", [(5000, 100), (100, 100), (150, 101), (3000, 120)])
    def test_never_below_floor(self, winner, loser):
        assert RatingSystem().update(winner, loser).loser_rating >= 100

    def test_draw_even_ratings_unchanged(self):
        update = RatingSystem().update(1200, 1200, is_draw=True)
        assert update.winner_rating == 1200
        assert update.loser_rating == 1200

    def test_draw_is_symmetric(self):
        update = RatingSystem().update(1400, 1200, is_draw=True)
        assert update.winner_rating == 1392
        assert update.loser_rating == 1208

        mirrored = RatingSystem().update(1200, 1400, is_draw=True)
        assert mirrored.winner_rating == 1208
        assert mirrored.loser_rating == 1392

    def test_custom_k_factor(self):
        update = RatingSystem(k_factor=16).update(1200, 1200)
        assert update.winner_rating == 1208
        assert update.loser_rating == 1192


class TestLinear:
    def test_even_match(self):
        update = RatingSystem(mode="linear").update(1200, 1200)
        assert update.winner_rating == 1216
        assert update.loser_rating == 1184

    def test_favourite_wins_minimum(self):
        update = RatingSystem(mode="linear").update(1700, 1200)
        assert update.winner_delta == 1

    def test_underdog_wins_full_k(self):
        update = RatingSystem(mode="linear").update(1200, 1600)
        assert update.winner_delta == 32

    def test_partial_gap(self):
        # expected = 500 - 100 * 500 // 400 = 375
        update = RatingSystem(mode="linear").update(1200, 1300)
        assert update.winner_delta == 20
        assert update.loser_rating == 1280

    def test_draw_uses_linear_scale(self):
        # expected for the favourite = 1000, shift = 32 * 500 // 1000
        update = RatingSystem(mode="linear").update(1600, 1200, is_draw=True)
        assert (update.winner_rating, update.loser_rating) == (1584, 1216)
        # the logistic draw would move each side by 13
        assert RatingSystem().update(1600, 1200, is_draw=True).winner_rating == 1587

    def test_draw_mirrored(self):
        update = RatingSystem(mode="linear").update(1200, 1600, is_draw=True)
        assert (update.winner_rating, update.loser_rating) == (1216, 1584)

    def test_draw_even_unchanged(self):
        update = RatingSystem(mode="linear").update(1300, 1300, is_draw=True)
        assert (update.winner_delta, update.loser_delta) == (0, 0)

    def test_floor(self):
        update = RatingSystem(mode="linear").update(1200, 110)
        assert update.loser_rating == 109
        assert RatingSystem(mode="linear").update(100, 110).loser_rating == 100


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        RatingSystem(mode="glicko")
