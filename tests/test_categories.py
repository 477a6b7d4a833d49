"""Unit tests for category classification and lookup."""
from datetime import datetime

from conftest import event, team
from rinkcal.categories import (
    DEFAULT_CATEGORIES,
    DEFAULT_RULES,
    classify,
    get_category,
    registration_url,
)
from rinkcal.models import CategoryRule, NormalizedEvent


def normalized(category, home_team_id=None):
    return NormalizedEvent(
        id="1",
        title="x",
        start=datetime(2025, 11, 4, 19, 0),
        end=datetime(2025, 11, 4, 20, 0),
        resource_id=24,
        resource_name="NHL",
        home_team_id=home_team_id,
        category=category,
    )


class TestClassify:
    """Test cases for classify."""

    def test_no_home_team_is_other(self):
        """Events without a resolvable home team fall through to other."""
        e = event(1, event_type="g", hteam=100, vteam=200)
        assert classify(e, None) == "other"
        assert classify(e, team(100, "")) == "other"

    def test_game_with_visitor_beats_name_rules(self):
        """A game with a visiting team is a league game even for Bears teams."""
        e = event(1, event_type="g", hteam=100, vteam=200)
        assert classify(e, team(100, "Bears U12")) == "adult-league-game"

    def test_bears_without_visitor(self):
        e = event(1, event_type="k", hteam=100)
        assert classify(e, team(100, "Bears U12")) == "bears"

    def test_bears_practice_with_visitor_is_not_bears(self):
        """Bears only matches when there is no visiting team."""
        e = event(1, event_type="k", hteam=100, vteam=200)
        assert classify(e, team(100, "Bears U12")) == "other"

    def test_name_markers(self):
        cases = {
            "OIC - Private Lesson w/ Coach": "private-hockey-lessons",
            "OIC - Gretzky Hour": "gretzky-hour",
            "OIC - Public Skate": "public-skate",
            "OIC - Adult Drop-In": "drop-in",
            "OIC - Drop In Goalies": "drop-in",
            "OIC - Freestyle": "figure-skating",
            "Figure Skating Club": "figure-skating",
            "Stick and Puck": "other",
        }
        for name, expected in cases.items():
            e = event(1, event_type="k", hteam=100)
            assert classify(e, team(100, name)) == expected, name

    def test_markers_are_case_sensitive(self):
        e = event(1, event_type="k", hteam=100)
        assert classify(e, team(100, "public skate")) == "other"

    def test_deterministic(self):
        e = event(1, event_type="k", hteam=100)
        t = team(100, "OIC - Public Skate")
        assert classify(e, t) == classify(e, t)

    def test_every_result_is_a_known_category(self):
        known = {c.id for c in DEFAULT_CATEGORIES}
        names = ["", "Bears", "Gretzky Hour", "Private Lesson", "random"]
        for code in ("g", "k", "L", "b", "z"):
            for vteam in (None, 200):
                for name in names:
                    e = event(1, event_type=code, hteam=100, vteam=vteam)
                    assert classify(e, team(100, name)) in known

    def test_custom_rule_table(self):
        """Rules are data; another facility can supply its own."""
        rules = [CategoryRule(category="public-skate", markers=["Open Skate"])]
        e = event(1, event_type="k", hteam=100)
        assert classify(e, team(100, "Open Skate"), rules) == "public-skate"
        assert classify(e, team(100, "OIC - Public Skate"), rules) == "other"

    def test_rule_table_starts_with_league_games(self):
        assert [r.category for r in DEFAULT_RULES][0] == "adult-league-game"
        assert DEFAULT_CATEGORIES[-1].id == "other"


class TestCategoryLookup:
    """Test cases for get_category and registration_url."""

    def test_unknown_id_falls_back_to_last(self):
        assert get_category("nope").id == "other"
        assert get_category("drop-in").sports_id == 20

    def test_registration_url_with_sport(self):
        url = registration_url(normalized("public-skate"))
        assert url.endswith("/event-registration?date=2025-11-04&facility_ids=3&sport_ids=31")

    def test_registration_url_by_team(self):
        url = registration_url(normalized("other", home_team_id=555))
        assert url.endswith("/group/register/555")

    def test_no_registration_for_league_games(self):
        assert registration_url(normalized("adult-league-game", home_team_id=555)) is None

    def test_no_registration_without_team_or_sport(self):
        assert registration_url(normalized("other")) is None
