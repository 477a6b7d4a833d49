"""Unit tests for team resolution."""
import asyncio

from conftest import FakeSource, raw_team, team
from rinkcal.models import RawTeam
from rinkcal.teams import TeamResolver, display_name


class TestDisplayName:
    """Test cases for display_name."""

    def test_not_found(self):
        assert display_name(None) == "Unknown Team"

    def test_strips_org_prefix(self):
        assert display_name(team(1, "OIC - Sharks A")) == "Sharks A"

    def test_prefix_only_stripped_at_start(self):
        assert display_name(team(1, "Sharks OIC - A")) == "Sharks OIC - A"

    def test_short_name_fallback(self):
        assert display_name(team(1, "", short_name="OIC - SHK")) == "SHK"

    def test_synthesized_fallback(self):
        assert display_name(RawTeam(id="42")) == "Team 42"


class TestTeamResolver:
    """Test cases for TeamResolver."""

    def test_resolve_many_maps_ids(self):
        source = FakeSource(teams={100: raw_team(100, "OIC - Sharks A")})
        resolver = TeamResolver(source)

        teams = asyncio.run(resolver.resolve_many([100, 200, 100]))

        assert set(teams) == {100, 200}
        assert teams[100].attributes.name == "OIC - Sharks A"
        assert teams[200] is None
        assert sorted(source.team_calls) == [100, 200]

    def test_failures_cached_as_not_found(self):
        source = FakeSource(teams={100: raw_team(100, "A")}, broken_teams={300})
        resolver = TeamResolver(source)

        async def run():
            first = await resolver.resolve(300)
            second = await resolver.resolve(300)
            return first, second

        assert asyncio.run(run()) == (None, None)
        assert source.team_calls == [300]

    def test_malformed_team_is_not_found(self):
        source = FakeSource(teams={100: {"attributes": {"name": "no id"}}})
        resolver = TeamResolver(source)
        assert asyncio.run(resolver.resolve(100)) is None

    def test_concurrent_requests_share_fetch(self):
        source = FakeSource(teams={100: raw_team(100, "A")})
        resolver = TeamResolver(source)

        async def run():
            return await asyncio.gather(*(resolver.resolve(100) for _ in range(5)))

        results = asyncio.run(run())
        assert all(r is results[0] for r in results)
        assert source.team_calls == [100]
