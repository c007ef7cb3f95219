"""Tests for the likes/matches/messages repository."""

import itertools

import pytest

from aura_twin.profiles import TwinProfile
from aura_twin.scoring import evaluate_pair
from aura_twin.matching import (
    MatchRepository,
    InMemoryStore,
    MatchingError,
    UnknownProfileError,
    UnknownMatchError,
    ordered_pair,
)


@pytest.fixture
def profiles(calm_twin, calm_twin_copy):
    return {
        "lina": calm_twin,
        "maya": calm_twin_copy,
        "rami": TwinProfile(
            display_name="Rami",
            topics_like=["politics"],
            social_speed="fast",
            introversion_level=1,
        ),
    }


@pytest.fixture
def repo(profiles):
    ticks = itertools.count(1000)
    return MatchRepository(profiles, clock=lambda: float(next(ticks)))


class TestDiscovery:

    def test_discover_excludes_self(self, repo):
        uids = [uid for uid, _ in repo.discover("lina")]
        assert uids == ["maya", "rami"]

    def test_rank_candidates(self, repo):
        ranked = repo.rank_candidates("lina")
        assert [uid for uid, _, _ in ranked] == ["maya", "rami"]
        assert ranked[0][2] == 68
        assert ranked[0][2] >= ranked[1][2]

    def test_rank_unknown_user(self, repo):
        with pytest.raises(UnknownProfileError):
            repo.rank_candidates("ghost")


class TestLikes:

    def test_one_way_like_is_not_a_match(self, repo):
        outcome = repo.like("lina", "maya")
        assert not outcome.is_new_match
        assert outcome.match is None
        assert repo.matches_for("lina") == []

    def test_mutual_like_creates_match(self, repo, profiles):
        repo.like("maya", "lina")
        outcome = repo.like("lina", "maya")
        assert outcome.is_new_match
        match = outcome.match
        assert match.id == "match_lina_maya"
        assert (match.user_a, match.user_b) == ("lina", "maya")
        assert match.compatibility_score == evaluate_pair(profiles["lina"], profiles["maya"]).score

    def test_repeated_likes_are_idempotent(self, repo):
        repo.like("lina", "maya")
        first = repo.like("maya", "lina")
        again = repo.like("maya", "lina")
        assert first.is_new_match
        assert not again.is_new_match
        assert again.match == first.match
        assert len(repo.store.list("matches")) == 1

    def test_self_like_rejected(self, repo):
        with pytest.raises(ValueError):
            repo.like("lina", "lina")

    def test_unknown_profile(self, repo):
        with pytest.raises(UnknownProfileError):
            repo.like("lina", "ghost")

    def test_error_hierarchy(self):
        assert issubclass(UnknownProfileError, MatchingError)
        assert issubclass(UnknownMatchError, KeyError)

    def test_matches_for_returns_other_profile(self, repo, profiles):
        repo.like("rami", "lina")
        repo.like("lina", "rami")
        [entry] = repo.matches_for("rami")
        assert entry.other_uid == "lina"
        assert entry.other == profiles["lina"]
        assert repo.matches_for("maya") == []


class TestMessages:

    @pytest.fixture
    def match_id(self, repo):
        repo.like("lina", "maya")
        return repo.like("maya", "lina").match.id

    def test_send_and_list(self, repo, match_id):
        first = repo.send_message(match_id, "lina", "hi")
        second = repo.send_message(match_id, "maya", "hello")
        assert first.id == f"msg_{match_id}_1"
        assert second.id == f"msg_{match_id}_2"
        assert [m.text for m in repo.messages(match_id)] == ["hi", "hello"]
        assert first.created_at < second.created_at

    def test_unknown_match(self, repo):
        with pytest.raises(UnknownMatchError):
            repo.send_message("match_x_y", "lina", "hi")

    def test_outsider_cannot_send(self, repo, match_id):
        with pytest.raises(ValueError):
            repo.send_message(match_id, "rami", "hi")

    def test_no_messages_for_unknown_match(self, repo):
        assert repo.messages("match_x_y") == []


def test_ordered_pair():
    assert ordered_pair("b", "a") == ("a", "b")
    assert ordered_pair("a", "b") == ("a", "b")


def test_store_is_shared_between_repositories(profiles):
    store = InMemoryStore()
    MatchRepository(profiles, store=store).like("lina", "maya")
    outcome = MatchRepository(profiles, store=store).like("maya", "lina")
    assert outcome.is_new_match


def test_rank_candidates_with_extreme_introversion():
    repo = MatchRepository({
        "a": TwinProfile(introversion_level=1e308),
        "b": TwinProfile(introversion_level=-1e308),
    })
    assert [(uid, value) for uid, _, value in repo.rank_candidates("a")] == [("b", 0)]
