"""Tests for the profile schema and record migration."""

import logging

import pytest

from aura_twin.profiles import (
    TwinProfile,
    SocialSpeed,
    migrate_profile,
    is_current_schema,
    to_storage_record,
    SCHEMA_VERSION,
)


def _v2_record():
    return {
        "id": "u1",
        "userId": "u1",
        "displayName": "Lina",
        "aura": {
            "introversionLevel": 6,
            "goals": ["friends"],
            "vibeWords": ["calm"],
            "topicsLike": ["music"],
            "topicsAvoid": ["politics"],
            "socialSpeed": "normal",
            "greenFlags": ["honesty"],
            "redFlags": ["ghosting"],
            "hardBoundaries": ["no drama"],
            "summary": "Quiet.",
        },
        "dating": {"displayName": "Lina", "country": "Germany"},
        "preferences": {"minAge": 18},
    }


class TestTwinProfile:
    """Normalization done by the dataclass itself."""

    def test_defaults(self):
        profile = TwinProfile()
        assert profile.display_name == "User"
        assert profile.goals == ()
        assert profile.social_speed == SocialSpeed.SLOW
        assert profile.introversion_level == 5

    def test_lists_become_tuples(self):
        profile = TwinProfile(goals=["friends"], topics_like=None)
        assert profile.goals == ("friends",)
        assert profile.topics_like == ()

    def test_frozen(self):
        profile = TwinProfile()
        with pytest.raises(AttributeError):
            profile.display_name = "Other"

    def test_unknown_speed_kept(self):
        profile = TwinProfile(social_speed="glacial")
        assert profile.social_speed == "glacial"
        assert profile.speed == "glacial"

    @pytest.mark.parametrize("raw,expected", [
        (None, 5),
        ("7", 7.0),
        ("lots", 5),
        (float("nan"), 5),
        (True, 5),
        (12, 12),
    ])
    def test_introversion_coercion(self, raw, expected):
        assert TwinProfile(introversion_level=raw).introversion_level == expected

    def test_from_dict_accepts_both_cases(self):
        camel = TwinProfile.from_dict({"displayName": "A", "vibeWords": ["calm"], "socialSpeed": "fast"})
        snake = TwinProfile.from_dict({"display_name": "A", "vibe_words": ["calm"], "social_speed": "fast"})
        assert camel == snake
        assert camel.social_speed == SocialSpeed.FAST

    def test_to_dict(self):
        data = TwinProfile(display_name="A", goals=["friends"]).to_dict()
        assert data["displayName"] == "A"
        assert data["goals"] == ["friends"]
        assert data["socialSpeed"] == "slow"


class TestMigration:
    """Migrating stored records of either schema version."""

    def test_current_schema_detected(self):
        assert is_current_schema(_v2_record())
        assert not is_current_schema({"displayName": "Old", "goals": ["friends"]})
        assert not is_current_schema(None)

    def test_v2_record(self):
        profile = migrate_profile(_v2_record())
        assert profile.display_name == "Lina"
        assert profile.user_id == "u1"
        assert profile.introversion_level == 6
        assert profile.social_speed == SocialSpeed.NORMAL
        assert profile.hard_boundaries == ("no drama",)
        assert profile.summary == "Quiet."

    def test_legacy_flat_record_matches_v2(self):
        v2 = _v2_record()
        flat = {"id": "u1", "displayName": "Lina", **v2["aura"]}
        assert migrate_profile(flat) == migrate_profile(v2)

    def test_nested_value_wins_over_root_mirror(self):
        record = _v2_record()
        record["goals"] = ["stale"]
        assert migrate_profile(record).goals == ("friends",)

    def test_display_name_from_dating(self):
        record = _v2_record()
        del record["displayName"]
        record["dating"]["displayName"] = "Lina D."
        assert migrate_profile(record).display_name == "Lina D."

    def test_nested_display_name_wins_over_root_mirror(self):
        record = _v2_record()
        record["displayName"] = "Stale Name"
        record["dating"]["displayName"] = "Lina D."
        assert migrate_profile(record).display_name == "Lina D."

    def test_root_display_name_used_for_legacy_records(self):
        assert migrate_profile({"displayName": "Old"}).display_name == "Old"

    def test_empty_record_uses_defaults(self):
        profile = migrate_profile({})
        assert profile.display_name == "User"
        assert profile.social_speed == SocialSpeed.SLOW
        assert profile.introversion_level == 5
        assert profile.user_id is None
        assert migrate_profile(None) == profile

    def test_out_of_range_introversion_warns_and_passes_through(self, caplog):
        with caplog.at_level(logging.WARNING, logger="aura_twin.profiles.migration"):
            profile = migrate_profile({"displayName": "Loud", "introversionLevel": 14})
        assert profile.introversion_level == 14
        assert "outside" in caplog.text

    def test_storage_record_is_v2(self):
        profile = migrate_profile({"id": "u1", "displayName": "Lina", "goals": ["friends"]})
        record = to_storage_record(profile)
        assert record["schemaVersion"] == SCHEMA_VERSION
        assert record["userId"] == "u1"
        assert record["aura"]["goals"] == ["friends"]
        assert "goals" not in record
        assert is_current_schema(record)
        assert migrate_profile(record) == profile
