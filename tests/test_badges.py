"""Tests for the static badge table and pure evaluation."""

from reportit.badges import BADGE_DEFINITIONS, ActivityType, badge_ids, get_badge
from reportit.services.badge_service import earned_badges


class TestBadgeDefinitions:

    def test_badge_ids_are_the_fixed_set(self):
        assert badge_ids() == [
            "first-report",
            "active-reporter",
            "super-reporter",
            "first-update",
            "active-commenter",
            "first-completed",
            "problem-solver",
        ]

    def test_ids_are_unique(self):
        ids = [badge.id for badge in BADGE_DEFINITIONS]
        assert len(ids) == len(set(ids))

    def test_levels_within_range(self):
        assert all(1 <= badge.level <= 3 for badge in BADGE_DEFINITIONS)

    def test_get_badge(self):
        badge = get_badge("active-reporter")
        assert badge.criteria.type == ActivityType.REPORTS
        assert badge.criteria.count == 5
        assert get_badge("no-such-badge") is None


class TestEarnedBadges:

    @staticmethod
    def counts(reports=0, updates=0, completed=0):
        return {
            ActivityType.REPORTS: reports,
            ActivityType.UPDATES: updates,
            ActivityType.COMPLETED: completed,
        }

    def test_nothing_earned_without_activity(self):
        assert earned_badges(self.counts(), []) == []

    def test_threshold_is_inclusive(self):
        assert "active-reporter" not in earned_badges(self.counts(reports=4), [])
        assert "active-reporter" in earned_badges(self.counts(reports=5), [])

    def test_several_badges_at_once(self):
        earned = earned_badges(self.counts(reports=10), [])
        assert earned == ["first-report", "active-reporter", "super-reporter"]

    def test_held_badges_are_not_granted_again(self):
        earned = earned_badges(self.counts(reports=10), ["first-report"])
        assert earned == ["active-reporter", "super-reporter"]

    def test_result_independent_of_definition_order(self):
        counts = self.counts(reports=7, updates=1, completed=5)
        forward = set(earned_badges(counts, []))
        expected = {
            badge.id
            for badge in reversed(BADGE_DEFINITIONS)
            if counts[badge.criteria.type] >= badge.criteria.count
        }
        assert forward == expected
