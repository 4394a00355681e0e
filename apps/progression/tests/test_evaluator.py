"""
Unit tests for the progression evaluator.

The evaluator is pure: snapshots and timestamps are built in memory.
"""

import pytest
from datetime import datetime, timedelta
from uuid import uuid4
from django.utils import timezone

from apps.progression.evaluator import (
    evaluate_progress,
    filter_attendance_since,
    months_between,
    next_rank,
)
from apps.students.models import Belt
from apps.students.snapshots import StudentSnapshot
from config.club import build_club_config


NOW = timezone.make_aware(datetime(2025, 3, 20, 12, 0))


@pytest.fixture
def config():
    return build_club_config({
        'CLASSES_PER_DEGREE': {'Branca': 20, 'Azul': 40, 'Roxa': 60, 'Marrom': 80, 'Preta': 120},
        'MONTHS_PER_DEGREE': {'Branca': 6, 'Azul': 12, 'Roxa': 18, 'Marrom': 24, 'Preta': 36},
        'ALERT_THRESHOLD_PERCENT': 0.9,
    })


def make_student(belt=Belt.WHITE, degree=0, days_at_belt=40):
    return StudentSnapshot(
        id=uuid4(),
        active=True,
        current_belt=belt,
        current_degree=degree,
        belt_since=NOW - timedelta(days=days_at_belt),
    )


def classes(count, student):
    return [student.belt_since + timedelta(days=1, hours=i) for i in range(count)]


# =============================================================================
# Helper Tests
# =============================================================================

class TestHelpers:
    """Tests for next_rank, months_between, filter_attendance_since."""

    def test_next_rank_degree(self):
        assert next_rank(Belt.PURPLE, 1) == (Belt.PURPLE, 2)

    def test_next_rank_belt(self):
        assert next_rank(Belt.BROWN, 4) == (Belt.BLACK, 0)

    def test_next_rank_top(self):
        assert next_rank(Belt.BLACK, 4) is None

    def test_next_rank_custom_max_degree(self):
        assert next_rank(Belt.WHITE, 2, max_degree=2) == (Belt.BLUE, 0)

    def test_months_between_thirty_day_blocks(self):
        start = NOW - timedelta(days=59)

        assert months_between(start, NOW) == 1
        assert months_between(NOW - timedelta(days=60), NOW) == 2

    def test_months_between_future_start(self):
        assert months_between(NOW + timedelta(days=5), NOW) == 0

    def test_filter_attendance_since_keeps_boundary(self):
        since = NOW - timedelta(days=3)
        stamps = [since - timedelta(seconds=1), since, NOW]

        assert filter_attendance_since(since, stamps) == [since, NOW]


# =============================================================================
# Readiness Tests
# =============================================================================

class TestReadiness:
    """Tests for ready_for_degree and its two qualifying paths."""

    def test_exact_requirement_is_ready(self, config):
        student = make_student()

        result = evaluate_progress(student, classes(20, student), config, now=NOW)

        assert result.ready_for_degree is True

    def test_one_below_requirement_is_not_ready(self, config):
        student = make_student()

        result = evaluate_progress(student, classes(19, student), config, now=NOW)

        assert result.ready_for_degree is False

    def test_months_alone_qualify(self, config):
        student = make_student(days_at_belt=180)

        result = evaluate_progress(student, [], config, now=NOW)

        assert result.months_at_belt == 6
        assert result.ready_for_degree is True

    def test_months_one_day_short(self, config):
        student = make_student(days_at_belt=179)

        result = evaluate_progress(student, [], config, now=NOW)

        assert result.months_at_belt == 5
        assert result.ready_for_degree is False

    def test_requirements_follow_belt(self, config):
        student = make_student(belt=Belt.BLUE)

        result = evaluate_progress(student, classes(20, student), config, now=NOW)

        assert result.required_for_next_degree == 40
        assert result.months_required == 12
        assert result.ready_for_degree is False

    def test_unmapped_belt_uses_defaults(self):
        config = build_club_config({})
        student = make_student(belt=Belt.PURPLE)

        result = evaluate_progress(student, [], config, now=NOW)

        assert result.required_for_next_degree == 20
        assert result.months_required == 6


# =============================================================================
# Award Preview Tests
# =============================================================================

class TestAwardPreview:
    """Tests for next_degree_if_awarded, next_belt_if_promoted, ready_for_belt_promotion."""

    def test_below_max_degree(self, config):
        student = make_student(degree=1)

        result = evaluate_progress(student, classes(20, student), config, now=NOW)

        assert result.next_degree_if_awarded == 2
        assert result.next_belt_if_promoted is None
        assert result.ready_for_belt_promotion is False

    def test_degree_overflow(self, config):
        student = make_student(belt=Belt.BLUE, degree=4)

        result = evaluate_progress(student, classes(40, student), config, now=NOW)

        assert result.ready_for_degree is True
        assert result.ready_for_belt_promotion is True
        assert result.next_degree_if_awarded == 0
        assert result.next_belt_if_promoted == Belt.PURPLE

    def test_degree_overflow_not_ready(self, config):
        student = make_student(belt=Belt.BLUE, degree=4)

        result = evaluate_progress(student, classes(5, student), config, now=NOW)

        assert result.ready_for_belt_promotion is False
        assert result.next_belt_if_promoted == Belt.PURPLE

    def test_top_rank_is_terminal(self, config):
        student = make_student(belt=Belt.BLACK, degree=4, days_at_belt=2000)

        result = evaluate_progress(student, classes(120, student), config, now=NOW)

        assert result.ready_for_degree is True
        assert result.ready_for_belt_promotion is False
        assert result.next_belt_if_promoted is None
        assert result.next_degree_if_awarded == 0

    def test_explicit_max_degree(self, config):
        student = make_student(degree=2)

        result = evaluate_progress(student, classes(20, student), config, max_degree=2, now=NOW)

        assert result.ready_for_belt_promotion is True
        assert result.next_belt_if_promoted == Belt.BLUE


# =============================================================================
# Alert Tests
# =============================================================================

class TestAlert:
    """Tests for the forward alert and the progress percentage."""

    def test_alert_before_ready(self, config):
        student = make_student()

        result = evaluate_progress(student, classes(18, student), config, now=NOW)

        assert result.alert is True
        assert result.ready_for_degree is False
        assert result.progress_percent == 90

    def test_no_alert_below_threshold(self, config):
        student = make_student()

        result = evaluate_progress(student, classes(17, student), config, now=NOW)

        assert result.alert is False

    def test_zero_requirement_never_alerts(self):
        config = build_club_config({'CLASSES_PER_DEGREE': {'Branca': 0}})
        student = make_student()

        result = evaluate_progress(student, [], config, now=NOW)

        assert result.alert is False
        assert result.ready_for_degree is True

    def test_progress_percent_is_capped(self, config):
        student = make_student()

        result = evaluate_progress(student, classes(35, student), config, now=NOW)

        assert result.progress_percent == 100


# =============================================================================
# Scenario Tests
# =============================================================================

class TestScenarios:
    """End-to-end evaluator scenarios."""

    def test_white_belt_ready_for_third_degree(self, config):
        student = make_student(belt=Belt.WHITE, degree=2, days_at_belt=40)

        result = evaluate_progress(student, classes(20, student), config, now=NOW)

        assert result.attended_since_belt == 20
        assert result.required_for_next_degree == 20
        assert result.ready_for_degree is True
        assert result.alert is True
        assert result.next_degree_if_awarded == 3
        assert result.ready_for_belt_promotion is False

    def test_evaluation_is_idempotent(self, config):
        student = make_student(belt=Belt.BROWN, degree=3, days_at_belt=300)
        stamps = classes(50, student)

        first = evaluate_progress(student, stamps, config, now=NOW)
        second = evaluate_progress(student, stamps, config, now=NOW)

        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_malformed_config_falls_back(self):
        config = build_club_config({
            'CLASSES_PER_DEGREE': 'lots',
            'MONTHS_PER_DEGREE': {'Branca': 'six'},
            'ALERT_THRESHOLD_PERCENT': 7,
        })
        student = make_student()

        result = evaluate_progress(student, classes(18, student), config, now=NOW)

        assert result.required_for_next_degree == 20
        assert result.months_required == 6
        assert result.alert is True
