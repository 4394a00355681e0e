"""
Club configuration.

Tenant-wide thresholds used by the admission and progression rules, built
from ``settings.ACADEMY``. Every field has a documented default; absent or
malformed values fall back to it instead of failing.

Example:
    Reading the active configuration::

        from config.club import get_club_config

        club = get_club_config()
        club.required_classes('Azul')   # 40
        club.required_months('Azul')    # 12
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType

from django.conf import settings

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY_CEILING = 20
DEFAULT_DUPLICATE_WINDOW_MINUTES = 120
DEFAULT_CLASSES_PER_DEGREE = 20
DEFAULT_MONTHS_PER_DEGREE = 6
DEFAULT_ALERT_THRESHOLD_PERCENT = 0.9
DEFAULT_GRACE_DAYS = 5
DEFAULT_MAX_DEGREE = 4


def _frozen(mapping):
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class ClubConfig:
    """Read-only snapshot of the academy rules."""

    capacity_ceiling: int = DEFAULT_CAPACITY_CEILING
    duplicate_window_minutes: int = DEFAULT_DUPLICATE_WINDOW_MINUTES
    classes_per_degree: MappingProxyType = field(default_factory=lambda: _frozen({}))
    months_per_degree: MappingProxyType = field(default_factory=lambda: _frozen({}))
    alert_threshold_percent: float = DEFAULT_ALERT_THRESHOLD_PERCENT
    grace_days: int = DEFAULT_GRACE_DAYS
    max_degree: int = DEFAULT_MAX_DEGREE

    def required_classes(self, belt):
        """Attendance needed at ``belt`` before the next degree (default 20)."""
        return self.classes_per_degree.get(belt, DEFAULT_CLASSES_PER_DEGREE)

    def required_months(self, belt):
        """Months needed at ``belt`` before the next degree (default 6)."""
        return self.months_per_degree.get(belt, DEFAULT_MONTHS_PER_DEGREE)


def _positive_int(name, value, default, allow_zero=False, maximum=None):
    try:
        number = int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid %s=%r, using default %s", name, value, default)
        return default
    if number < 0 or (number == 0 and not allow_zero) or (maximum is not None and number > maximum):
        logger.warning("Out of range %s=%r, using default %s", name, value, default)
        return default
    return number


def _fraction(name, value, default):
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid %s=%r, using default %s", name, value, default)
        return default
    if not 0 < number <= 1:
        logger.warning("Out of range %s=%r, using default %s", name, value, default)
        return default
    return number


def _belt_map(name, value, default):
    if not isinstance(value, dict):
        if value is not None:
            logger.warning("Invalid %s=%r, using per-belt defaults", name, value)
        return _frozen({})

    cleaned = {}
    for belt, amount in value.items():
        cleaned[belt] = _positive_int(f"{name}[{belt}]", amount, default, allow_zero=True)
    return _frozen(cleaned)


def build_club_config(options=None):
    """
    Build a ClubConfig from a settings-style dict.

    Args:
        options (dict, optional): Keys as in ``settings.ACADEMY``
            (``CAPACITY_CEILING``, ``DUPLICATE_WINDOW_MINUTES``,
            ``CLASSES_PER_DEGREE``, ``MONTHS_PER_DEGREE``,
            ``ALERT_THRESHOLD_PERCENT``, ``GRACE_DAYS``, ``MAX_DEGREE``).

    Returns:
        ClubConfig: Never raises; bad values are replaced by defaults.
    """
    options = options if isinstance(options, dict) else {}

    return ClubConfig(
        capacity_ceiling=_positive_int(
            'CAPACITY_CEILING',
            options.get('CAPACITY_CEILING', DEFAULT_CAPACITY_CEILING),
            DEFAULT_CAPACITY_CEILING,
        ),
        duplicate_window_minutes=_positive_int(
            'DUPLICATE_WINDOW_MINUTES',
            options.get('DUPLICATE_WINDOW_MINUTES', DEFAULT_DUPLICATE_WINDOW_MINUTES),
            DEFAULT_DUPLICATE_WINDOW_MINUTES,
            allow_zero=True,
        ),
        classes_per_degree=_belt_map(
            'CLASSES_PER_DEGREE',
            options.get('CLASSES_PER_DEGREE'),
            DEFAULT_CLASSES_PER_DEGREE,
        ),
        months_per_degree=_belt_map(
            'MONTHS_PER_DEGREE',
            options.get('MONTHS_PER_DEGREE'),
            DEFAULT_MONTHS_PER_DEGREE,
        ),
        alert_threshold_percent=_fraction(
            'ALERT_THRESHOLD_PERCENT',
            options.get('ALERT_THRESHOLD_PERCENT', DEFAULT_ALERT_THRESHOLD_PERCENT),
            DEFAULT_ALERT_THRESHOLD_PERCENT,
        ),
        grace_days=_positive_int(
            'GRACE_DAYS',
            options.get('GRACE_DAYS', DEFAULT_GRACE_DAYS),
            DEFAULT_GRACE_DAYS,
            allow_zero=True,
        ),
        max_degree=_positive_int(
            'MAX_DEGREE',
            options.get('MAX_DEGREE', DEFAULT_MAX_DEGREE),
            DEFAULT_MAX_DEGREE,
            maximum=DEFAULT_MAX_DEGREE,
        ),
    )


def get_club_config():
    """Return the ClubConfig for the current settings."""
    return build_club_config(getattr(settings, 'ACADEMY', None))
