"""
Students services - Business logic layer.

This package contains the student store operations and the explicit
promotion action.
"""

from .student_management import (
    get_student_by_id,
    find_active_by_id,
    update_rank_state,
    increment_counters,
)

from .promotion import (
    compute_next_rank,
    apply_promotion,
    get_belt_history,
)

from .exceptions import (
    StudentsServiceError,
    StudentNotFoundError,
    AlreadyAtTopRankError,
    InvalidRankStateError,
)

__all__ = [
    # Student store
    'get_student_by_id',
    'find_active_by_id',
    'update_rank_state',
    'increment_counters',
    # Promotion
    'compute_next_rank',
    'apply_promotion',
    'get_belt_history',
    # Exceptions
    'StudentsServiceError',
    'StudentNotFoundError',
    'AlreadyAtTopRankError',
    'InvalidRankStateError',
]
