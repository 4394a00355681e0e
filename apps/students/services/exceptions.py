"""Domain exceptions for students app."""


class StudentsServiceError(Exception):
    """Base exception for all students service errors."""
    pass


class StudentNotFoundError(StudentsServiceError):
    """Student does not exist."""
    pass


class AlreadyAtTopRankError(StudentsServiceError):
    """Student already holds the top belt at the maximum degree."""
    pass


class InvalidRankStateError(StudentsServiceError):
    """Belt or degree outside the supported rank sequence."""
    pass
