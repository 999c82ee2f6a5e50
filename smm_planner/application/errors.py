"""
Application error taxonomy.

Routers map ValidationError (and InvalidTierError) to 400 and
NotFoundError to 404.
"""
from smm_planner.domain.tiers import InvalidTierError


class ValidationError(ValueError):
    pass


class NotFoundError(LookupError):
    pass


class ProjectValidationError(ValidationError):
    pass


class ProjectCreationError(RuntimeError):
    """Project + tasks batch failed to persist; nothing was written."""


class ProjectNotFoundError(NotFoundError):
    pass


class TaskNotFoundError(NotFoundError):
    pass


__all__ = [
    "InvalidTierError",
    "ValidationError",
    "NotFoundError",
    "ProjectValidationError",
    "ProjectCreationError",
    "ProjectNotFoundError",
    "TaskNotFoundError",
]
