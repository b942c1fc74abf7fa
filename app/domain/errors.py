"""
Domain errors raised by the scoring engine and the team state machine.

Every mutating team operation raises one of these before any state is
committed; scoring raises ValidationError instead of returning a partial vector.
"""


class CareerCoreError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)

    default_message = "Operation failed"


class ValidationError(CareerCoreError):
    default_message = "Malformed or out-of-range input"


class NotFoundError(CareerCoreError):
    default_message = "Referenced entity does not exist"


class AlreadyProcessedError(CareerCoreError):
    default_message = "Join request not found or already processed"


class CapacityExceededError(CareerCoreError):
    default_message = "Team is already full"


class InvalidStateError(CareerCoreError):
    default_message = "Illegal team status transition"


class DuplicatePendingRequestError(CareerCoreError):
    default_message = "A pending join request already exists for this team"


class AlreadyMemberError(CareerCoreError):
    default_message = "User is already a team member"


class TeamUnavailableError(CareerCoreError):
    default_message = "Team is not accepting new members"


class ForbiddenError(CareerCoreError):
    default_message = "Operation is not allowed for this user"


class ExternalServiceError(CareerCoreError):
    default_message = "External service call failed"
