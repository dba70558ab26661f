"""Domain-specific exceptions"""

from typing import List
from score_projector.domain.models import FieldError


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ProfileValidationError(DomainException):
    """One or more profile fields failed validation"""

    def __init__(self, errors: List[FieldError]):
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))


class PersistenceError(DomainException):
    """Simulation could not be written to the document store"""

    pass


class NotificationError(DomainException):
    """Results webhook rejected the event or is unavailable"""

    pass
