"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Purchase request is malformed and cannot be scored"""

    pass


class BudgetStoreError(DomainException):
    """Budget store returned an error or is unavailable"""

    pass
