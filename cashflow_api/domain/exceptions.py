"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidProjectionInputError(DomainException):
    """Projection window or inputs cannot produce a balance series"""

    pass


class InvalidScenarioError(DomainException):
    """Scenario adjustment is malformed"""

    pass
