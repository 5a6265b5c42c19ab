"""
Исключения приложения.

Доменные исключения описывают нарушения правил предметной области,
инфраструктурные - сбои БД и внешних сервисов.
"""

from newsgrid.shared.exceptions.domain_exceptions import (
    AuthenticationRequired,
    BusinessRuleViolation,
    DomainException,
    DomainValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidStatusTransition,
    PermissionDenied,
)
from newsgrid.shared.exceptions.infrastructure_exceptions import (
    AuthProviderError,
    DatabaseError,
    ExternalServiceError,
    InfrastructureException,
)

__all__ = [
    'AuthenticationRequired',
    'AuthProviderError',
    'BusinessRuleViolation',
    'DatabaseError',
    'DomainException',
    'DomainValidationError',
    'DuplicateEntityError',
    'EntityNotFoundError',
    'ExternalServiceError',
    'InfrastructureException',
    'InvalidStatusTransition',
    'PermissionDenied',
]
