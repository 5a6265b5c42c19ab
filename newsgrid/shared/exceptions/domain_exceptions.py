"""
Domain Exceptions

Исключения доменного слоя.
"""


class DomainException(Exception):
    """Базовое исключение домена."""
    pass


class DomainValidationError(DomainException):
    """Ошибка валидации доменной сущности."""
    pass


class EntityNotFoundError(DomainException):
    """Сущность не найдена."""
    pass


class DuplicateEntityError(DomainException):
    """Дубликат сущности."""
    pass


class BusinessRuleViolation(DomainException):
    """Нарушение бизнес-правила."""
    pass


class InvalidStatusTransition(BusinessRuleViolation):
    """Недопустимый переход статуса статьи."""

    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot change status from '{current}' to '{requested}'")
        self.current = current
        self.requested = requested


class AuthenticationRequired(DomainException):
    """Операция требует аутентифицированного пользователя."""
    pass


class PermissionDenied(DomainException):
    """У пользователя нет прав на операцию."""
    pass
