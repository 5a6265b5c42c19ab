"""
Infrastructure Exceptions

Исключения инфраструктурного слоя.
"""

from typing import Optional


class InfrastructureException(Exception):
    """Базовое исключение инфраструктуры."""
    pass


class DatabaseError(InfrastructureException):
    """Ошибка работы с БД."""
    pass


class ExternalServiceError(InfrastructureException):
    """Ошибка внешнего сервиса (AI, скрапинг)."""

    def __init__(self, message: str, status_code: Optional[int] = None, service: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.service = service


class AuthProviderError(InfrastructureException):
    """Провайдер аутентификации отклонил токен или недоступен."""
    pass
