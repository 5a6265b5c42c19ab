"""NewsGrid - платформа публикации новостей с AI-проверкой достоверности."""

__version__ = "1.0.0"
