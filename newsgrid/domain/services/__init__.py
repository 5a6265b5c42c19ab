"""Чистые доменные сервисы без ввода-вывода."""
