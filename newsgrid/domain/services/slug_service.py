"""
Генерация URL slug из заголовка статьи.
"""

import re
from typing import Iterable

_WHITESPACE = re.compile(r'\s+')
_NON_WORD = re.compile(r'[^\w-]+')
_DASHES = re.compile(r'-{2,}')


def slugify(text: str) -> str:
    """
    Привести заголовок к виду URL slug.

    Примеры:
        "Hello World!" → "hello-world"
        "  Breaking -- News  " → "breaking-news"
    """
    if not text:
        return ""

    slug = str(text).lower().strip()
    slug = _WHITESPACE.sub('-', slug)
    slug = _NON_WORD.sub('', slug)
    slug = _DASHES.sub('-', slug)
    return slug.strip('-')


def unique_slug(base: str, taken: Iterable[str]) -> str:
    """
    Подобрать свободный slug.

    Если base занят, добавляется наименьший свободный суффикс -2, -3, ...

    Args:
        base: Исходный slug
        taken: Уже занятые slug (обычно все, начинающиеся с base)
    """
    taken_set = set(taken)
    if base not in taken_set:
        return base

    suffix = 2
    while f"{base}-{suffix}" in taken_set:
        suffix += 1
    return f"{base}-{suffix}"
