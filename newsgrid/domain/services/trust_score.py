# -*- coding: utf-8 -*-
"""
Разбор ответов AI: оценка доверия, рейтинг, JSON и цитаты.

Все функции чистые - принимают текст ответа модели и ничего не знают
о провайдерах.
"""

import json
import re
from typing import Any, Dict, List, Optional

# "Trust Score: 72/100", "**Total Trust Score: 72/100**", "Trust Score:** 72 / 100"
_TRUST_SCORE = re.compile(
    r'trust\s+score\s*:?\s*(?:\*\*)?\s*:?\s*(\d{1,3})\s*/\s*100',
    re.IGNORECASE,
)
_URL = re.compile(r'https?://[^\s)\]>"\']+')
_CITATION_HEADING = re.compile(r'^#{1,6}\s*.*(citation|reference)', re.IGNORECASE)
_HEADING = re.compile(r'^#{1,6}\s')

CREDIBILITY_LEVELS = (
    (85, "Highly Credible"),
    (70, "Credible"),
    (50, "Mixed"),
    (30, "Low Credibility"),
    (0, "Unreliable"),
)


def parse_trust_score(report: Optional[str]) -> Optional[int]:
    """
    Извлечь итоговую оценку доверия из markdown отчёта.

    Берётся последнее вхождение маркера: итог стоит в конце отчёта,
    а в таблице разбора встречаются промежуточные значения.

    Returns:
        Оценка 0-100 или None если маркера нет
    """
    if not report:
        return None

    matches = _TRUST_SCORE.findall(report)
    if not matches:
        return None

    return max(0, min(100, int(matches[-1])))


def credibility_rating(score: Optional[int]) -> Optional[str]:
    """Текстовый рейтинг по оценке доверия."""
    if score is None:
        return None
    for threshold, label in CREDIBILITY_LEVELS:
        if score >= threshold:
            return label
    return CREDIBILITY_LEVELS[-1][1]


def extract_json(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """Извлечь JSON объект из текстового ответа модели."""
    if not text:
        return None

    text = text.strip()

    try:
        data = json.loads(text)
        return data if isinstance(data, dict) else None
    except json.JSONDecodeError:
        pass

    fenced = re.findall(r'```(?:json)?\s*([\s\S]*?)\s*```', text, re.IGNORECASE)
    for block in fenced:
        try:
            data = json.loads(block.strip())
            if isinstance(data, dict):
                return data
        except json.JSONDecodeError:
            continue

    start = text.find('{')
    if start != -1:
        depth = 0
        for i in range(start, len(text)):
            if text[i] == '{':
                depth += 1
            elif text[i] == '}':
                depth -= 1
                if depth == 0:
                    try:
                        return json.loads(text[start:i + 1])
                    except json.JSONDecodeError:
                        break

    return None


def parse_citations(report: Optional[str]) -> List[str]:
    """
    URL из раздела цитат / ссылок в конце отчёта.

    Если раздела нет, возвращает пустой список.
    """
    if not report:
        return []

    urls: List[str] = []
    in_section = False
    for line in report.splitlines():
        stripped = line.strip()
        if _CITATION_HEADING.match(stripped):
            in_section = True
            continue
        if in_section and _HEADING.match(stripped):
            break
        if in_section:
            for url in _URL.findall(stripped):
                url = url.rstrip('.,;')
                if url not in urls:
                    urls.append(url)
    return urls


def score_from_report(report: Dict[str, Any]) -> Optional[int]:
    """Итог из JSON отчёта Gemini (trustScore.total)."""
    trust = report.get("trustScore") if isinstance(report, dict) else None
    if not isinstance(trust, dict):
        return None
    total = trust.get("total")
    try:
        return max(0, min(100, int(total)))
    except (TypeError, ValueError):
        return None
