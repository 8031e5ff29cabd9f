"""
bracket.py — сетка плей-офф через Gemini.

Сетку на Википедии рисуют шаблоном из десятков вложенных ячеек, разбирать
его руками хрупко, поэтому HTML таблицы (обрезанный до BRACKET_MAX_BYTES)
отдаём модели вместе с жёсткой JSON-схемой ответа.

Модель недетерминирована и может ответить мусором. Любая такая проблема —
BracketExtractionError, а extract_bracket() превращает её в None:
поле "bracket" в этот проход не пишется, в базе остаётся прошлое значение.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, List, Optional

import requests
from bs4 import BeautifulSoup

from locator import find_bracket_block

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_MODEL = "gemini-2.0-flash"
BRACKET_MAX_BYTES = 30_000

BRACKET_SCHEMA = """{
    "bracket": [
        {
            "name": "Round of 16",
            "games": [
                {
                    "team": [
                        { "name": "Team A", "image": "https://flagsapi.com/XX/flat/64.png", "score": "1" },
                        { "name": "Team B", "image": "https://flagsapi.com/YY/flat/64.png", "score": "2" }
                    ]
                }
            ]
        }
    ]
}"""

BRACKET_PROMPT = """
Extract the Knockout Stage Bracket from this HTML.
Return ONLY valid JSON.

STRUCTURE:
{schema}
Rounds: Round of 16, Quarter-finals, Semi-finals, Third place play-off, Final.

RULES:
1. Convert Team Names to ISO codes for the image URL (Morocco->MA, etc).
2. If score is unknown, use "-". If team is unknown, name="Winner Group A" and image="".

HTML: {markup}
"""


class BracketExtractionError(Exception):
    """Сервис не ответил или ответил не тем JSON."""


def truncate_markup(markup: str, max_bytes: int = BRACKET_MAX_BYTES) -> str:
    """Режем по байтам UTF-8, не ломая многобайтовые символы."""
    raw = markup.encode("utf-8")
    if len(raw) <= max_bytes:
        return markup
    return raw[:max_bytes].decode("utf-8", errors="ignore")


def build_prompt(markup: str) -> str:
    # str.format нельзя: в схеме фигурные скобки
    return BRACKET_PROMPT.replace("{schema}", BRACKET_SCHEMA).replace("{markup}", markup)


def strip_code_fences(text: str) -> str:
    return text.replace("```json", "").replace("```", "").strip()


def parse_bracket_response(text: str) -> List[Any]:
    """
    Текст ответа модели -> список раундов.
    Допускаем обёртку ```json ... ```, всё остальное — ошибка.
    """
    cleaned = strip_code_fences(text or "")
    if not cleaned:
        raise BracketExtractionError("пустой ответ модели")

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise BracketExtractionError(f"ответ не JSON: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("bracket"), list):
        raise BracketExtractionError("в ответе нет списка 'bracket'")
    return data["bracket"]


class GeminiBracketExtractor:
    """Синхронный клиент Gemini generateContent, только под сетку."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout: float = 60.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = (api_key or "").strip()
        self.model = model or DEFAULT_MODEL
        self.timeout = timeout
        self.session = session or requests.Session()

    def _extract_text(self, response: dict) -> str:
        candidates = response.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        if not parts:
            return ""
        return parts[0].get("text", "")

    def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise BracketExtractionError("GEMINI_API_KEY не задан")

        url = f"{GEMINI_BASE_URL}/{self.model}:generateContent"
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": 0.0},
        }

        t0 = time.monotonic()
        try:
            resp = self.session.post(
                url,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise BracketExtractionError(f"запрос к Gemini упал: {e}") from e

        elapsed_ms = int((time.monotonic() - t0) * 1000)
        if resp.status_code != 200:
            raise BracketExtractionError(
                f"Gemini HTTP {resp.status_code}: {resp.text[:500]}"
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise BracketExtractionError(f"Gemini вернул не JSON: {e}") from e

        logger.info("Gemini ответил за %d ms (model=%s)", elapsed_ms, self.model)
        return self._extract_text(data)

    def extract(self, markup: str) -> List[Any]:
        return parse_bracket_response(self.generate(build_prompt(markup)))


def extract_bracket(
    extractor: Optional[GeminiBracketExtractor],
    soup: BeautifulSoup,
    max_bytes: int = BRACKET_MAX_BYTES,
) -> Optional[List[Any]]:
    """
    Сетка плей-офф или None, если в этот проход её не пересчитали:
    нет таблицы, нет экстрактора, сервис упал или ответил мусором.
    Пустой список — это валидный ответ модели, его пишем как есть.
    """
    table = find_bracket_block(soup)
    if table is None:
        logger.info("Таблица сетки плей-офф на странице не найдена")
        return None
    if extractor is None:
        logger.info("Извлечение сетки отключено")
        return None

    markup = truncate_markup(str(table), max_bytes)
    try:
        bracket = extractor.extract(markup)
    except BracketExtractionError as e:
        logger.warning("Не удалось извлечь сетку плей-офф: %s", e)
        return None

    logger.info("Сетка плей-офф: раундов %d", len(bracket))
    return bracket
