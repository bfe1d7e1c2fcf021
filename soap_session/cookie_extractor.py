#!/usr/bin/env python3
"""
Cookie Extractor - поиск заголовков Set-Cookie в ответе SOAP вызова

Источники проверяются в фиксированном порядке, используется первый,
в котором нашлись cookies:
1. Заголовки последнего ответа SOAP клиента (самый надежный источник)
2. Заголовки сырого объекта ответа, приложенного к результату
3. Текст сырого ответа, поиск по шаблону "Set-Cookie: ..."
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

from soap_session.utils.logger_setup import logger

SET_COOKIE_HEADER = 'set-cookie'
SET_COOKIE_PATTERN = re.compile(r'Set-Cookie:\s*([^\r\n]+)', re.IGNORECASE)
# Граница между склеенными через ", " значениями: дальше идет "имя=", а не дата Expires
JOINED_COOKIE_SEPARATOR = re.compile(r',\s*(?=[^;,=\s]+=)')


@dataclass
class ResponseChannels:
    """Все доступные после вызова источники данных ответа"""
    call_result: Any
    last_response_headers: Optional[Mapping[str, Any]] = None


@dataclass
class ExtractedCookies:
    source: str
    cookies: List[str]


ExtractionStrategy = Callable[[ResponseChannels], Optional[List[str]]]


def _field(obj: Any, name: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (str, bytes)):
        values = [value]
    elif isinstance(value, (list, tuple)):
        values = list(value)
    else:
        return []
    return [v.decode('latin-1') if isinstance(v, bytes) else str(v) for v in values if v]


def split_joined(value: str) -> List[str]:
    """Разделить заголовок, в котором requests склеил несколько Set-Cookie через ', '"""
    return [part.strip() for part in JOINED_COOKIE_SEPARATOR.split(value) if part.strip()]


def set_cookie_values(headers: Any) -> Optional[List[str]]:
    """
    Значения Set-Cookie из отображения заголовков (имя без учета регистра).

    Поддерживает как обычные dict/CaseInsensitiveDict, так и заголовки
    urllib3 с методом getlist (несколько Set-Cookie без склейки).
    """
    if headers is None:
        return None

    if hasattr(headers, 'getlist'):
        values = _as_list(headers.getlist('Set-Cookie'))
        return values or None

    if not isinstance(headers, Mapping):
        return None

    values: List[str] = []
    for name, value in headers.items():
        if isinstance(name, str) and name.lower() == SET_COOKIE_HEADER:
            for item in _as_list(value):
                values.extend(split_joined(item))
    return values or None


def from_last_response_headers(channels: ResponseChannels) -> Optional[List[str]]:
    return set_cookie_values(channels.last_response_headers)


def from_raw_response_headers(channels: ResponseChannels) -> Optional[List[str]]:
    for attr in ('raw_response', 'raw'):
        raw = _field(channels.call_result, attr)
        if raw is None or isinstance(raw, (str, bytes)):
            continue
        # requests.Response: сначала заголовки urllib3 (raw.raw.headers), где
        # каждый Set-Cookie хранится отдельно, затем склеенные raw.headers
        cookies = (set_cookie_values(_field(_field(raw, 'raw'), 'headers'))
                   or set_cookie_values(_field(raw, 'headers')))
        if cookies:
            return cookies
    return None


def from_raw_body(channels: ResponseChannels) -> Optional[List[str]]:
    raw = _field(channels.call_result, 'raw')
    if isinstance(raw, bytes):
        raw = raw.decode('utf-8', errors='replace')
    if not isinstance(raw, str):
        return None
    cookies = [match.strip() for match in SET_COOKIE_PATTERN.findall(raw)]
    return [cookie for cookie in cookies if cookie] or None


EXTRACTION_STRATEGIES: Tuple[Tuple[str, ExtractionStrategy], ...] = (
    ('last_response_headers', from_last_response_headers),
    ('raw_response_headers', from_raw_response_headers),
    ('raw_body', from_raw_body),
)


def extract_cookies(channels: ResponseChannels,
                    strategies: Sequence[Tuple[str, ExtractionStrategy]] = EXTRACTION_STRATEGIES
                    ) -> Optional[ExtractedCookies]:
    """
    Найти cookies в ответе.

    Стратегии не объединяются: результат дает первая стратегия, вернувшая
    хотя бы одно значение. Отсутствие cookies - нормальная ситуация.

    Returns:
        ExtractedCookies или None, если ни одна стратегия ничего не нашла
    """
    for name, strategy in strategies:
        cookies = strategy(channels)
        if cookies:
            logger.info(f"🍪 Cookies найдены в источнике '{name}': {len(cookies)} шт.")
            return ExtractedCookies(source=name, cookies=cookies)

    logger.debug("🔍 Cookies в ответе не найдены")
    return None
