#!/usr/bin/env python3
"""
Cookie Store - хранилище сессионных cookies в памяти, сгруппированных по доменам
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from soap_session.utils.logger_setup import logger


@dataclass(frozen=True)
class CookieJarEntry:
    """Один cookie: имя и непрозрачное значение"""
    name: str
    value: str

    def render(self) -> str:
        return f"{self.name}={self.value}"

    @classmethod
    def parse(cls, pair: str) -> Optional["CookieJarEntry"]:
        """
        Разбирает строку вида name=value по первому '='.

        Returns:
            CookieJarEntry или None для пустой строки
        """
        pair = pair.strip()
        if not pair:
            return None
        name, _, value = pair.partition('=')
        return cls(name=name.strip(), value=value.strip())


DomainCookies = List[CookieJarEntry]


def _replace_or_append(collection: DomainCookies, entry: CookieJarEntry) -> None:
    # Замененный cookie переезжает в конец коллекции
    collection[:] = [existing for existing in collection if existing.name != entry.name]
    collection.append(entry)


class CookieStore:
    """
    Хранилище cookies по доменам.

    Все операции тотальны: обращение к неизвестному домену никогда не
    бросает исключение, отсутствие cookies выражается через None.
    """

    def __init__(self):
        self._domains: Dict[str, DomainCookies] = {}

    def get(self, domain: str) -> Optional[DomainCookies]:
        """Cookies домена или None, если для домена ничего не записано"""
        cookies = self._domains.get(domain)
        if not cookies:
            return None
        return list(cookies)

    def merge(self, domain: str, raw_cookie_strings: Iterable[str]) -> DomainCookies:
        """
        Объединить значения заголовков Set-Cookie с cookies домена.

        Атрибуты (Path, Expires и т.д.) отбрасываются: берется часть до
        первого ';', затем имя и значение делятся по первому '='.
        Cookie с уже существующим именем удаляется и добавляется в конец.

        Args:
            domain: Домен
            raw_cookie_strings: Сырые значения заголовков Set-Cookie

        Returns:
            Обновленная коллекция cookies домена
        """
        collection = list(self._domains.get(domain, []))
        for raw in raw_cookie_strings:
            entry = CookieJarEntry.parse(raw.split(';', 1)[0])
            if entry is None or not entry.name:
                logger.debug(f"Пропущено пустое значение cookie: {raw!r}")
                continue
            _replace_or_append(collection, entry)

        if collection:
            self._domains[domain] = collection
        return list(collection)

    def delete(self, domain: str) -> None:
        self._domains.pop(domain, None)

    def list(self) -> Dict[str, DomainCookies]:
        """Снимок всех cookies по доменам"""
        return {domain: list(cookies) for domain, cookies in self._domains.items() if cookies}

    def set_all(self, domain: str, entries: Iterable[CookieJarEntry]) -> DomainCookies:
        """Полностью заменить коллекцию cookies домена"""
        collection: DomainCookies = []
        for entry in entries:
            _replace_or_append(collection, entry)

        if collection:
            self._domains[domain] = collection
        else:
            self._domains.pop(domain, None)
        return list(collection)

    def render(self, domain: str) -> Optional[str]:
        """Значение заголовка Cookie для домена или None"""
        cookies = self._domains.get(domain)
        if not cookies:
            return None
        return "; ".join(entry.render() for entry in cookies)

    def __contains__(self, domain: str) -> bool:
        return bool(self._domains.get(domain))

    def __len__(self) -> int:
        return len(self.list())
