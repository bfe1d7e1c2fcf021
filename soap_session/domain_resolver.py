#!/usr/bin/env python3
"""
Domain Resolver - определение домена подключения по URL
"""

import urllib.parse as urlparse
from dataclasses import dataclass
from typing import Optional

from soap_session.exceptions import InvalidUrl


@dataclass
class ConnectionContext:
    """
    Контекст текущего подключения.

    current_domain - домен адреса сервиса (не WSDL), по нему ищутся и
    сохраняются cookies до следующего connect.
    """
    wsdl_url: str
    service_url: str
    current_domain: str


@dataclass(frozen=True)
class DomainTransition:
    """Смена домена при переподключении"""
    previous_domain: str
    current_domain: str

    def __str__(self) -> str:
        return f"{self.previous_domain} -> {self.current_domain}"


def domain_of(url: str) -> str:
    """
    Домен URL: hostname в нижнем регистре, без схемы, порта и пути.

    Raises:
        InvalidUrl: если url не является абсолютным URL
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidUrl(url)

    try:
        parsed = urlparse.urlsplit(url.strip())
        hostname = parsed.hostname
    except ValueError as e:
        raise InvalidUrl(url) from e

    if not parsed.scheme or not hostname:
        raise InvalidUrl(url)
    return hostname.lower()


def detect_domain_transition(previous_domain: Optional[str], current_domain: str) -> Optional[DomainTransition]:
    """Событие смены домена, если предыдущий домен был и отличается от нового"""
    if previous_domain and previous_domain != current_domain:
        return DomainTransition(previous_domain=previous_domain, current_domain=current_domain)
    return None


def normalize_domain(domain: Optional[str]) -> Optional[str]:
    """Домен, введенный вручную, в виде ключа хранилища; пустой ввод дает None"""
    if not domain or not domain.strip():
        return None
    return domain.strip().lower()
