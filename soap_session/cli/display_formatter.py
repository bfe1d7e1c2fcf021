#!/usr/bin/env python3
"""
Форматирование вывода для CLI интерфейса
"""

import json
from typing import Any, Dict, List

from .constants import Formatting, Messages
from soap_session.models import MethodInfo, Profile


class DisplayFormatter:
    """Класс для форматирования вывода"""

    @staticmethod
    def format_header(title: str) -> str:
        return f"\n{Formatting.SEPARATOR}\n{title}\n{Formatting.SEPARATOR}"

    @staticmethod
    def format_section_header(title: str) -> str:
        """Форматировать заголовок секции"""
        return f"\n{title}\n{Formatting.SHORT_LINE}"

    @staticmethod
    def format_methods(methods: List[MethodInfo]) -> str:
        if not methods:
            return DisplayFormatter.format_warning(Messages.NOT_CONNECTED)
        lines = [f"📋 Доступные методы ({len(methods)}):"]
        for i, method in enumerate(methods, 1):
            lines.append(f"  {i}. {method.name} ({method.service})")
        return "\n".join(lines)

    @staticmethod
    def format_all_cookies(all_cookies: Dict[str, List[str]]) -> str:
        """Форматировать cookies всех доменов"""
        if not all_cookies:
            return DisplayFormatter.format_warning(Messages.NO_COOKIES_STORED)
        lines = ["🗂️  Все сохраненные cookies:"]
        for domain, cookies in all_cookies.items():
            lines.append(f"  {domain}: {'; '.join(cookies)}")
        return "\n".join(lines)

    @staticmethod
    def format_session_cookies(domain: str, cookies: str) -> str:
        return f"🌐 Домен: {domain}\n🍪 Cookies: {cookies}"

    @staticmethod
    def format_profiles(profiles: List[Profile]) -> str:
        if not profiles:
            return DisplayFormatter.format_warning(Messages.NO_PROFILES)
        lines = ["📝 Сохраненные профили:"]
        for profile in profiles:
            lines.append(f"  - {profile.name}: {profile.wsdl_url}")
        return "\n".join(lines)

    @staticmethod
    def format_result(result: Any) -> str:
        """Результат вызова в виде JSON"""
        return json.dumps(result, indent=2, ensure_ascii=False, default=str)

    @staticmethod
    def format_error(message: str, error: Exception = None) -> str:
        """Форматировать сообщение об ошибке"""
        result = f"{Messages.ERROR} {message}"
        if error:
            result += f": {error}"
        return result

    @staticmethod
    def format_success(message: str) -> str:
        return f"{Messages.SUCCESS} {message}"

    @staticmethod
    def format_info(message: str) -> str:
        return f"{Messages.INFO} {message}"

    @staticmethod
    def format_warning(message: str) -> str:
        return f"{Messages.WARNING} {message}"
