#!/usr/bin/env python3
"""
Storage Interface - Интерфейс для хранения cookies между запусками
Пользователь может реализовать этот интерфейс для БД, файлов или других способов хранения
"""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import datetime


class CookieStorageInterface(ABC):
    """Абстрактный интерфейс для хранения cookies по доменам"""

    @abstractmethod
    def save_cookies(self, domain: str, cookie_string: str) -> bool:
        """
        Сохранить cookies домена

        Args:
            domain: Домен сервиса
            cookie_string: Cookies в виде "name1=value1; name2=value2"

        Returns:
            bool: True если успешно сохранено
        """
        pass

    @abstractmethod
    def load_cookies(self, domain: str) -> Optional[str]:
        """
        Загрузить cookies домена

        Returns:
            Optional[str]: Строка cookies или None если не найдено
        """
        pass

    @abstractmethod
    def delete_cookies(self, domain: str) -> bool:
        """Удалить cookies домена"""
        pass

    @abstractmethod
    def get_last_update(self, domain: str) -> Optional[datetime]:
        """Время последнего сохранения cookies домена или None"""
        pass
