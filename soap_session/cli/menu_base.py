#!/usr/bin/env python3
"""
Базовые классы для системы меню
"""

from abc import ABC, abstractmethod
from typing import Dict, Callable, Optional, Any
import sys

from .constants import Formatting, Messages


class MenuItem:
    """Элемент меню"""

    def __init__(self, key: str, label: str, action: Callable[[], Any], enabled: bool = True):
        self.key = key
        self.label = label
        self.action = action
        self.enabled = enabled

    def execute(self) -> Any:
        if not self.enabled:
            return None
        return self.action()

    def __str__(self) -> str:
        return f"{self.key}. {self.label}"


class BaseMenu(ABC):
    """Базовый класс для меню"""

    def __init__(self, title: str):
        self.title = title
        self.items: Dict[str, MenuItem] = {}
        self.running = True

    def add_item(self, item: MenuItem) -> None:
        self.items[item.key] = item

    def get_item(self, key: str) -> Optional[MenuItem]:
        return self.items.get(key)

    def display_menu(self) -> None:
        """Отобразить заголовок, пункты и подвал меню"""
        print(f"\n{Formatting.SEPARATOR}")
        print(self.title)
        print(Formatting.SEPARATOR)
        for item in self.items.values():
            if item.enabled:
                print(item)
        print(Formatting.LINE)
        sys.stdout.flush()

    def get_user_choice(self) -> str:
        return input(Messages.CHOOSE_ACTION).strip()

    def handle_choice(self, choice: str) -> bool:
        """
        Обработать выбор пользователя

        Returns:
            bool: True если меню должно продолжить работу, False для выхода
        """
        item = self.get_item(choice)
        if item and item.enabled:
            try:
                item.execute()
            except Exception as e:
                self.handle_error(e)
            return self.running
        print(Messages.INVALID_CHOICE)
        return True

    def handle_error(self, error: Exception) -> None:
        print(f"❌ Ошибка: {error}")

    @abstractmethod
    def setup_menu(self) -> None:
        """Настроить элементы меню (должно быть реализовано в наследниках)"""
        pass

    def run(self) -> None:
        self.running = True
        self.setup_menu()
        while self.running:
            self.display_menu()
            if not self.handle_choice(self.get_user_choice()):
                break

    def stop(self) -> None:
        self.running = False


class NavigableMenu(BaseMenu):
    """Меню с возвратом назад"""

    def __init__(self, title: str, back_key: str = "0", back_label: str = "↩️  Назад"):
        super().__init__(title)
        self.back_key = back_key
        self.back_label = back_label

    def run(self) -> None:
        self.running = True
        self.setup_menu()
        # Кнопка "Назад" всегда последняя
        self.add_item(MenuItem(self.back_key, self.back_label, self.stop))
        while self.running:
            self.display_menu()
            if not self.handle_choice(self.get_user_choice()):
                break
