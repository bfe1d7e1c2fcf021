#!/usr/bin/env python3
"""
Константы CLI интерфейса: пункты меню, сообщения, оформление, ключи конфигурации
"""

import os
from enum import Enum


class MenuChoice(Enum):
    """Пункты главного меню"""
    CONNECT = "1"
    METHODS = "2"
    EXECUTE = "3"
    COOKIES = "4"
    PROFILES = "5"
    PARSE_WSDL = "6"
    EXIT = "0"


class CookieMenuChoice(Enum):
    """Пункты меню cookies"""
    VIEW = "1"
    VIEW_ALL = "2"
    ADD = "3"
    CLEAR = "4"


class ProfileMenuChoice(Enum):
    """Пункты меню профилей"""
    LIST = "1"
    CONNECT = "2"
    SAVE_CURRENT = "3"
    DELETE = "4"


class Formatting:
    SEPARATOR = "=" * 50
    LINE = "-" * 50
    SHORT_LINE = "-" * 30


class Messages:
    MAIN_TITLE = "🧼 SOAP Client"
    COOKIES_TITLE = "🍪 Управление cookies сессии"
    PROFILES_TITLE = "📝 Профили подключений"

    CONNECT = "🔗 Подключиться к сервису"
    METHODS = "📋 Список методов"
    EXECUTE = "⚡ Выполнить метод (cookies сохраняются автоматически)"
    COOKIES = "🍪 Управление cookies"
    PROFILES = "📝 Профили"
    PARSE_WSDL = "🔍 Разобрать WSDL"
    EXIT = "❌ Выход"

    VIEW_COOKIES = "📋 Cookies текущего домена"
    VIEW_ALL_COOKIES = "🗂️  Все cookies по доменам"
    ADD_COOKIES = "➕ Добавить cookies для домена"
    CLEAR_COOKIES = "🗑️  Очистить cookies текущего домена"

    LIST_PROFILES = "📋 Список профилей"
    CONNECT_PROFILE = "🔗 Подключиться по профилю"
    SAVE_PROFILE = "💾 Сохранить текущее подключение"
    DELETE_PROFILE = "🗑️  Удалить профиль"

    CHOOSE_ACTION = "Выберите действие: "
    INVALID_CHOICE = "❌ Неверный выбор. Попробуйте снова."
    PRESS_ENTER = "Нажмите Enter для продолжения..."
    INTERRUPTED = "👋 Работа прервана пользователем"
    CRITICAL_ERROR = "💥 Критическая ошибка: {error}"
    GOODBYE = "👋 До свидания!"

    ERROR = "❌"
    SUCCESS = "✅"
    INFO = "ℹ️ "
    WARNING = "⚠️ "

    CONNECTED = "Подключение установлено"
    CONNECTION_FAILED = "Не удалось подключиться"
    NOT_CONNECTED = "Нет методов. Сначала подключитесь к сервису."
    NO_COOKIES = "Для текущего домена нет cookies"
    NO_COOKIES_STORED = "Сохраненных cookies нет"
    NO_CURRENT_DOMAIN = "Домен не указан и текущего домена нет"
    NO_PROFILES = "Сохраненных профилей нет"
    COOKIES_CAPTURED = "🍪 Cookies сессии сохранены и будут использованы в следующих вызовах"
    INVALID_JSON = "Некорректные JSON параметры"
    METHOD_EXECUTED = "Метод выполнен успешно!"


class Config:
    DEFAULT_CONFIG_PATH = os.environ.get("SOAP_CLIENT_CONFIG", "config.yaml")
    DEFAULTS = {
        'debug_console_output': False,
        'request_timeout': 30,
        'request_delay_sec': 0,
        'profiles_dir': None,
        'connect_retries': 1,
        'cookie_storage': {
            'module_path': 'soap_session.implementations.cookie_storage.json_storage.storage',
            'class_name': 'JsonCookieStorage',
        },
    }
