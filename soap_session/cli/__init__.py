#!/usr/bin/env python3
"""
CLI пакет для SOAP клиента
"""

from .constants import MenuChoice, CookieMenuChoice, ProfileMenuChoice, Messages, Formatting, Config
from .menu_base import MenuItem, BaseMenu, NavigableMenu
from .display_formatter import DisplayFormatter
from .config_manager import ConfigManager
from .menus import MainMenu, CookiesMenu, ProfilesMenu

__all__ = [
    'MenuChoice',
    'CookieMenuChoice',
    'ProfileMenuChoice',
    'Messages',
    'Formatting',
    'Config',
    'MenuItem',
    'BaseMenu',
    'NavigableMenu',
    'DisplayFormatter',
    'ConfigManager',
    'MainMenu',
    'CookiesMenu',
    'ProfilesMenu'
]
