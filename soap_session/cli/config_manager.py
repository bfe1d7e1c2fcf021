#!/usr/bin/env python3
"""
Управление конфигурацией для CLI интерфейса
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML

from .constants import Config
from soap_session.utils.logger_setup import logger


class ConfigManager:
    """Менеджер конфигурации (config.yaml)"""

    def __init__(self, config_path: str = None):
        self.config_path = config_path or Config.DEFAULT_CONFIG_PATH
        self.config_data: Optional[Dict[str, Any]] = None
        self.yaml = YAML(typ='safe')

    def load_config(self) -> bool:
        """
        Загрузить конфигурацию из файла.
        Отсутствие файла не ошибка: используются значения по умолчанию.

        Returns:
            bool: False если файл есть, но прочитать его не удалось
        """
        config_file = Path(self.config_path)
        if not config_file.exists():
            logger.info(f"Файл конфигурации {self.config_path} не найден, используются значения по умолчанию")
            self.config_data = {}
            return True

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                self.config_data = self.yaml.load(f) or {}
            return True
        except Exception as e:
            logger.error(f"Ошибка загрузки конфигурации {self.config_path}: {e}")
            self.config_data = {}
            return False

    def get(self, key: str, default_value: Any = None) -> Any:
        """
        Значение из конфигурации: сначала файл, затем значения по умолчанию, затем default_value.
        """
        if self.config_data and key in self.config_data and self.config_data[key] is not None:
            return self.config_data[key]
        if key in Config.DEFAULTS and Config.DEFAULTS[key] is not None:
            return copy.deepcopy(Config.DEFAULTS[key])
        return default_value

    def connection_options(self) -> Dict[str, Any]:
        """Опции создания SOAP клиента из конфигурации"""
        return {
            'timeout': float(self.get('request_timeout')),
            'request_delay_sec': float(self.get('request_delay_sec')),
        }

    def is_loaded(self) -> bool:
        return self.config_data is not None

    def reload(self) -> bool:
        self.config_data = None
        return self.load_config()
