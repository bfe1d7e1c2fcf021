#!/usr/bin/env python3
"""
Фабрика для создания реализаций (хранилище cookies и т.п.) по конфигурации.
"""

import importlib
from typing import Any, Dict

from soap_session.utils.logger_setup import logger


def create_instance_from_config(config: Dict[str, Any], **kwargs) -> Any:
    """
    Динамически создает экземпляр класса по секции конфигурации.

    Args:
        config: Словарь с ключами 'module_path', 'class_name' и необязательным 'options'.
        **kwargs: Runtime-параметры конструктора, имеют приоритет над 'options'.

    Returns:
        Экземпляр созданного класса.
    """
    module_path = config.get('module_path')
    class_name = config.get('class_name')

    if not module_path or not class_name:
        raise ValueError(f"Конфигурация не содержит 'module_path' или 'class_name': {config}")

    try:
        logger.info(f"Загрузка реализации: {module_path}.{class_name}")
        module = importlib.import_module(module_path)
        cls = getattr(module, class_name)
    except (ImportError, AttributeError) as e:
        logger.error(f"❌ Не удалось загрузить или найти класс: {module_path}.{class_name}")
        raise ImportError(f"Не удалось импортировать {class_name} из {module_path}") from e

    options = {**(config.get('options') or {}), **kwargs}
    return cls(**options)
