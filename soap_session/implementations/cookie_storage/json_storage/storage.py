#!/usr/bin/env python3
"""
Реализация интерфейса хранения cookies в одном JSON файле.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from soap_session.interfaces.storage_interface import CookieStorageInterface
from soap_session.utils.logger_setup import logger


class JsonCookieStorage(CookieStorageInterface):
    """
    Хранение cookies в JSON файле вида
    {"домен": {"cookies": "a=1; b=2", "last_update": "..."}}
    """

    def __init__(self, file_path: str = "cookies.json", **kwargs):
        self.file_path = Path(file_path)
        self.file_path.parent.mkdir(parents=True, exist_ok=True)

    def _read(self) -> Dict[str, Any]:
        if not self.file_path.exists():
            return {}
        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return data if isinstance(data, dict) else {}
        except (json.JSONDecodeError, OSError) as e:
            logger.error(f"Ошибка чтения cookie-файла {self.file_path}: {e}")
            return {}

    def save_cookies(self, domain: str, cookie_string: str) -> bool:
        """Сохранить cookies домена в JSON файл"""
        try:
            data = self._read()
            data[domain] = {
                "cookies": cookie_string,
                "last_update": datetime.now().isoformat()
            }
            with open(self.file_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            return True
        except Exception as e:
            logger.error(f"Ошибка сохранения cookie-файла для {domain}: {e}")
            return False

    def load_cookies(self, domain: str) -> Optional[str]:
        entry = self._read().get(domain)
        if not isinstance(entry, dict):
            return None
        return entry.get('cookies') or None

    def delete_cookies(self, domain: str) -> bool:
        """Удалить cookies домена из файла"""
        try:
            data = self._read()
            if data.pop(domain, None) is not None:
                with open(self.file_path, 'w', encoding='utf-8') as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                logger.info(f"Удалены cookies для {domain}")
            return True
        except Exception as e:
            logger.error(f"Ошибка удаления cookies для {domain}: {e}")
            return False

    def get_last_update(self, domain: str) -> Optional[datetime]:
        entry = self._read().get(domain)
        if not isinstance(entry, dict) or not entry.get("last_update"):
            return None
        try:
            return datetime.fromisoformat(entry["last_update"])
        except ValueError as e:
            logger.error(f"Ошибка чтения времени обновления cookies для {domain}: {e}")
            return None
