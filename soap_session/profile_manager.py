#!/usr/bin/env python3
"""
Profile Manager - сохранение профилей подключения (имя -> WSDL URL)
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from soap_session.models import Profile
from soap_session.utils.logger_setup import logger

DEFAULT_PROFILES_DIR = Path.home() / ".soap-client"
PROFILES_FILE = "profiles.yaml"


class ProfileManager:
    """Менеджер профилей подключения, хранит их в profiles.yaml"""

    def __init__(self, profiles_dir: Optional[str] = None):
        self.profiles_dir = Path(profiles_dir).expanduser() if profiles_dir else DEFAULT_PROFILES_DIR
        self.profiles_file = self.profiles_dir / PROFILES_FILE
        self.profiles_dir.mkdir(parents=True, exist_ok=True)

    def _load(self) -> Dict[str, Dict[str, Any]]:
        try:
            if self.profiles_file.exists():
                with open(self.profiles_file, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f) or {}
                return data.get('profiles') or {}
        except (yaml.YAMLError, OSError) as e:
            logger.error(f"Ошибка загрузки профилей: {e}")
        return {}

    def _save(self, profiles: Dict[str, Dict[str, Any]]) -> None:
        try:
            with open(self.profiles_file, 'w', encoding='utf-8') as f:
                yaml.safe_dump({'profiles': profiles}, f, allow_unicode=True, sort_keys=False)
        except OSError as e:
            logger.error(f"Ошибка сохранения профилей: {e}")

    @staticmethod
    def _dump(profile: Profile) -> Dict[str, Any]:
        data = profile.model_dump(mode='json', by_alias=True, exclude_none=True, exclude={'name'})
        if not data.get('extra'):
            data.pop('extra', None)
        return data

    @staticmethod
    def _to_profile(name: str, data: Dict[str, Any]) -> Optional[Profile]:
        try:
            return Profile.model_validate({**data, 'name': name})
        except ValidationError as e:
            logger.warning(f"⚠️ Профиль '{name}' поврежден и пропущен: {e}")
            return None

    def save_profile(self, name: str, wsdl_url: str, **extra) -> Profile:
        """Сохранить профиль (перезаписывает профиль с тем же именем)"""
        profiles = self._load()
        profile = Profile(name=name, wsdl_url=wsdl_url, extra=extra)
        profiles[name] = self._dump(profile)
        self._save(profiles)
        logger.info(f"💾 Профиль '{name}' сохранен: {wsdl_url}")
        return profile

    def get_profile(self, name: str) -> Optional[Profile]:
        """Получить профиль и обновить время последнего использования"""
        profiles = self._load()
        if name not in profiles:
            return None
        profile = self._to_profile(name, profiles[name])
        if profile is None:
            return None
        profile.last_used = datetime.now()
        profiles[name] = self._dump(profile)
        self._save(profiles)
        return profile

    def list_profiles(self) -> List[Profile]:
        profiles = []
        for name, data in self._load().items():
            profile = self._to_profile(name, data)
            if profile is not None:
                profiles.append(profile)
        return profiles

    def delete_profile(self, name: str) -> bool:
        profiles = self._load()
        if profiles.pop(name, None) is None:
            return False
        self._save(profiles)
        logger.info(f"🗑️ Профиль '{name}' удален")
        return True

    def update_profile(self, name: str, **updates) -> bool:
        """
        Обновить поля профиля

        Returns:
            bool: False если профиль не найден
        """
        profiles = self._load()
        if name not in profiles:
            return False
        profile = self._to_profile(name, profiles[name])
        if profile is None:
            return False

        known = {key: value for key, value in updates.items() if key in Profile.model_fields and key != 'name'}
        extra = {key: value for key, value in updates.items() if key not in Profile.model_fields}
        profile = profile.model_copy(update={
            **known,
            'extra': {**profile.extra, **extra},
            'updated_at': datetime.now(),
        })
        profiles[name] = self._dump(profile)
        self._save(profiles)
        return True

    def export_profiles(self) -> str:
        """Все профили в виде JSON строки"""
        profiles = {profile.name: self._dump(profile) for profile in self.list_profiles()}
        return json.dumps(profiles, indent=2, ensure_ascii=False)

    def import_profiles(self, profiles_json: str) -> int:
        """
        Импортировать профили из JSON строки

        Returns:
            int: Количество импортированных профилей (0 при ошибке)
        """
        try:
            imported = json.loads(profiles_json)
        except json.JSONDecodeError as e:
            logger.error(f"Ошибка импорта профилей: {e}")
            return 0
        if not isinstance(imported, dict):
            logger.error("Ошибка импорта профилей: ожидается объект {имя: профиль}")
            return 0

        profiles = self._load()
        count = 0
        for name, data in imported.items():
            profile = self._to_profile(name, data if isinstance(data, dict) else {})
            if profile is None:
                continue
            profile.imported_at = datetime.now()
            profiles[name] = self._dump(profile)
            count += 1
        self._save(profiles)
        return count
