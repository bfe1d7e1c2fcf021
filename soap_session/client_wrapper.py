#!/usr/bin/env python3
"""
Client Wrapper - программный интерфейс поверх SessionCoordinator

Все методы возвращают словари вида {'success': bool, ...} вместо исключений.
"""

import time
import traceback
from typing import Any, Dict, Optional

from soap_session.profile_manager import ProfileManager
from soap_session.session_coordinator import SessionCoordinator
from soap_session.soap.wsdl import WsdlParser
from soap_session.utils.logger_setup import logger


def _error(error: Exception, **extra) -> Dict[str, Any]:
    return {
        'success': False,
        'error': str(error),
        'details': traceback.format_exc(),
        **extra
    }


class SoapClientWrapper:
    """Обертка для использования клиента как библиотеки"""

    def __init__(self,
                 session: Optional[SessionCoordinator] = None,
                 parser: Optional[WsdlParser] = None,
                 profiles: Optional[ProfileManager] = None,
                 profiles_dir: Optional[str] = None):
        self.session = session or SessionCoordinator()
        self.parser = parser or WsdlParser()
        self._profiles = profiles
        self._profiles_dir = profiles_dir

    @property
    def profiles(self) -> ProfileManager:
        # Каталог профилей создается только при первом обращении
        if self._profiles is None:
            self._profiles = ProfileManager(self._profiles_dir)
        return self._profiles

    def connect(self, wsdl_url: str, **options) -> Dict[str, Any]:
        try:
            context = self.session.connect(wsdl_url, **options)
            return {'success': True, 'context': context}
        except Exception as e:
            return _error(e)

    def authenticate(self, username: str, password: str, method: str = 'basic') -> Dict[str, Any]:
        try:
            return {'success': self.session.authenticate(username, password, method)}
        except Exception as e:
            return _error(e)

    def execute_method(self, method_name: str, parameters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        parameters = parameters or {}
        try:
            result = self.session.execute_method(method_name, parameters)
            return {'success': True, 'result': result, 'method': method_name, 'parameters': parameters}
        except Exception as e:
            return _error(e, method=method_name, parameters=parameters)

    def get_available_methods(self) -> Dict[str, Any]:
        try:
            return {'success': True, 'methods': self.session.get_available_methods()}
        except Exception as e:
            return _error(e, methods=[])

    def get_method_info(self, method_name: str) -> Dict[str, Any]:
        try:
            info = self.session.get_method_info(method_name)
            return {'success': info is not None, 'info': info}
        except Exception as e:
            return _error(e, info=None)

    def parse_wsdl(self, wsdl_url: str) -> Dict[str, Any]:
        try:
            return {'success': True, 'service_info': self.parser.parse_wsdl(wsdl_url)}
        except Exception as e:
            return _error(e)

    def save_profile(self, name: str, wsdl_url: str, **extra) -> Dict[str, Any]:
        try:
            self.profiles.save_profile(name, wsdl_url, **extra)
            return {'success': True}
        except Exception as e:
            return _error(e)

    def get_profile(self, name: str) -> Dict[str, Any]:
        try:
            profile = self.profiles.get_profile(name)
            return {'success': profile is not None, 'profile': profile}
        except Exception as e:
            return _error(e, profile=None)

    def list_profiles(self) -> Dict[str, Any]:
        try:
            return {'success': True, 'profiles': self.profiles.list_profiles()}
        except Exception as e:
            return _error(e, profiles=[])

    def connect_with_retry(self, wsdl_url: str, max_retries: int = 3, **options) -> Dict[str, Any]:
        """
        Подключение с повторными попытками и экспоненциальной задержкой (1с, 2с, 4с...)

        Args:
            wsdl_url: Адрес WSDL
            max_retries: Количество попыток

        Returns:
            Результат первой успешной попытки или описание последней ошибки
        """
        last_error = None
        for attempt in range(max_retries):
            result = self.connect(wsdl_url, **options)
            if result['success']:
                return result

            last_error = result.get('error')
            logger.warning(f"⚠️ Попытка подключения {attempt + 1}/{max_retries} не удалась: {last_error}")
            if attempt < max_retries - 1:
                time.sleep(2 ** attempt)

        logger.error(f"❌ Все попытки подключения исчерпаны ({max_retries})")
        return {
            'success': False,
            'error': f"Failed after {max_retries} attempts. Last error: {last_error}"
        }

    def execute_with_validation(self, method_name: str, parameters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Проверить, что метод существует, и выполнить его"""
        if not self.get_method_info(method_name)['success']:
            return {'success': False, 'error': f"Method '{method_name}' not found"}
        result = self.execute_method(method_name, parameters)
        if not result['success']:
            result['suggestion'] = 'Check method parameters and service availability'
        return result

    def get_session_cookies(self) -> Optional[str]:
        return self.session.get_session_cookies()

    def clear_session_cookies(self, domain: Optional[str] = None) -> Dict[str, Any]:
        try:
            self.session.clear_session_cookies(domain)
            return {'success': True}
        except Exception as e:
            return _error(e)

    def list_all_cookies(self) -> Dict[str, Any]:
        try:
            return {'success': True, 'cookies': self.session.list_all_cookies()}
        except Exception as e:
            return _error(e, cookies={})

    def add_cookies_for_domain(self, domain: str, cookie_string: str) -> bool:
        try:
            return self.session.add_cookies_for_domain(domain, cookie_string)
        except Exception as e:
            logger.error(f"Не удалось добавить cookies: {e}")
            return False

    def get_connection_status(self) -> Dict[str, Any]:
        return self.session.connection_status()

    def disconnect(self) -> Dict[str, Any]:
        self.session.disconnect()
        return {'success': True}
