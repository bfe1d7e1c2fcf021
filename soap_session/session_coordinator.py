#!/usr/bin/env python3
"""
Session Coordinator - управление cookies SOAP сессии с привязкой к домену

Связывает хранилище cookies, извлечение cookies из ответов и определение
домена подключения: перед подключением подставляет сохраненные cookies
домена WSDL, после каждого вызова сохраняет новые cookies и применяет их
к следующим запросам.
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

from soap_session.cookie_extractor import (
    EXTRACTION_STRATEGIES,
    ResponseChannels,
    extract_cookies,
    set_cookie_values,
)
from soap_session.cookie_store import CookieJarEntry, CookieStore
from soap_session.domain_resolver import (
    ConnectionContext,
    DomainTransition,
    detect_domain_transition,
    domain_of,
    normalize_domain,
)
from soap_session.exceptions import InvalidInput, InvalidUrl, NotConnected, RpcError, SoapConnectionError
from soap_session.interfaces.connection_interface import SoapConnectionInterface
from soap_session.models import MethodInfo
from soap_session.soap.client import SoapClient
from soap_session.soap.security import BasicAuthSecurity, WSSecurity
from soap_session.utils.logger_setup import logger

COOKIE_HEADER = 'Cookie'

ClientFactory = Callable[[str, Dict[str, Any]], SoapConnectionInterface]


def _payload(call_result: Any) -> Any:
    # Результат вызова: объект с полем result или словарь {'result': ...}
    if isinstance(call_result, Mapping):
        return call_result.get('result')
    return getattr(call_result, 'result', call_result)


class ApplyStatus(Enum):
    """Результат применения cookies к подключению"""
    NO_CONNECTION = 'no_connection'
    NO_DOMAIN = 'no_domain'
    NO_COOKIES = 'no_cookies'
    APPLIED = 'applied'


class SessionCoordinator:
    """Сессия SOAP клиента с хранилищем cookies по доменам"""

    def __init__(self,
                 client_factory: Optional[ClientFactory] = None,
                 cookie_store: Optional[CookieStore] = None,
                 connection_options: Optional[Dict[str, Any]] = None,
                 extraction_strategies=EXTRACTION_STRATEGIES,
                 on_domain_transition: Optional[Callable[[DomainTransition], None]] = None):
        self.client_factory: ClientFactory = client_factory or SoapClient.create
        self.cookie_store = cookie_store if cookie_store is not None else CookieStore()
        self.connection_options = dict(connection_options or {})
        self.extraction_strategies = extraction_strategies
        self.on_domain_transition = on_domain_transition

        # Состояние
        self.client: Optional[SoapConnectionInterface] = None
        self.context: Optional[ConnectionContext] = None
        self.last_transition: Optional[DomainTransition] = None
        self.authenticated = False

    @property
    def current_domain(self) -> Optional[str]:
        return self.context.current_domain if self.context else None

    @property
    def is_connected(self) -> bool:
        return self.client is not None

    def connect(self, wsdl_url: str, **options) -> ConnectionContext:
        """
        Подключиться к SOAP сервису

        Сначала cookies подбираются по домену WSDL и передаются в заголовках
        загрузки WSDL. После создания клиента домен пересчитывается по адресу
        сервиса (он может отличаться от домена WSDL), и cookies применяются
        повторно уже для него.

        Args:
            wsdl_url: Адрес WSDL документа
            **options: Дополнительные опции создания клиента

        Returns:
            ConnectionContext нового подключения

        Raises:
            InvalidUrl: некорректный адрес WSDL
            SoapConnectionError: клиента создать не удалось
        """
        wsdl_domain = domain_of(wsdl_url)
        previous_domain = self.current_domain

        client_options = {**self.connection_options, **options}
        existing_cookies = self.cookie_store.render(wsdl_domain)
        if existing_cookies:
            logger.info(f"🍪 Предзагрузка cookies для домена {wsdl_domain}: {existing_cookies}")
            client_options['wsdl_headers'] = {
                COOKIE_HEADER: existing_cookies,
                **(client_options.get('wsdl_headers') or {}),
            }

        try:
            client = self.client_factory(wsdl_url, client_options)
            service_url = client.service_url
            service_domain = domain_of(service_url)
        except InvalidUrl as e:
            self._reset_connection()
            logger.error(f"❌ Некорректный адрес сервиса в WSDL {wsdl_url}: {e}")
            raise SoapConnectionError(f"Некорректный адрес сервиса в WSDL {wsdl_url}: {e}") from e
        except Exception as e:
            self._reset_connection()
            logger.error(f"❌ Не удалось подключиться к SOAP сервису {wsdl_url}: {e}")
            raise SoapConnectionError(f"Не удалось подключиться к SOAP сервису {wsdl_url}: {e}") from e

        logger.info(f"Подключено к SOAP сервису: {service_url}")
        logger.info(f"Домен: {service_domain}")

        self.client = client
        self.authenticated = False
        self.context = ConnectionContext(wsdl_url=wsdl_url, service_url=service_url,
                                         current_domain=service_domain)
        self.last_transition = detect_domain_transition(previous_domain, service_domain)

        # Повторно для домена сервиса, он может отличаться от домена WSDL
        self.apply_cookies_for_domain(service_domain)

        # Обработчик вызывается, когда новое подключение уже полностью установлено
        if self.last_transition:
            logger.warning(f"⚠️ Смена домена: {self.last_transition}")
            if self.on_domain_transition:
                self.on_domain_transition(self.last_transition)
        return self.context

    def _reset_connection(self) -> None:
        self.client = None
        self.context = None
        self.authenticated = False

    def disconnect(self) -> None:
        """Закрыть подключение; сохраненные cookies остаются"""
        self._reset_connection()
        logger.info("🔌 Подключение закрыто")

    def apply_cookies_for_domain(self, domain: Optional[str]) -> ApplyStatus:
        """
        Применить сохраненные cookies домена к активному подключению

        Если для домена cookies нет, уже установленный заголовок Cookie не трогается.
        """
        if self.client is None:
            logger.warning("⚠️ Нельзя применить cookies: нет подключения")
            return ApplyStatus.NO_CONNECTION
        if not domain:
            logger.warning("⚠️ Нельзя применить cookies: домен не определен")
            return ApplyStatus.NO_DOMAIN

        cookie_string = self.cookie_store.render(domain)
        if not cookie_string:
            logger.info(f"📭 Сохраненных cookies для домена {domain} нет")
            return ApplyStatus.NO_COOKIES

        self.client.clear_http_header(COOKIE_HEADER)
        self.client.add_http_header(COOKIE_HEADER, cookie_string)
        logger.info(f"🍪 Применены cookies для домена {domain}: {cookie_string}")
        return ApplyStatus.APPLIED

    def execute_method(self, method_name: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Выполнить SOAP метод и сохранить полученные cookies

        Returns:
            Результат вызова

        Raises:
            NotConnected: нет активного подключения
            RpcError: вызов завершился ошибкой (cookies не меняются)
        """
        if self.client is None:
            raise NotConnected()

        try:
            call_result = self.client.invoke(method_name, params or {})
        except Exception as e:
            logger.error(f"❌ Ошибка выполнения метода {method_name}: {e}")
            raise RpcError(method_name, e) from e

        channels = ResponseChannels(call_result=call_result,
                                    last_response_headers=self.client.last_response_headers)
        extracted = extract_cookies(channels, self.extraction_strategies)
        if extracted and self.current_domain:
            merged = self.cookie_store.merge(self.current_domain, extracted.cookies)
            logger.info(f"Cookies сессии для домена {self.current_domain}: "
                        f"{'; '.join(entry.render() for entry in merged)}")

        self.apply_cookies_for_domain(self.current_domain)
        return _payload(call_result)

    def authenticate(self, username: str, password: str, auth_method: str = 'basic') -> bool:
        """
        Настроить аутентификацию

        Args:
            username: Имя пользователя
            password: Пароль
            auth_method: basic, wsse или cookie

        Returns:
            bool: True если аутентификация настроена
        """
        if self.client is None:
            raise NotConnected()

        try:
            if auth_method == 'basic':
                self.client.set_security(BasicAuthSecurity(username, password))
                logger.info("Basic аутентификация настроена")
            elif auth_method == 'wsse':
                self.client.set_security(WSSecurity(username, password))
                logger.info("WS-Security аутентификация настроена")
            elif auth_method == 'cookie':
                if not self._authenticate_with_cookie(username, password):
                    return False
                logger.info("Cookie аутентификация выполнена")
            else:
                logger.warning(f"⚠️ Неизвестный способ аутентификации: {auth_method}")
                return False
        except Exception as e:
            logger.error(f"❌ Ошибка аутентификации: {e}")
            return False

        self.authenticated = True
        return True

    def _authenticate_with_cookie(self, username: str, password: str) -> bool:
        auth_url = f"{self.context.service_url.rstrip('/')}/auth"
        self.client.post_json(auth_url, {'username': username, 'password': password})

        cookies = set_cookie_values(self.client.last_response_headers)
        if not cookies:
            logger.warning(f"⚠️ Сервис {auth_url} не вернул cookies")
            return False

        self.cookie_store.merge(self.current_domain, cookies)
        self.apply_cookies_for_domain(self.current_domain)
        return True

    def get_session_cookies(self) -> Optional[str]:
        """Cookies текущего домена в виде заголовка или None"""
        if not self.current_domain:
            return None
        return self.cookie_store.render(self.current_domain)

    def list_all_cookies(self) -> Dict[str, List[str]]:
        return {
            domain: [entry.render() for entry in cookies]
            for domain, cookies in self.cookie_store.list().items()
        }

    def clear_session_cookies(self, domain: Optional[str] = None) -> None:
        """Удалить cookies домена (по умолчанию текущего)"""
        target_domain = normalize_domain(domain) or self.current_domain
        if not target_domain:
            return
        self.cookie_store.delete(target_domain)
        logger.info(f"🧹 Cookies очищены для домена: {target_domain}")

    def add_cookies_for_domain(self, domain: str, cookie_string: str) -> bool:
        """
        Вручную задать cookies домена

        Строка вида "name1=value1; name2=value2" делится по ';', атрибуты
        не отбрасываются. Существующие cookies домена заменяются целиком.

        Raises:
            InvalidInput: пустой домен или строка cookies
        """
        domain = normalize_domain(domain)
        if not domain or not cookie_string or not cookie_string.strip():
            raise InvalidInput("Необходимо указать домен и строку cookies")

        entries = [CookieJarEntry.parse(pair) for pair in cookie_string.split(';')]
        self.cookie_store.set_all(domain, [entry for entry in entries if entry is not None and entry.name])

        if domain == self.current_domain and self.client is not None:
            self.apply_cookies_for_domain(domain)

        logger.info(f"✅ Добавлены cookies для домена {domain}: {cookie_string}")
        return True

    def get_available_methods(self) -> List[MethodInfo]:
        if self.client is None:
            logger.error("Нет подключения к сервису")
            return []
        return self.client.get_available_methods()

    def get_method_info(self, method_name: str) -> Optional[MethodInfo]:
        if self.client is None:
            return None
        return self.client.get_method_info(method_name)

    def connection_status(self) -> Dict[str, Any]:
        return {
            'connected': self.is_connected,
            'authenticated': self.authenticated,
            'service_url': self.context.service_url if self.context else None,
            'wsdl_url': self.context.wsdl_url if self.context else None,
            'current_domain': self.current_domain,
            'session_cookies': self.get_session_cookies(),
        }

    def describe(self) -> List[MethodInfo]:
        """Вывести описание текущего подключения и список методов"""
        if self.client is None:
            logger.error("Нет подключения к сервису")
            return []

        print("\n=== SOAP Service Description ===")
        print(f"WSDL URL: {self.context.wsdl_url}")
        print(f"Service URL: {self.context.service_url}")
        print(f"Domain: {self.current_domain}")

        current_cookies = self.get_session_cookies()
        if current_cookies:
            print(f"🍪 Активные cookies для домена: {current_cookies}")
        else:
            print("📭 Для домена нет активных cookies")

        all_cookies = self.list_all_cookies()
        if all_cookies:
            print("\n🗂️  Все сохраненные cookies по доменам:")
            for domain, cookies in all_cookies.items():
                print(f"  {domain}: {'; '.join(cookies)}")

        methods = self.get_available_methods()
        print(f"\nДоступные методы ({len(methods)}):")
        for method in methods:
            print(f"  - {method.name}")
        return methods
