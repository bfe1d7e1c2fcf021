#!/usr/bin/env python3
"""
CLI Interface - интерактивный режим и команды командной строки SOAP клиента

Команды:
- connect / methods / execute / parse - работа с сервисом
- cookies - просмотр и управление cookies сессии
- profile - сохраненные профили подключений
- call - разовый вызов с cookies из файла
- interactive (или запуск без аргументов) - меню
"""

import argparse
import json
import os
from getpass import getpass
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from soap_session.cli.config_manager import ConfigManager
from soap_session.cli.constants import Messages
from soap_session.cli.display_formatter import DisplayFormatter
from soap_session.cli.menus import MainMenu
from soap_session.client_wrapper import SoapClientWrapper
from soap_session.domain_resolver import domain_of, normalize_domain
from soap_session.exceptions import SoapSessionError
from soap_session.factories import create_instance_from_config
from soap_session.session_coordinator import SessionCoordinator
from soap_session.soap.wsdl import WsdlParser
from soap_session.utils.logger_setup import logger, print_and_log

AUTH_METHODS = {"1": "basic", "2": "wsse", "3": "cookie"}
YES_ANSWERS = ("y", "yes", "д", "да")


class SoapCLI:
    """
    CLI интерфейс SOAP клиента

    Зависимости (конфигурация, обертка клиента) передаются через конструктор,
    по умолчанию создаются из config.yaml.
    """

    def __init__(self,
                 config_manager: Optional[ConfigManager] = None,
                 wrapper: Optional[SoapClientWrapper] = None):
        self.config_manager = config_manager or ConfigManager()
        self.formatter = DisplayFormatter()
        self._wrapper = wrapper

    @property
    def wrapper(self) -> SoapClientWrapper:
        if self._wrapper is None:
            if not self.config_manager.is_loaded():
                self.config_manager.load_config()
            options = self.config_manager.connection_options()
            self._wrapper = SoapClientWrapper(
                session=SessionCoordinator(connection_options=options),
                parser=WsdlParser(timeout=options['timeout']),
                profiles_dir=self.config_manager.get('profiles_dir'),
            )
        return self._wrapper

    @property
    def session(self) -> SessionCoordinator:
        return self.wrapper.session

    # Подключение

    def connect(self, wsdl_url: Optional[str] = None, save_as: Optional[str] = None,
                ask_auth: bool = True) -> bool:
        """Подключиться к сервису, показать его описание и предложить аутентификацию"""
        wsdl_url = wsdl_url or input("Введите WSDL URL: ").strip()
        if not wsdl_url:
            print(self.formatter.format_error("WSDL URL не указан"))
            return False

        print(self.formatter.format_info(f"Подключение к {wsdl_url}..."))
        retries = int(self.config_manager.get('connect_retries', 1))
        result = self.wrapper.connect_with_retry(wsdl_url, max_retries=max(retries, 1))
        if not result['success']:
            print(self.formatter.format_error(Messages.CONNECTION_FAILED, result['error']))
            return False

        print(self.formatter.format_success(f"{Messages.CONNECTED}: {result['context'].service_url}"))
        if save_as:
            self.wrapper.save_profile(save_as, wsdl_url)
            print(self.formatter.format_success(f"Профиль '{save_as}' сохранен"))

        self.session.describe()
        if ask_auth:
            self.prompt_for_auth()
        return True

    def _ensure_connected(self, wsdl_url: Optional[str] = None) -> bool:
        if wsdl_url:
            return self.connect(wsdl_url, ask_auth=False)
        if not self.session.is_connected:
            print(self.formatter.format_error("Сначала подключитесь к сервису"))
            return False
        return True

    def prompt_for_auth(self) -> bool:
        """
        Спросить у пользователя данные аутентификации.
        Значения по умолчанию берутся из .env (SOAP_USERNAME, SOAP_PASSWORD).
        """
        answer = input("Требуется аутентификация? (y/N): ").strip().lower()
        if answer not in YES_ANSWERS:
            return False

        print(self.formatter.format_section_header("Способ аутентификации"))
        print("  1. Basic")
        print("  2. WS-Security")
        print("  3. Cookie")
        method = AUTH_METHODS.get(input("Выберите способ [1]: ").strip() or "1")
        if method is None:
            print(Messages.INVALID_CHOICE)
            return False

        load_dotenv()
        default_username = os.getenv("SOAP_USERNAME", "")
        username = input(f"Имя пользователя [{default_username}]: ").strip() or default_username
        password = getpass("Пароль (Enter - значение из .env): ") or os.getenv("SOAP_PASSWORD", "")
        if not username:
            print(self.formatter.format_error("Имя пользователя не указано"))
            return False

        result = self.wrapper.authenticate(username, password, method)
        if result['success']:
            print(self.formatter.format_success(f"Аутентификация ({method}) настроена"))
            return True
        print(self.formatter.format_error("Аутентификация не выполнена", result.get('error')))
        return False

    # Методы сервиса

    def list_methods(self, wsdl_url: Optional[str] = None) -> bool:
        if wsdl_url and not self._ensure_connected(wsdl_url):
            return False
        result = self.wrapper.get_available_methods()
        print(self.formatter.format_methods(result['methods']))
        return result['success'] and bool(result['methods'])

    @staticmethod
    def _parse_json(text: Optional[str], what: str) -> Optional[Dict[str, Any]]:
        """Разобрать JSON объект; None при ошибке"""
        if not text or not text.strip():
            return {}
        try:
            value = json.loads(text)
        except json.JSONDecodeError as e:
            print(DisplayFormatter.format_error(f"{Messages.INVALID_JSON} ({what})", e))
            return None
        if not isinstance(value, dict):
            print(DisplayFormatter.format_error(f"{Messages.INVALID_JSON} ({what}): ожидается объект"))
            return None
        return value

    def _prompt_method(self) -> Optional[str]:
        methods = self.session.get_available_methods()
        print(self.formatter.format_methods(methods))
        if not methods:
            return None
        name = input("Имя метода или номер: ").strip()
        if name.isdigit() and 0 < int(name) <= len(methods):
            return methods[int(name) - 1].name
        return name or None

    def _prompt_params(self, method_name: str) -> Optional[str]:
        info = self.session.get_method_info(method_name)
        if info is not None:
            print(self.formatter.format_section_header(f"Метод {info.name}"))
            print(f"Входные параметры: {self.formatter.format_result(info.input)}")
        return input("Параметры (JSON, Enter - без параметров): ").strip()

    def execute(self, wsdl_url: Optional[str] = None, method_name: Optional[str] = None,
                params_json: Optional[str] = None) -> bool:
        """Выполнить метод; недостающие имя и параметры запрашиваются у пользователя"""
        if not self._ensure_connected(wsdl_url):
            return False

        method_name = method_name or self._prompt_method()
        if not method_name:
            print(self.formatter.format_error("Метод не указан"))
            return False
        if params_json is None:
            params_json = self._prompt_params(method_name)
        params = self._parse_json(params_json, "параметры")
        if params is None:
            return False

        print(self.formatter.format_info(f"Выполнение {method_name}..."))
        result = self.wrapper.execute_method(method_name, params)
        if not result['success']:
            print(self.formatter.format_error(f"Ошибка выполнения {method_name}", result['error']))
            return False

        print(self.formatter.format_success(Messages.METHOD_EXECUTED))
        print(self.formatter.format_result(result['result']))

        cookies = self.session.get_session_cookies()
        if cookies:
            print(Messages.COOKIES_CAPTURED)
            print(self.formatter.format_session_cookies(self.session.current_domain, cookies))
        return True

    def parse_wsdl(self, wsdl_url: Optional[str] = None) -> bool:
        wsdl_url = wsdl_url or input("Введите WSDL URL: ").strip()
        if not wsdl_url:
            print(self.formatter.format_error("WSDL URL не указан"))
            return False
        result = self.wrapper.parse_wsdl(wsdl_url)
        if not result['success']:
            print(self.formatter.format_error("Ошибка разбора WSDL", result['error']))
            return False
        self.wrapper.parser.display_service_info(result['service_info'])
        return True

    # Cookies

    def view_cookies(self) -> bool:
        cookies = self.session.get_session_cookies()
        if not cookies:
            print(self.formatter.format_warning(Messages.NO_COOKIES))
            return False
        print(self.formatter.format_session_cookies(self.session.current_domain, cookies))
        return True

    def view_all_cookies(self) -> bool:
        all_cookies = self.session.list_all_cookies()
        print(self.formatter.format_all_cookies(all_cookies))
        return bool(all_cookies)

    def add_cookies(self, domain: Optional[str] = None, cookie_string: Optional[str] = None) -> bool:
        default_domain = self.session.current_domain or ""
        if domain is None:
            domain = input(f"Домен [{default_domain}]: ").strip() or default_domain
        if cookie_string is None:
            cookie_string = input("Cookies (name1=value1; name2=value2): ").strip()

        if self.wrapper.add_cookies_for_domain(domain, cookie_string):
            print(self.formatter.format_success(f"Cookies для домена {normalize_domain(domain)} сохранены"))
            return True
        print(self.formatter.format_error("Необходимо указать домен и строку cookies"))
        return False

    def clear_cookies(self, domain: Optional[str] = None) -> bool:
        target = normalize_domain(domain) or self.session.current_domain
        if not target:
            print(self.formatter.format_warning(Messages.NO_CURRENT_DOMAIN))
            return False
        self.wrapper.clear_session_cookies(target)
        print(self.formatter.format_success(f"Cookies домена {target} очищены"))
        return True

    # Профили

    def list_profiles(self) -> bool:
        result = self.wrapper.list_profiles()
        print(self.formatter.format_profiles(result['profiles']))
        return bool(result['profiles'])

    def connect_profile(self, name: Optional[str] = None) -> bool:
        if name is None:
            self.list_profiles()
            name = input("Имя профиля: ").strip()
        result = self.wrapper.get_profile(name)
        if not result['success']:
            print(self.formatter.format_error(f"Профиль '{name}' не найден"))
            return False
        return self.connect(result['profile'].wsdl_url)

    def save_current_profile(self, name: Optional[str] = None) -> bool:
        context = self.session.context
        if context is None:
            print(self.formatter.format_error("Сначала подключитесь к сервису"))
            return False
        name = name or input("Имя профиля: ").strip()
        if not name:
            print(self.formatter.format_error("Имя профиля не указано"))
            return False
        result = self.wrapper.save_profile(name, context.wsdl_url)
        if result['success']:
            print(self.formatter.format_success(f"Профиль '{name}' сохранен"))
        return result['success']

    def delete_profile(self, name: Optional[str] = None) -> bool:
        name = name or input("Имя профиля: ").strip()
        if self.wrapper.profiles.delete_profile(name):
            print(self.formatter.format_success(f"Профиль '{name}' удален"))
            return True
        print(self.formatter.format_error(f"Профиль '{name}' не найден"))
        return False

    # Разовый вызов

    def _create_cookie_storage(self, cookie_file: Optional[str]):
        storage_config = self.config_manager.get('cookie_storage')
        if cookie_file:
            return create_instance_from_config(storage_config, file_path=cookie_file)
        return create_instance_from_config(storage_config)

    def call(self, wsdl_url: str, method_name: str, params_json: Optional[str] = None,
             cookie_file: Optional[str] = None, headers_json: Optional[str] = None) -> bool:
        """
        Разовый вызов метода.

        Cookies читаются из хранилища до подключения (по домену WSDL и
        домену сервиса) и сохраняются обратно после вызова.
        """
        params = self._parse_json(params_json, "параметры")
        headers = self._parse_json(headers_json, "заголовки")
        if params is None or headers is None:
            return False

        storage = self._create_cookie_storage(cookie_file)
        try:
            wsdl_domain = domain_of(wsdl_url)
        except SoapSessionError as e:
            print(self.formatter.format_error("Некорректный WSDL URL", e))
            return False

        stored = storage.load_cookies(wsdl_domain)
        if stored:
            self.session.add_cookies_for_domain(wsdl_domain, stored)

        if not self.connect(wsdl_url, ask_auth=False):
            return False

        service_domain = self.session.current_domain
        if service_domain not in self.session.cookie_store:
            stored = storage.load_cookies(service_domain)
            if stored:
                self.session.add_cookies_for_domain(service_domain, stored)

        for name, value in headers.items():
            self.session.client.add_http_header(name, str(value))

        if not self.execute(method_name=method_name, params_json=json.dumps(params)):
            return False

        cookies = self.session.get_session_cookies()
        if cookies:
            if storage.save_cookies(service_domain, cookies):
                print_and_log(f"💾 Cookies домена {service_domain} сохранены в хранилище")
            else:
                print_and_log(f"❌ Не удалось сохранить cookies домена {service_domain}", "ERROR")
        return True

    # Команды

    def cookies_command(self, view: bool = False, view_all: bool = False,
                        clear: bool = False, domain: Optional[str] = None) -> bool:
        if clear:
            return self.clear_cookies(domain)
        if view_all:
            return self.view_all_cookies()
        if view:
            domain = normalize_domain(domain)
            if domain:
                cookies = self.session.cookie_store.render(domain)
                if not cookies:
                    print(self.formatter.format_warning(Messages.NO_COOKIES))
                    return False
                print(self.formatter.format_session_cookies(domain, cookies))
                return True
            return self.view_cookies()
        return self.view_all_cookies()

    def profile_command(self, list_all: bool = False, connect: Optional[str] = None,
                        delete: Optional[str] = None) -> bool:
        if connect:
            return self.connect_profile(connect)
        if delete:
            return self.delete_profile(delete)
        return self.list_profiles()

    def run(self) -> bool:
        """Запуск интерактивного режима"""
        if not self.config_manager.load_config():
            print(self.formatter.format_error("Не удалось загрузить config.yaml"))
            return False

        print(self.formatter.format_header(Messages.MAIN_TITLE))
        try:
            MainMenu(self).run()
        except KeyboardInterrupt:
            print(f"\n{Messages.INTERRUPTED}")
        except Exception as e:
            logger.exception(e)
            print(f"\n{Messages.CRITICAL_ERROR.format(error=e)}")
            return False
        return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="soap-client",
        description="SOAP клиент с хранением cookies сессии по доменам",
    )
    subparsers = parser.add_subparsers(dest="command")

    connect_parser = subparsers.add_parser("connect", help="Подключиться к сервису")
    connect_parser.add_argument("-u", "--url", required=True, help="WSDL URL")
    connect_parser.add_argument("-s", "--save", metavar="NAME", help="Сохранить как профиль")

    profile_parser = subparsers.add_parser("profile", help="Профили подключений")
    profile_group = profile_parser.add_mutually_exclusive_group()
    profile_group.add_argument("-l", "--list", action="store_true", help="Список профилей")
    profile_group.add_argument("-c", "--connect", metavar="NAME", help="Подключиться по профилю")
    profile_group.add_argument("-d", "--delete", metavar="NAME", help="Удалить профиль")

    methods_parser = subparsers.add_parser("methods", help="Список методов сервиса")
    methods_parser.add_argument("-u", "--url", required=True, help="WSDL URL")

    execute_parser = subparsers.add_parser("execute", help="Выполнить метод")
    execute_parser.add_argument("-u", "--url", required=True, help="WSDL URL")
    execute_parser.add_argument("-m", "--method", help="Имя метода")
    execute_parser.add_argument("-p", "--params", help="Параметры в JSON")

    cookies_parser = subparsers.add_parser("cookies", help="Cookies сессии")
    cookies_group = cookies_parser.add_mutually_exclusive_group()
    cookies_group.add_argument("-v", "--view", action="store_true", help="Cookies домена")
    cookies_group.add_argument("-a", "--all", action="store_true", help="Cookies всех доменов")
    cookies_group.add_argument("-c", "--clear", action="store_true", help="Очистить cookies домена")
    cookies_parser.add_argument("domain", nargs="?", help="Домен")

    parse_parser = subparsers.add_parser("parse", help="Разобрать WSDL")
    parse_parser.add_argument("-u", "--url", required=True, help="WSDL URL")

    call_parser = subparsers.add_parser("call", help="Разовый вызов с cookies из файла")
    call_parser.add_argument("-w", "--wsdl", required=True, help="WSDL URL")
    call_parser.add_argument("-m", "--method", required=True, help="Имя метода")
    call_parser.add_argument("-p", "--params", help="Параметры в JSON")
    call_parser.add_argument("-c", "--cookies", metavar="COOKIE_FILE", help="JSON файл cookies")
    call_parser.add_argument("-H", "--headers", help="Дополнительные HTTP заголовки в JSON")

    subparsers.add_parser("interactive", help="Интерактивный режим")
    return parser


def run_cli(argv=None) -> int:
    """Основная функция запуска CLI"""
    args = build_parser().parse_args(argv)
    cli = SoapCLI()

    if args.command in (None, "interactive"):
        return 0 if cli.run() else 1

    cli.config_manager.load_config()
    try:
        if args.command == "connect":
            ok = cli.connect(args.url, save_as=args.save)
        elif args.command == "profile":
            ok = cli.profile_command(args.list, args.connect, args.delete)
        elif args.command == "methods":
            ok = cli.list_methods(args.url)
        elif args.command == "execute":
            ok = cli.execute(args.url, args.method, args.params)
        elif args.command == "cookies":
            ok = cli.cookies_command(args.view, args.all, args.clear, args.domain)
        elif args.command == "parse":
            ok = cli.parse_wsdl(args.url)
        else:
            ok = cli.call(args.wsdl, args.method, args.params, args.cookies, args.headers)
    except KeyboardInterrupt:
        print(f"\n{Messages.INTERRUPTED}")
        return 130
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(run_cli())
