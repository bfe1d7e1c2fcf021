#!/usr/bin/env python3
"""
Тесты для CLI: конфигурация, меню и команды
"""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import MagicMock, patch

from soap_session.cli.config_manager import ConfigManager
from soap_session.cli.constants import Config
from soap_session.cli.menus import CookiesMenu, MainMenu
from soap_session.cli_interface import SoapCLI, build_parser, run_cli
from soap_session.client_wrapper import SoapClientWrapper
from soap_session.session_coordinator import SessionCoordinator

from fakes import FakeClientFactory

WSDL_URL = "https://calc.example/?wsdl"


class TestConfigManager(unittest.TestCase):

    def test_missing_file_uses_defaults(self):
        manager = ConfigManager("/nonexistent/config.yaml")
        self.assertTrue(manager.load_config())
        self.assertEqual(manager.get('request_timeout'), 30)
        self.assertEqual(manager.get('unknown', 'fallback'), 'fallback')
        self.assertEqual(manager.get('cookie_storage'), Config.DEFAULTS['cookie_storage'])

    def test_values_from_file(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.yaml"
            config_path.write_text("request_timeout: 5\nrequest_delay_sec: 0.25\n", encoding="utf-8")
            manager = ConfigManager(str(config_path))

            self.assertTrue(manager.load_config())
            self.assertEqual(manager.connection_options(), {'timeout': 5.0, 'request_delay_sec': 0.25})

    def test_broken_file(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.yaml"
            config_path.write_text("request_timeout: [1,\n", encoding="utf-8")
            manager = ConfigManager(str(config_path))

            self.assertFalse(manager.load_config())
            self.assertEqual(manager.get('request_timeout'), 30)


class CLITestCase(unittest.TestCase):
    """Общая настройка: CLI с фейковым SOAP подключением и временными файлами"""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.factory = FakeClientFactory({
            WSDL_URL: {
                'service_url': "https://api.calc.example/svc",
                'responses': {'Add': [{'result': {'AddResult': '5'}, 'set_cookie': ["s=2; Path=/"]}]},
                'methods': ['Add'],
            },
        })
        self.config = ConfigManager(str(Path(self.temp_dir.name) / "config.yaml"))
        self.config.load_config()
        wrapper = SoapClientWrapper(session=SessionCoordinator(client_factory=self.factory),
                                    parser=MagicMock(), profiles_dir=self.temp_dir.name)
        self.cli = SoapCLI(config_manager=self.config, wrapper=wrapper)

    def tearDown(self):
        self.temp_dir.cleanup()

    def run_quietly(self, func, *args, **kwargs):
        output = io.StringIO()
        with redirect_stdout(output):
            result = func(*args, **kwargs)
        return result, output.getvalue()


class TestSoapCLI(CLITestCase):

    def test_connect_without_auth(self):
        ok, output = self.run_quietly(self.cli.connect, WSDL_URL, ask_auth=False)
        self.assertTrue(ok)
        self.assertIn("api.calc.example", output)
        self.assertEqual(self.cli.session.current_domain, "api.calc.example")

    @patch("builtins.input", return_value="n")
    def test_connect_saves_profile(self, mock_input):
        ok, _ = self.run_quietly(self.cli.connect, WSDL_URL, save_as="calc")
        self.assertTrue(ok)
        self.assertEqual(self.cli.wrapper.profiles.get_profile("calc").wsdl_url, WSDL_URL)

    def test_connect_failure(self):
        ok, output = self.run_quietly(self.cli.connect, "https://unknown.example/?wsdl", ask_auth=False)
        self.assertFalse(ok)
        self.assertIn("Не удалось подключиться", output)

    def test_execute_shows_captured_cookies(self):
        self.run_quietly(self.cli.connect, WSDL_URL, ask_auth=False)

        ok, output = self.run_quietly(self.cli.execute, method_name="Add", params_json='{"a": 2, "b": 3}')

        self.assertTrue(ok)
        self.assertIn('"AddResult": "5"', output)
        self.assertIn("s=2", output)

    def test_execute_invalid_json(self):
        self.run_quietly(self.cli.connect, WSDL_URL, ask_auth=False)
        ok, output = self.run_quietly(self.cli.execute, method_name="Add", params_json="{oops")
        self.assertFalse(ok)
        self.assertIn("Некорректные JSON параметры", output)

    def test_execute_not_connected(self):
        ok, _ = self.run_quietly(self.cli.execute, method_name="Add", params_json="{}")
        self.assertFalse(ok)

    @patch("soap_session.cli_interface.getpass", return_value="")
    @patch("soap_session.cli_interface.load_dotenv")
    @patch("builtins.input", side_effect=["y", "2", ""])
    def test_auth_prompt_uses_env_defaults(self, mock_input, mock_dotenv, mock_getpass):
        self.run_quietly(self.cli.connect, WSDL_URL, ask_auth=False)

        with patch.dict(os.environ, {"SOAP_USERNAME": "env-user", "SOAP_PASSWORD": "env-pass"}):
            ok, _ = self.run_quietly(self.cli.prompt_for_auth)

        self.assertTrue(ok)
        security = self.factory.created[0].security
        self.assertEqual(security.username, "env-user")
        mock_dotenv.assert_called_once_with()

    @patch("builtins.input", side_effect=["x.example", "k=v; t=1"])
    def test_add_and_view_cookies(self, mock_input):
        ok, _ = self.run_quietly(self.cli.add_cookies)
        self.assertTrue(ok)

        ok, output = self.run_quietly(self.cli.cookies_command, view=True, domain="X.Example")
        self.assertTrue(ok)
        self.assertIn("k=v; t=1", output)

    def test_clear_without_domain(self):
        ok, _ = self.run_quietly(self.cli.clear_cookies)
        self.assertFalse(ok)

    def test_clear_with_mixed_case_domain(self):
        """Домен для очистки приводится к тому же виду, что и при добавлении"""
        self.run_quietly(self.cli.add_cookies, "X.Example", "k=v")

        ok, output = self.run_quietly(self.cli.cookies_command, clear=True, domain=" X.Example ")

        self.assertTrue(ok)
        self.assertIn("x.example", output)
        self.assertEqual(self.cli.session.list_all_cookies(), {})

    def test_call_reads_and_saves_cookie_file(self):
        cookie_file = Path(self.temp_dir.name) / "cookies.json"
        cookie_file.write_text(json.dumps({
            "api.calc.example": {"cookies": "s=1; other=x", "last_update": "2026-01-01T00:00:00"},
        }), encoding="utf-8")

        ok, _ = self.run_quietly(self.cli.call, WSDL_URL, "Add", '{"a": 1}', str(cookie_file),
                                 '{"X-Trace": "abc"}')

        self.assertTrue(ok)
        client = self.factory.created[0]
        self.assertEqual(client.sent_headers[0]["Cookie"], "s=1; other=x")
        self.assertEqual(client.sent_headers[0]["X-Trace"], "abc")
        saved = json.loads(cookie_file.read_text(encoding="utf-8"))
        self.assertEqual(saved["api.calc.example"]["cookies"], "other=x; s=2")

    def test_call_invalid_headers(self):
        ok, _ = self.run_quietly(self.cli.call, WSDL_URL, "Add", None, None, "[1]")
        self.assertFalse(ok)
        self.assertEqual(self.factory.created, [])


class TestMenus(CLITestCase):

    @patch("builtins.input", side_effect=["9", "0"])
    def test_main_menu_exit(self, mock_input):
        menu = MainMenu(self.cli)
        _, output = self.run_quietly(menu.run)
        self.assertIn("Неверный выбор", output)
        self.assertIn("нет подключения", output)
        self.assertFalse(menu.running)

    @patch("builtins.input", side_effect=["2", "0"])
    def test_cookies_menu_back(self, mock_input):
        self.cli.session.add_cookies_for_domain("x.example", "a=1")
        menu = CookiesMenu(self.cli)
        _, output = self.run_quietly(menu.run)
        self.assertIn("x.example: a=1", output)
        self.assertFalse(menu.running)


class TestRunCli(unittest.TestCase):

    def test_parser(self):
        args = build_parser().parse_args(["call", "-w", WSDL_URL, "-m", "Add", "-c", "c.json", "-H", "{}"])
        self.assertEqual((args.command, args.wsdl, args.method, args.cookies, args.headers),
                         ("call", WSDL_URL, "Add", "c.json", "{}"))

    @patch("soap_session.cli_interface.SoapCLI")
    def test_dispatch(self, mock_cli_class):
        cli = mock_cli_class.return_value
        cli.execute.return_value = True
        cli.cookies_command.return_value = False

        self.assertEqual(run_cli(["execute", "-u", WSDL_URL, "-m", "Add", "-p", "{}"]), 0)
        cli.execute.assert_called_once_with(WSDL_URL, "Add", "{}")

        self.assertEqual(run_cli(["cookies", "-a"]), 1)
        cli.cookies_command.assert_called_once_with(False, True, False, None)

    @patch("soap_session.cli_interface.SoapCLI")
    def test_no_arguments_starts_interactive(self, mock_cli_class):
        mock_cli_class.return_value.run.return_value = True
        self.assertEqual(run_cli([]), 0)
        mock_cli_class.return_value.run.assert_called_once_with()


if __name__ == '__main__':
    unittest.main()
