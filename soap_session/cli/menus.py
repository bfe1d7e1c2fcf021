#!/usr/bin/env python3
"""
Конкретные реализации меню интерактивного режима
"""

from .menu_base import BaseMenu, NavigableMenu, MenuItem
from .constants import MenuChoice, CookieMenuChoice, ProfileMenuChoice, Messages


class MainMenu(BaseMenu):
    """Главное меню приложения"""

    def __init__(self, cli_context):
        super().__init__(Messages.MAIN_TITLE)
        self.cli = cli_context

    def _update_title(self):
        """Показать в заголовке текущий домен"""
        domain = self.cli.session.current_domain
        if domain:
            self.title = f"{Messages.MAIN_TITLE} - [{domain}]"
        else:
            self.title = f"{Messages.MAIN_TITLE} - [нет подключения]"

    def setup_menu(self):
        self.items.clear()
        self.add_item(MenuItem(MenuChoice.CONNECT.value, Messages.CONNECT, self.cli.connect))
        self.add_item(MenuItem(MenuChoice.METHODS.value, Messages.METHODS, self.cli.list_methods))
        self.add_item(MenuItem(MenuChoice.EXECUTE.value, Messages.EXECUTE, self.cli.execute))
        self.add_item(MenuItem(MenuChoice.COOKIES.value, Messages.COOKIES, self.open_cookies_menu))
        self.add_item(MenuItem(MenuChoice.PROFILES.value, Messages.PROFILES, self.open_profiles_menu))
        self.add_item(MenuItem(MenuChoice.PARSE_WSDL.value, Messages.PARSE_WSDL, self.cli.parse_wsdl))
        self.add_item(MenuItem(MenuChoice.EXIT.value, Messages.EXIT, self.exit_app))

    def run(self):
        """Цикл с обновлением заголовка после каждого действия"""
        self.running = True
        while self.running:
            self._update_title()
            self.setup_menu()
            self.display_menu()
            if not self.handle_choice(self.get_user_choice()):
                break
            print()

    def open_cookies_menu(self):
        CookiesMenu(self.cli).run()

    def open_profiles_menu(self):
        ProfilesMenu(self.cli).run()

    def exit_app(self):
        print(Messages.GOODBYE)
        self.stop()


class CookiesMenu(NavigableMenu):
    """Меню управления cookies сессии"""

    def __init__(self, cli_context):
        super().__init__(Messages.COOKIES_TITLE)
        self.cli = cli_context

    def setup_menu(self):
        self.add_item(MenuItem(CookieMenuChoice.VIEW.value, Messages.VIEW_COOKIES, self.cli.view_cookies))
        self.add_item(MenuItem(CookieMenuChoice.VIEW_ALL.value, Messages.VIEW_ALL_COOKIES, self.cli.view_all_cookies))
        self.add_item(MenuItem(CookieMenuChoice.ADD.value, Messages.ADD_COOKIES, self.cli.add_cookies))
        self.add_item(MenuItem(CookieMenuChoice.CLEAR.value, Messages.CLEAR_COOKIES, self.cli.clear_cookies))


class ProfilesMenu(NavigableMenu):
    """Меню профилей подключения"""

    def __init__(self, cli_context):
        super().__init__(Messages.PROFILES_TITLE)
        self.cli = cli_context

    def setup_menu(self):
        self.add_item(MenuItem(ProfileMenuChoice.LIST.value, Messages.LIST_PROFILES, self.cli.list_profiles))
        self.add_item(MenuItem(ProfileMenuChoice.CONNECT.value, Messages.CONNECT_PROFILE, self.cli.connect_profile))
        self.add_item(MenuItem(ProfileMenuChoice.SAVE_CURRENT.value, Messages.SAVE_PROFILE, self.cli.save_current_profile))
        self.add_item(MenuItem(ProfileMenuChoice.DELETE.value, Messages.DELETE_PROFILE, self.cli.delete_profile))
