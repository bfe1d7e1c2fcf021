"""
Исключения ядра управления сессионными cookies
"""


class SoapSessionError(Exception):
    """Базовое исключение для всех ошибок сессии"""


class InvalidUrl(SoapSessionError):
    """URL не является корректным абсолютным адресом"""

    def __init__(self, url):
        self.url = url
        super().__init__(f"Некорректный URL: {url!r}")


class SoapConnectionError(SoapSessionError):
    """Не удалось создать SOAP клиента для WSDL"""


class NotConnected(SoapSessionError):
    """Операция требует активного подключения"""

    def __init__(self, message: str = "Нет подключения к SOAP сервису"):
        super().__init__(message)


class RpcError(SoapSessionError):
    """Вызов SOAP метода завершился ошибкой"""

    def __init__(self, method_name: str, error: Exception):
        self.method_name = method_name
        self.error = error
        super().__init__(f"Ошибка выполнения метода {method_name}: {error}")


class InvalidInput(SoapSessionError):
    """Пустой домен или строка cookies при ручном добавлении"""
