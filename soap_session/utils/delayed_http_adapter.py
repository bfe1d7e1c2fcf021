#!/usr/bin/env python3
"""
Реализация кастомного HTTPAdapter для requests, который добавляет
задержку после каждого выполненного запроса к SOAP сервису.
"""
import time
from requests.adapters import HTTPAdapter
from soap_session.utils.logger_setup import logger


class DelayedHTTPAdapter(HTTPAdapter):
    """
    HTTP-адаптер, который делает паузу после каждого запроса.
    """
    def __init__(self, *args, delay: float = 0, **kwargs):
        """
        :param delay: Задержка в секундах, выполняется ПОСЛЕ запроса.
        """
        self.delay = delay
        super().__init__(*args, **kwargs)

    def send(self, request, **kwargs):
        try:
            return super().send(request, **kwargs)
        finally:
            # Пауза и при успехе, и при ошибке запроса
            if self.delay > 0:
                logger.debug(f"Пауза {self.delay:.2f} сек после запроса к {request.url}")
                time.sleep(self.delay)


def mount_delayed_adapter(session, delay: float) -> None:
    """Установить адаптер с задержкой для http и https"""
    if delay <= 0:
        return
    adapter = DelayedHTTPAdapter(delay=delay)
    session.mount('http://', adapter)
    session.mount('https://', adapter)
    logger.debug(f"Установлен HTTP/S адаптер с задержкой {delay:.2f} сек.")
