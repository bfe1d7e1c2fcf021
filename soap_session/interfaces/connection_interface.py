#!/usr/bin/env python3
"""
Connection Interface - Интерфейс подключения к SOAP сервису
Используется координатором сессии; реализация по умолчанию - soap_session.soap.client.SoapClient
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional


class SoapConnectionInterface(ABC):
    """Абстрактный интерфейс активного SOAP подключения"""

    service_url: str
    http_headers: Dict[str, str]
    last_response_headers: Optional[Mapping[str, Any]]

    @abstractmethod
    def invoke(self, method_name: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Вызвать SOAP метод

        Args:
            method_name: Имя операции
            params: Параметры вызова

        Returns:
            Результат вызова с полями result, raw, raw_response, soap_header
        """
        pass

    @abstractmethod
    def add_http_header(self, name: str, value: str) -> None:
        """Добавить HTTP заголовок ко всем последующим запросам"""
        pass

    @abstractmethod
    def clear_http_header(self, name: str) -> None:
        """Удалить HTTP заголовок; ничего не делает, если его нет"""
        pass

    @abstractmethod
    def get_available_methods(self) -> List[Any]:
        """Список доступных операций сервиса"""
        pass

    @abstractmethod
    def get_method_info(self, method_name: str) -> Optional[Any]:
        """Описание операции или None"""
        pass

    @abstractmethod
    def set_security(self, security: Any) -> None:
        """Установить способ аутентификации запросов"""
        pass

    @abstractmethod
    def post_json(self, url: str, data: Dict[str, Any]) -> Any:
        """POST запрос с JSON телом в той же HTTP сессии"""
        pass
