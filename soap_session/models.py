"""
Модели данных: описание WSDL, результаты вызовов и профили подключений
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


@dataclass
class ServiceEndpoint:
    """Порт сервиса из секции <wsdl:service>"""
    name: str
    port: str
    binding: str
    location: str


@dataclass
class OperationInfo:
    """Операция привязки (binding) с ее SOAPAction"""
    name: str
    binding: str
    soap_action: str = ''


@dataclass
class TypeInfo:
    """Элемент верхнего уровня XSD схемы"""
    name: str
    type: Optional[str]
    namespace: Optional[str]


@dataclass
class ServiceInfo:
    """Сводная информация о WSDL документе"""
    target_namespace: Optional[str]
    services: List[ServiceEndpoint] = field(default_factory=list)
    operations: List[OperationInfo] = field(default_factory=list)
    types: List[TypeInfo] = field(default_factory=list)


@dataclass
class MethodInfo:
    """Доступный для вызова метод сервиса"""
    name: str
    service: str
    port: str
    input: Dict[str, Any] = field(default_factory=dict)
    output: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SoapCallResult:
    """Результат SOAP вызова"""
    result: Any
    raw: Optional[str] = None
    raw_response: Any = None
    soap_header: Optional[Dict[str, Any]] = None


class Profile(BaseModel):
    """Сохраненный профиль подключения"""
    name: str
    wsdl_url: str = Field(alias='wsdlUrl')
    created_at: datetime = Field(default_factory=datetime.now, alias='createdAt')
    last_used: datetime = Field(default_factory=datetime.now, alias='lastUsed')
    updated_at: Optional[datetime] = Field(default=None, alias='updatedAt')
    imported_at: Optional[datetime] = Field(default=None, alias='importedAt')
    extra: Dict[str, Any] = Field(default_factory=dict)

    model_config = {'populate_by_name': True}
