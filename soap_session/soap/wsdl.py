"""
WSDL parsing.

The document is read with BeautifulSoup's XML builder; tags are matched by
local name so both ``wsdl:service`` and unprefixed ``service`` work.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable
from urllib.parse import urljoin

import bs4
import requests

from soap_session.models import MethodInfo, OperationInfo, ServiceEndpoint, ServiceInfo, TypeInfo
from soap_session.utils.logger_setup import logger
from .exceptions import UnknownOperation, WsdlError

SOAP11_BINDING_NS = 'http://schemas.xmlsoap.org/wsdl/soap/'
SOAP12_BINDING_NS = 'http://schemas.xmlsoap.org/wsdl/soap12/'


def local_name(qname: str | None) -> str:
    if not qname:
        return ''
    return qname.split(':', 1)[-1]


def _children(tag: bs4.Tag, name: str) -> list[bs4.Tag]:
    return tag.find_all(name, recursive=False)


@dataclass
class MessagePart:
    name: str
    element: str | None = None
    type: str | None = None


@dataclass
class Operation:
    name: str
    soap_action: str = ''
    input_message: str | None = None
    output_message: str | None = None


@dataclass
class Binding:
    name: str
    port_type: str
    soap_version: str = '1.1'
    operations: dict[str, Operation] = field(default_factory=dict)


@dataclass
class SchemaElement:
    name: str
    type: str | None
    namespace: str | None
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass
class WsdlDocument:
    target_namespace: str | None
    messages: dict[str, list[MessagePart]] = field(default_factory=dict)
    bindings: dict[str, Binding] = field(default_factory=dict)
    endpoints: list[ServiceEndpoint] = field(default_factory=list)
    elements: dict[str, SchemaElement] = field(default_factory=dict)

    def find_binding(self, operation_name: str) -> Binding | None:
        for endpoint in self.endpoints:
            binding = self.bindings.get(endpoint.binding)
            if binding and operation_name in binding.operations:
                return binding
        for binding in self.bindings.values():
            if operation_name in binding.operations:
                return binding
        return None

    def find_operation(self, operation_name: str) -> tuple[Binding, Operation]:
        binding = self.find_binding(operation_name)
        if binding is None:
            raise UnknownOperation(f'Operation {operation_name!r} is not defined in the WSDL')
        return binding, binding.operations[operation_name]

    def message_shape(self, message_name: str | None) -> dict[str, Any]:
        """Field names of a message; document/literal parts are expanded to their schema element."""
        shape: dict[str, Any] = {}
        for part in self.messages.get(local_name(message_name), []):
            element = self.elements.get(local_name(part.element)) if part.element else None
            if element is not None:
                shape.update(element.fields or {element.name: element.type})
            else:
                shape[part.name] = local_name(part.type) or None
        return shape

    def request_element(self, operation: Operation) -> tuple[str, str | None]:
        """Name and namespace of the element wrapping the request parameters."""
        for part in self.messages.get(local_name(operation.input_message), []):
            element = self.elements.get(local_name(part.element)) if part.element else None
            if element is not None:
                return element.name, element.namespace or self.target_namespace
        return operation.name, self.target_namespace

    def methods(self) -> list[MethodInfo]:
        methods = []
        for endpoint in self.endpoints:
            binding = self.bindings.get(endpoint.binding)
            if binding is None:
                continue
            for operation in binding.operations.values():
                methods.append(MethodInfo(
                    name=operation.name,
                    service=endpoint.name,
                    port=endpoint.port,
                    input=self.message_shape(operation.input_message),
                    output=self.message_shape(operation.output_message),
                ))
        return methods

    def service_info(self) -> ServiceInfo:
        operations = [
            OperationInfo(name=operation.name, binding=binding.name, soap_action=operation.soap_action)
            for binding in self.bindings.values()
            for operation in binding.operations.values()
        ]
        types = [TypeInfo(name=el.name, type=el.type, namespace=el.namespace) for el in self.elements.values()]
        return ServiceInfo(
            target_namespace=self.target_namespace,
            services=list(self.endpoints),
            operations=operations,
            types=types,
        )


def _soap_version(tag: bs4.Tag | None) -> str:
    if tag is None:
        return '1.1'
    if tag.namespace == SOAP12_BINDING_NS or (tag.prefix or '').lower() == 'soap12':
        return '1.2'
    return '1.1'


def _element_fields(element: bs4.Tag, complex_types: dict[str, bs4.Tag]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    complex_type = element.find('complexType')
    if complex_type is None:
        complex_type = complex_types.get(local_name(element.get('type')))
    if complex_type is None:
        return fields
    for child in complex_type.find_all('element'):
        name = child.get('name') or local_name(child.get('ref'))
        if not name:
            continue
        fields[name] = local_name(child.get('type')) or ('complex' if child.find('complexType') else None)
    return fields


Loader = Callable[[str], bytes]


def session_loader(session: requests.Session, headers: dict[str, str] | None = None,
                   timeout: float = 30.0) -> Loader:
    """Loader for imported documents that reuses the session and headers of the WSDL request."""
    def load(url: str) -> bytes:
        response = session.get(url, headers=headers or {}, timeout=timeout)
        response.raise_for_status()
        return response.content
    return load


class _DocumentSet:
    """The root definitions plus every ``wsdl:import`` and ``xsd:import``/``xsd:include`` it pulls in.

    WCF ``.svc?wsdl`` documents keep messages and port types in ``?wsdl=wsdl0``
    and the schemas in ``?xsd=xsd0``, so those are fetched with the same loader.
    Locations are resolved against the document that references them and each
    URL is loaded once.
    """

    def __init__(self, loader: Loader | None, base_url: str | None) -> None:
        self._loader = loader
        self._visited: set[str] = {base_url} if base_url else set()
        self.definitions: list[bs4.Tag] = []
        self.schemas: list[tuple[bs4.Tag, str | None]] = []

    def _load(self, location: str, base_url: str | None) -> tuple[bs4.BeautifulSoup | None, str]:
        url = urljoin(base_url or '', location)
        if url in self._visited:
            return None, url
        self._visited.add(url)
        if self._loader is None:
            logger.warning(f'Import {url} skipped: no loader configured')
            return None, url
        logger.debug(f'Loading WSDL import {url}')
        try:
            content = self._loader(url)
        except Exception as e:
            raise WsdlError(f'Cannot load {url}: {e}') from e
        return bs4.BeautifulSoup(content, 'xml'), url

    def add_definitions(self, definitions: bs4.Tag, base_url: str | None) -> None:
        self.definitions.append(definitions)
        for wsdl_import in _children(definitions, 'import'):
            location = wsdl_import.get('location')
            if not location:
                continue
            soup, url = self._load(location, base_url)
            if soup is None:
                continue
            imported = soup.find('definitions')
            if imported is not None:
                self.add_definitions(imported, url)
                continue
            schema = soup.find('schema')
            if schema is None:
                raise WsdlError(f'Invalid WSDL import: {url}')
            self.add_schema(schema, url, schema.get('targetNamespace'))

        types = definitions.find('types', recursive=False)
        if types is not None:
            for schema in _children(types, 'schema'):
                self.add_schema(schema, base_url, schema.get('targetNamespace'))

    def add_schema(self, schema: bs4.Tag, base_url: str | None, namespace: str | None) -> None:
        self.schemas.append((schema, namespace))
        for reference in _children(schema, 'import') + _children(schema, 'include'):
            location = reference.get('schemaLocation')
            if not location:
                continue
            soup, url = self._load(location, base_url)
            if soup is None:
                continue
            imported = soup.find('schema')
            if imported is None:
                raise WsdlError(f'Invalid schema import: {url}')
            if reference.name == 'include':
                imported_namespace = imported.get('targetNamespace') or namespace
            else:
                imported_namespace = imported.get('targetNamespace') or reference.get('namespace')
            self.add_schema(imported, url, imported_namespace)


def _parse_schema_elements(schemas: list[tuple[bs4.Tag, str | None]]) -> dict[str, SchemaElement]:
    complex_types = {
        complex_type.get('name'): complex_type
        for schema, _ in schemas
        for complex_type in _children(schema, 'complexType')
        if complex_type.get('name')
    }
    elements: dict[str, SchemaElement] = {}
    for schema, namespace in schemas:
        for element in _children(schema, 'element'):
            name = element.get('name')
            if not name:
                continue
            elements[name] = SchemaElement(
                name=name,
                type=element.get('type'),
                namespace=namespace,
                fields=_element_fields(element, complex_types),
            )
    return elements


def _parse_messages(definitions: bs4.Tag) -> dict[str, list[MessagePart]]:
    messages = {}
    for message in _children(definitions, 'message'):
        messages[message.get('name')] = [
            MessagePart(name=part.get('name'), element=part.get('element'), type=part.get('type'))
            for part in _children(message, 'part')
        ]
    return messages


def _parse_port_types(definitions: bs4.Tag) -> dict[str, dict[str, tuple[str | None, str | None]]]:
    port_types = {}
    for port_type in _children(definitions, 'portType'):
        operations = {}
        for operation in _children(port_type, 'operation'):
            input_tag = operation.find('input', recursive=False)
            output_tag = operation.find('output', recursive=False)
            operations[operation.get('name')] = (
                input_tag.get('message') if input_tag else None,
                output_tag.get('message') if output_tag else None,
            )
        port_types[port_type.get('name')] = operations
    return port_types


def _parse_bindings(definitions: bs4.Tag, port_types) -> dict[str, Binding]:
    bindings = {}
    for binding_tag in _children(definitions, 'binding'):
        port_type_name = local_name(binding_tag.get('type'))
        messages = port_types.get(port_type_name, {})
        binding = Binding(
            name=binding_tag.get('name'),
            port_type=port_type_name,
            soap_version=_soap_version(binding_tag.find('binding', recursive=False)),
        )
        for operation_tag in _children(binding_tag, 'operation'):
            name = operation_tag.get('name')
            soap_operation = operation_tag.find('operation', recursive=False)
            input_message, output_message = messages.get(name, (None, None))
            binding.operations[name] = Operation(
                name=name,
                soap_action=soap_operation.get('soapAction', '') if soap_operation else '',
                input_message=input_message,
                output_message=output_message,
            )
        bindings[binding.name] = binding
    return bindings


def _parse_endpoints(definitions: bs4.Tag) -> list[ServiceEndpoint]:
    endpoints = []
    for service in _children(definitions, 'service'):
        for port in _children(service, 'port'):
            address = port.find('address', recursive=False)
            endpoints.append(ServiceEndpoint(
                name=service.get('name'),
                port=port.get('name'),
                binding=local_name(port.get('binding')),
                location=address.get('location') if address else 'Unknown',
            ))
    return endpoints


def parse_wsdl_document(text: str | bytes, loader: Loader | None = None,
                        base_url: str | None = None) -> WsdlDocument:
    """Parse a WSDL; imported documents are fetched through ``loader`` relative to ``base_url``."""
    soup = bs4.BeautifulSoup(text, 'xml')
    definitions = soup.find('definitions')
    if definitions is None:
        raise WsdlError('Invalid WSDL: No definitions found')

    documents = _DocumentSet(loader, base_url)
    documents.add_definitions(definitions, base_url)

    port_types: dict[str, dict[str, tuple[str | None, str | None]]] = {}
    messages: dict[str, list[MessagePart]] = {}
    for part in documents.definitions:
        port_types.update(_parse_port_types(part))
        messages.update(_parse_messages(part))

    bindings: dict[str, Binding] = {}
    endpoints: list[ServiceEndpoint] = []
    for part in documents.definitions:
        bindings.update(_parse_bindings(part, port_types))
        endpoints.extend(_parse_endpoints(part))

    return WsdlDocument(
        target_namespace=definitions.get('targetNamespace'),
        messages=messages,
        bindings=bindings,
        endpoints=endpoints,
        elements=_parse_schema_elements(documents.schemas),
    )


class WsdlParser:
    """Standalone WSDL inspection: fetch a document and summarize it."""

    def __init__(self, session: requests.Session | None = None, timeout: float = 30.0) -> None:
        self._session = session or requests.Session()
        self._timeout = timeout

    def parse_wsdl(self, wsdl_url: str, headers: dict[str, str] | None = None) -> ServiceInfo:
        try:
            response = self._session.get(wsdl_url, headers=headers or {}, timeout=self._timeout)
            response.raise_for_status()
            loader = session_loader(self._session, headers, self._timeout)
            return parse_wsdl_document(response.content, loader=loader, base_url=wsdl_url).service_info()
        except Exception as e:
            logger.error(f'Failed to parse WSDL {wsdl_url}: {e}')
            raise

    @staticmethod
    def extract_service_info(text: str | bytes) -> ServiceInfo:
        return parse_wsdl_document(text).service_info()

    @staticmethod
    def display_service_info(service_info: ServiceInfo) -> ServiceInfo:
        print('\n=== WSDL Service Information ===')
        print(f'Target Namespace: {service_info.target_namespace}')

        print('\nServices:')
        for service in service_info.services:
            print(f'  - {service.name} ({service.port})')
            print(f'    Location: {service.location}')
            print(f'    Binding: {service.binding}')

        print('\nOperations:')
        for operation in service_info.operations:
            print(f'  - {operation.name}')
            print(f'    SOAP Action: {operation.soap_action}')
            print(f'    Binding: {operation.binding}')

        if service_info.types:
            print('\nTypes:')
            for type_info in service_info.types:
                print(f'  - {type_info.name} ({type_info.type})')

        return service_info
