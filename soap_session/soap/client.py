from __future__ import annotations

from typing import Any

import requests
from requests.structures import CaseInsensitiveDict

from soap_session.interfaces.connection_interface import SoapConnectionInterface
from soap_session.models import MethodInfo, SoapCallResult
from soap_session.utils.delayed_http_adapter import mount_delayed_adapter
from soap_session.utils.logger_setup import logger

from .envelope import build_envelope, parse_response
from .exceptions import SoapError, SoapFault, WsdlError
from .security import BasicAuthSecurity, WSSecurity
from .wsdl import WsdlDocument, parse_wsdl_document, session_loader

DEFAULT_TIMEOUT = 30.0


def collect_response_headers(response: requests.Response) -> CaseInsensitiveDict:
    """Response headers with every ``Set-Cookie`` value kept separately."""
    headers = CaseInsensitiveDict(response.headers)
    raw_headers = getattr(response.raw, 'headers', None)
    if raw_headers is not None and hasattr(raw_headers, 'getlist'):
        set_cookie = raw_headers.getlist('Set-Cookie')
        if set_cookie:
            headers['set-cookie'] = list(set_cookie)
    return headers


class SoapClient(SoapConnectionInterface):
    """SOAP client bound to the first service port of a WSDL document."""

    def __init__(
        self,
        wsdl_url: str,
        wsdl: WsdlDocument,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        if not wsdl.endpoints:
            raise WsdlError(f'WSDL {wsdl_url} does not declare any service port')

        self.wsdl_url = wsdl_url
        self.wsdl = wsdl
        self.service_url = wsdl.endpoints[0].location
        self.timeout = timeout
        self.http_headers: dict[str, str] = {}
        self.last_response_headers: CaseInsensitiveDict | None = None
        self.last_request: str | None = None
        self.last_response: str | None = None
        self.security: BasicAuthSecurity | WSSecurity | None = None
        self._session = session or requests.Session()

    @classmethod
    def create(cls, wsdl_url: str, options: dict[str, Any] | None = None) -> SoapClient:
        """
        Fetch and parse the WSDL, then build a client.

        Options: ``wsdl_headers`` (sent with the WSDL request and its imports only), ``timeout``,
        ``request_delay_sec``, ``session``.
        """
        options = dict(options or {})
        session = options.get('session') or requests.Session()
        timeout = options.get('timeout') or DEFAULT_TIMEOUT
        wsdl_headers = options.get('wsdl_headers') or {}
        mount_delayed_adapter(session, options.get('request_delay_sec') or 0)

        try:
            response = session.get(wsdl_url, headers=wsdl_headers, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise SoapError(f'Cannot fetch WSDL {wsdl_url}: {e}') from e

        wsdl = parse_wsdl_document(response.content, loader=session_loader(session, wsdl_headers, timeout),
                                   base_url=wsdl_url)
        # Cookies are managed by the session coordinator, not by the requests jar
        session.cookies.clear()
        return cls(wsdl_url, wsdl, session=session, timeout=timeout)

    def add_http_header(self, name: str, value: str) -> None:
        self.http_headers[name] = value

    def clear_http_header(self, name: str) -> None:
        self.http_headers.pop(name, None)

    def set_security(self, security: BasicAuthSecurity | WSSecurity) -> None:
        self.security = security
        security.apply(self._session)

    def get_available_methods(self) -> list[MethodInfo]:
        return self.wsdl.methods()

    def get_method_info(self, method_name: str) -> MethodInfo | None:
        for method in self.get_available_methods():
            if method.name == method_name:
                return method
        return None

    def _request_headers(self, soap_version: str, soap_action: str) -> dict[str, str]:
        if soap_version == '1.2':
            content_type = 'application/soap+xml; charset=utf-8'
            if soap_action:
                content_type += f'; action="{soap_action}"'
            headers = {'Content-Type': content_type}
        else:
            headers = {'Content-Type': 'text/xml; charset=utf-8', 'SOAPAction': f'"{soap_action}"'}
        headers.update(self.http_headers)
        return headers

    def invoke(self, method_name: str, params: dict[str, Any] | None = None) -> SoapCallResult:
        binding, operation = self.wsdl.find_operation(method_name)
        element_name, namespace = self.wsdl.request_element(operation)
        envelope = build_envelope(
            element_name,
            params,
            namespace,
            soap_version=binding.soap_version,
            header_xml=self.security.header_xml() if self.security else '',
        )

        self.last_request = envelope
        logger.debug(f'SOAP request {method_name} -> {self.service_url}')
        response = self._session.post(
            self.service_url,
            data=envelope.encode('utf-8'),
            headers=self._request_headers(binding.soap_version, operation.soap_action),
            timeout=self.timeout,
        )
        self.last_response_headers = collect_response_headers(response)
        self.last_response = response.text
        self._session.cookies.clear()

        try:
            result, soap_header = parse_response(response.content)
        except SoapFault:
            raise
        except SoapError:
            # Not an envelope: report the HTTP status if it is an error
            response.raise_for_status()
            raise
        if response.status_code >= 400:
            response.raise_for_status()

        return SoapCallResult(result=result, raw=response.text, raw_response=response, soap_header=soap_header)

    def post_json(self, url: str, data: dict[str, Any]) -> requests.Response:
        response = self._session.post(url, json=data, headers=dict(self.http_headers), timeout=self.timeout)
        self.last_response_headers = collect_response_headers(response)
        self._session.cookies.clear()
        response.raise_for_status()
        return response
