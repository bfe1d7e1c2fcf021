"""SOAP envelope building and response parsing."""

from __future__ import annotations

from typing import Any
from xml.sax.saxutils import escape, quoteattr

import bs4

from .exceptions import SoapError, SoapFault

SOAP11_ENVELOPE_NS = 'http://schemas.xmlsoap.org/soap/envelope/'
SOAP12_ENVELOPE_NS = 'http://www.w3.org/2003/05/soap-envelope'

ENVELOPE_NAMESPACES = {
    '1.1': SOAP11_ENVELOPE_NS,
    '1.2': SOAP12_ENVELOPE_NS,
}


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return escape(str(value))


def to_xml(name: str, value: Any, prefix: str = 'tns') -> str:
    """Serialize a parameter: dicts nest, lists repeat the element, None is empty."""
    tag = f'{prefix}:{name}' if prefix else name
    if isinstance(value, (list, tuple)):
        return ''.join(to_xml(name, item, prefix) for item in value)
    if value is None:
        return f'<{tag}/>'
    if isinstance(value, dict):
        children = ''.join(to_xml(child, child_value, prefix) for child, child_value in value.items())
        return f'<{tag}>{children}</{tag}>'
    return f'<{tag}>{_scalar(value)}</{tag}>'


def build_envelope(
    element_name: str,
    params: dict[str, Any] | None,
    namespace: str | None,
    soap_version: str = '1.1',
    header_xml: str = '',
) -> str:
    envelope_ns = ENVELOPE_NAMESPACES.get(soap_version, SOAP11_ENVELOPE_NS)
    namespace_attr = ' xmlns:tns=%s' % quoteattr(namespace) if namespace else ''
    prefix = 'tns' if namespace else ''
    header = f'<soap:Header>{header_xml}</soap:Header>' if header_xml else ''
    body = to_xml(element_name, params or {}, prefix)
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        f'<soap:Envelope xmlns:soap="{envelope_ns}"{namespace_attr}>'
        f'{header}<soap:Body>{body}</soap:Body></soap:Envelope>'
    )


def element_to_value(tag: bs4.Tag) -> Any:
    """Convert an element to text (leaf) or a dict; repeated children become lists."""
    children = [child for child in tag.children if isinstance(child, bs4.Tag)]
    if not children:
        return tag.get_text()

    value: dict[str, Any] = {}
    for child in children:
        child_value = element_to_value(child)
        if child.name in value:
            existing = value[child.name]
            if not isinstance(existing, list):
                value[child.name] = existing = [existing]
            existing.append(child_value)
        else:
            value[child.name] = child_value
    return value


def _fault_text(fault: bs4.Tag, *names: str) -> str:
    for name in names:
        found = fault.find(name)
        if found is not None:
            value = found.find('Value') or found.find('Text')
            return (value or found).get_text(strip=True)
    return ''


def parse_response(text: str | bytes) -> tuple[Any, dict[str, Any] | None]:
    """
    Return ``(result, soap_header)`` for a response envelope.

    Raises:
        SoapFault: when the body carries a Fault element
    """
    soup = bs4.BeautifulSoup(text, 'xml')
    body = soup.find('Body')
    if body is None:
        raise SoapError('Response does not contain a SOAP Body')

    fault = body.find('Fault', recursive=False)
    if fault is not None:
        detail = fault.find('detail') or fault.find('Detail')
        raise SoapFault(
            code=_fault_text(fault, 'faultcode', 'Code'),
            message=_fault_text(fault, 'faultstring', 'Reason'),
            detail=element_to_value(detail) if detail is not None else None,
        )

    header = soup.find('Header')
    soap_header = element_to_value(header) if header is not None else None
    if not isinstance(soap_header, dict):
        soap_header = None

    response_element = next((child for child in body.children if isinstance(child, bs4.Tag)), None)
    if response_element is None:
        return None, soap_header
    return element_to_value(response_element), soap_header
