"""Minimal SOAP client on top of requests and BeautifulSoup."""

from .client import SoapClient, collect_response_headers
from .exceptions import SoapError, SoapFault, UnknownOperation, WsdlError
from .security import BasicAuthSecurity, WSSecurity
from .wsdl import WsdlDocument, WsdlParser, parse_wsdl_document

__all__ = [
    'SoapClient',
    'collect_response_headers',
    'SoapError',
    'SoapFault',
    'UnknownOperation',
    'WsdlError',
    'BasicAuthSecurity',
    'WSSecurity',
    'WsdlDocument',
    'WsdlParser',
    'parse_wsdl_document',
]
