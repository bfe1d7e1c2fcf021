"""Request authentication schemes for :class:`SoapClient`."""

from __future__ import annotations

from xml.sax.saxutils import escape

import requests
from requests.auth import HTTPBasicAuth

WSSE_NS = 'http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-wssecurity-secext-1.0.xsd'
PASSWORD_TEXT = (
    'http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-username-token-profile-1.0#PasswordText'
)


class BasicAuthSecurity:
    """HTTP Basic authentication on every request."""

    def __init__(self, username: str, password: str) -> None:
        self.username = username
        self._password = password

    def apply(self, session: requests.Session) -> None:
        session.auth = HTTPBasicAuth(self.username, self._password)

    def header_xml(self) -> str:
        return ''


class WSSecurity:
    """WS-Security UsernameToken with a plain text password in the SOAP header."""

    def __init__(self, username: str, password: str) -> None:
        self.username = username
        self._password = password

    def apply(self, session: requests.Session) -> None:
        session.auth = None

    def header_xml(self) -> str:
        return (
            f'<wsse:Security xmlns:wsse="{WSSE_NS}">'
            '<wsse:UsernameToken>'
            f'<wsse:Username>{escape(self.username)}</wsse:Username>'
            f'<wsse:Password Type="{PASSWORD_TEXT}">{escape(self._password)}</wsse:Password>'
            '</wsse:UsernameToken>'
            '</wsse:Security>'
        )
