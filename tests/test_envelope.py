#!/usr/bin/env python3
"""
Тесты для построения SOAP конверта и разбора ответа
"""

import unittest

from soap_session.soap.envelope import SOAP12_ENVELOPE_NS, build_envelope, parse_response, to_xml
from soap_session.soap.exceptions import SoapError, SoapFault

from wsdl_samples import ADD_RESPONSE, FAULT_RESPONSE


class TestBuildEnvelope(unittest.TestCase):

    def test_values_are_escaped(self):
        xml = to_xml("name", "<b>&", prefix="tns")
        self.assertEqual(xml, "<tns:name>&lt;b&gt;&amp;</tns:name>")

    def test_nested_lists_and_none(self):
        xml = to_xml("req", {"ids": [1, 2], "flag": True, "note": None}, prefix="")
        self.assertEqual(xml, "<req><ids>1</ids><ids>2</ids><flag>true</flag><note/></req>")

    def test_envelope(self):
        envelope = build_envelope("Add", {"a": 2, "b": 3}, "http://example.com/calc")
        self.assertIn('xmlns:tns="http://example.com/calc"', envelope)
        self.assertIn("<soap:Body><tns:Add><tns:a>2</tns:a><tns:b>3</tns:b></tns:Add></soap:Body>", envelope)
        self.assertNotIn("<soap:Header>", envelope)

    def test_soap12_with_header(self):
        envelope = build_envelope("Ping", None, None, soap_version="1.2", header_xml="<auth/>")
        self.assertIn(SOAP12_ENVELOPE_NS, envelope)
        self.assertIn("<soap:Header><auth/></soap:Header>", envelope)
        self.assertIn("<soap:Body><Ping></Ping></soap:Body>", envelope)


class TestParseResponse(unittest.TestCase):

    def test_result_and_header(self):
        result, header = parse_response(ADD_RESPONSE)
        self.assertEqual(result, {"AddResult": "5"})
        self.assertEqual(header, {"Session": {"Id": "42"}})

    def test_fault(self):
        with self.assertRaises(SoapFault) as ctx:
            parse_response(FAULT_RESPONSE)
        self.assertEqual(ctx.exception.code, "soap:Client")
        self.assertEqual(ctx.exception.message, "Session expired")
        self.assertEqual(ctx.exception.detail, {"Reason": "token"})

    def test_missing_body(self):
        with self.assertRaises(SoapError):
            parse_response("<html><body>502 Bad Gateway</body></html>")


if __name__ == '__main__':
    unittest.main()
