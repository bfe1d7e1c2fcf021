#!/usr/bin/env python3
"""
Тесты для разбора WSDL
"""

import unittest
from unittest.mock import MagicMock

from soap_session.soap.exceptions import UnknownOperation, WsdlError
from soap_session.soap.wsdl import WsdlParser, local_name, parse_wsdl_document

from wsdl_samples import CALCULATOR_WSDL, WCF_DOCUMENTS, WCF_NAMESPACE, WCF_ROOT_WSDL, WCF_WSDL0, WCF_WSDL_URL


class TestParseWsdlDocument(unittest.TestCase):

    def setUp(self):
        self.document = parse_wsdl_document(CALCULATOR_WSDL)

    def test_endpoint(self):
        self.assertEqual(self.document.target_namespace, "http://example.com/calc")
        endpoint = self.document.endpoints[0]
        self.assertEqual(endpoint.name, "Calculator")
        self.assertEqual(endpoint.port, "CalculatorSoap")
        self.assertEqual(endpoint.binding, "CalculatorSoap")
        self.assertEqual(endpoint.location, "https://api.calc.example/calculator.asmx")

    def test_operations(self):
        binding, operation = self.document.find_operation("Add")
        self.assertEqual(binding.soap_version, "1.1")
        self.assertEqual(operation.soap_action, "http://example.com/calc/Add")
        self.assertEqual(self.document.request_element(operation), ("Add", "http://example.com/calc"))

    def test_rpc_style_part_uses_operation_name(self):
        _, operation = self.document.find_operation("Ping")
        self.assertEqual(self.document.request_element(operation), ("Ping", "http://example.com/calc"))

    def test_unknown_operation(self):
        with self.assertRaises(UnknownOperation):
            self.document.find_operation("Divide")

    def test_methods(self):
        methods = {method.name: method for method in self.document.methods()}
        self.assertEqual(set(methods), {"Add", "Ping"})
        self.assertEqual(methods["Add"].input, {"a": "int", "b": "int"})
        self.assertEqual(methods["Add"].output, {"AddResult": "int"})
        self.assertEqual(methods["Ping"].input, {"text": "string"})
        self.assertEqual(methods["Ping"].output, {})

    def test_service_info(self):
        info = self.document.service_info()
        self.assertEqual([op.name for op in info.operations], ["Add", "Ping"])
        self.assertEqual([t.name for t in info.types], ["Add", "AddResponse"])

    def test_not_a_wsdl(self):
        with self.assertRaises(WsdlError):
            parse_wsdl_document("<html><body>Not found</body></html>")

    def test_local_name(self):
        self.assertEqual(local_name("tns:Add"), "Add")
        self.assertEqual(local_name("Add"), "Add")
        self.assertEqual(local_name(None), "")


def wcf_loader(requested):
    """Загрузчик документов WCF сервиса, запоминающий запрошенные адреса"""
    def load(url):
        requested.append(url)
        return WCF_DOCUMENTS[url]
    return load


class TestWsdlImports(unittest.TestCase):

    def setUp(self):
        self.requested = []
        self.document = parse_wsdl_document(WCF_ROOT_WSDL, loader=wcf_loader(self.requested), base_url=WCF_WSDL_URL)

    def test_follows_wsdl_and_schema_imports(self):
        """Относительный schemaLocation разрешается от адреса импортирующего документа"""
        self.assertEqual(self.requested, [
            "https://auth.example.com/Login.svc?wsdl=wsdl0",
            "https://auth.example.com/Login.svc?xsd=xsd0",
            "https://auth.example.com/Login.svc?xsd=xsd1",
        ])

    def test_method_shape_from_imported_schema(self):
        method = self.document.methods()[0]
        self.assertEqual(method.name, "Login")
        self.assertEqual(method.service, "LoginService")
        self.assertEqual(method.input, {"username": "string", "password": "string"})
        self.assertEqual(method.output, {"LoginResult": "SessionInfo"})

    def test_request_element_uses_imported_namespace(self):
        _, operation = self.document.find_operation("Login")
        self.assertEqual(operation.soap_action, "http://auth.example.com/2026/login/ILoginService/Login")
        self.assertEqual(self.document.request_element(operation), ("Login", WCF_NAMESPACE))
        self.assertEqual(self.document.target_namespace, "http://tempuri.org/")

    def test_named_complex_type_fields(self):
        element = self.document.elements["SessionInfo"]
        self.assertEqual(element.fields, {"Token": "string", "Expires": "dateTime"})
        self.assertEqual(self.document.elements["guid"].namespace,
                         "http://schemas.microsoft.com/2003/10/Serialization/")

    def test_each_location_loaded_once(self):
        requested = []
        documents = dict(WCF_DOCUMENTS)
        documents["https://auth.example.com/Login.svc?wsdl=wsdl0"] = WCF_WSDL0.replace(
            b'<wsdl:types>', b'<wsdl:types><xsd:schema><xsd:import schemaLocation="Login.svc?xsd=xsd0"/></xsd:schema>')

        def load(url):
            requested.append(url)
            return documents[url]

        parse_wsdl_document(WCF_ROOT_WSDL, loader=load, base_url=WCF_WSDL_URL)

        self.assertEqual(requested.count("https://auth.example.com/Login.svc?xsd=xsd0"), 1)

    def test_import_failure(self):
        def load(url):
            raise ConnectionError("refused")

        with self.assertRaises(WsdlError) as ctx:
            parse_wsdl_document(WCF_ROOT_WSDL, loader=load, base_url=WCF_WSDL_URL)
        self.assertIn("Login.svc?wsdl=wsdl0", str(ctx.exception))

    def test_without_loader_imports_are_skipped(self):
        document = parse_wsdl_document(WCF_ROOT_WSDL)
        self.assertEqual(document.endpoints[0].location, "https://auth.example.com/Login.svc")
        self.assertEqual(document.messages, {})


class TestWsdlParser(unittest.TestCase):

    def test_parse_wsdl_fetches_document(self):
        session = MagicMock()
        session.get.return_value.content = CALCULATOR_WSDL
        parser = WsdlParser(session=session, timeout=3)

        info = parser.parse_wsdl("https://calc.example/?wsdl", headers={"Cookie": "a=1"})

        session.get.assert_called_once_with("https://calc.example/?wsdl", headers={"Cookie": "a=1"}, timeout=3)
        self.assertEqual(info.services[0].location, "https://api.calc.example/calculator.asmx")

    def test_parse_wsdl_loads_imports_with_same_headers(self):
        session = MagicMock()

        def get(url, headers=None, timeout=None):
            response = MagicMock()
            response.content = WCF_DOCUMENTS[url]
            return response

        session.get.side_effect = get
        parser = WsdlParser(session=session, timeout=3)

        info = parser.parse_wsdl(WCF_WSDL_URL, headers={"Cookie": "a=1"})

        self.assertEqual(session.get.call_count, 4)
        for call in session.get.call_args_list:
            self.assertEqual(call.kwargs, {"headers": {"Cookie": "a=1"}, "timeout": 3})
        self.assertEqual([op.name for op in info.operations], ["Login"])
        self.assertIn("Login", [t.name for t in info.types])


if __name__ == '__main__':
    unittest.main()
