#!/usr/bin/env python3
"""
WSDL и SOAP ответы для тестов
"""

CALCULATOR_WSDL = """<?xml version="1.0" encoding="utf-8"?>
<wsdl:definitions xmlns:wsdl="http://schemas.xmlsoap.org/wsdl/"
                  xmlns:soap="http://schemas.xmlsoap.org/wsdl/soap/"
                  xmlns:xs="http://www.w3.org/2001/XMLSchema"
                  xmlns:tns="http://example.com/calc"
                  targetNamespace="http://example.com/calc">
  <wsdl:types>
    <xs:schema targetNamespace="http://example.com/calc" elementFormDefault="qualified">
      <xs:element name="Add">
        <xs:complexType>
          <xs:sequence>
            <xs:element name="a" type="xs:int"/>
            <xs:element name="b" type="xs:int"/>
          </xs:sequence>
        </xs:complexType>
      </xs:element>
      <xs:element name="AddResponse">
        <xs:complexType>
          <xs:sequence>
            <xs:element name="AddResult" type="xs:int"/>
          </xs:sequence>
        </xs:complexType>
      </xs:element>
    </xs:schema>
  </wsdl:types>
  <wsdl:message name="AddSoapIn">
    <wsdl:part name="parameters" element="tns:Add"/>
  </wsdl:message>
  <wsdl:message name="AddSoapOut">
    <wsdl:part name="parameters" element="tns:AddResponse"/>
  </wsdl:message>
  <wsdl:message name="PingIn">
    <wsdl:part name="text" type="xs:string"/>
  </wsdl:message>
  <wsdl:portType name="CalculatorSoap">
    <wsdl:operation name="Add">
      <wsdl:input message="tns:AddSoapIn"/>
      <wsdl:output message="tns:AddSoapOut"/>
    </wsdl:operation>
    <wsdl:operation name="Ping">
      <wsdl:input message="tns:PingIn"/>
    </wsdl:operation>
  </wsdl:portType>
  <wsdl:binding name="CalculatorSoap" type="tns:CalculatorSoap">
    <soap:binding transport="http://schemas.xmlsoap.org/soap/http"/>
    <wsdl:operation name="Add">
      <soap:operation soapAction="http://example.com/calc/Add" style="document"/>
      <wsdl:input><soap:body use="literal"/></wsdl:input>
      <wsdl:output><soap:body use="literal"/></wsdl:output>
    </wsdl:operation>
    <wsdl:operation name="Ping">
      <soap:operation soapAction="" style="document"/>
      <wsdl:input><soap:body use="literal"/></wsdl:input>
    </wsdl:operation>
  </wsdl:binding>
  <wsdl:service name="Calculator">
    <wsdl:port name="CalculatorSoap" binding="tns:CalculatorSoap">
      <soap:address location="https://api.calc.example/calculator.asmx"/>
    </wsdl:port>
  </wsdl:service>
</wsdl:definitions>
""".encode("utf-8")

ADD_RESPONSE = """<?xml version="1.0" encoding="utf-8"?>
<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">
  <soap:Header><Session xmlns="http://example.com/calc"><Id>42</Id></Session></soap:Header>
  <soap:Body>
    <AddResponse xmlns="http://example.com/calc"><AddResult>5</AddResult></AddResponse>
  </soap:Body>
</soap:Envelope>
""".encode("utf-8")

FAULT_RESPONSE = """<?xml version="1.0" encoding="utf-8"?>
<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">
  <soap:Body>
    <soap:Fault>
      <faultcode>soap:Client</faultcode>
      <faultstring>Session expired</faultstring>
      <detail><Reason>token</Reason></detail>
    </soap:Fault>
  </soap:Body>
</soap:Envelope>
""".encode("utf-8")

# WCF сервис: корневой .svc?wsdl ссылается на ?wsdl=wsdl0, а схемы лежат в ?xsd=xsdN
WCF_WSDL_URL = "https://auth.example.com/Login.svc?wsdl"
WCF_NAMESPACE = "http://auth.example.com/2026/login"

WCF_ROOT_WSDL = """<?xml version="1.0" encoding="utf-8"?>
<wsdl:definitions name="LoginService" targetNamespace="http://tempuri.org/"
                  xmlns:wsdl="http://schemas.xmlsoap.org/wsdl/"
                  xmlns:soap="http://schemas.xmlsoap.org/wsdl/soap/"
                  xmlns:tns="http://tempuri.org/"
                  xmlns:i0="http://auth.example.com/2026/login">
  <wsdl:import namespace="http://auth.example.com/2026/login" location="https://auth.example.com/Login.svc?wsdl=wsdl0"/>
  <wsdl:types/>
  <wsdl:binding name="BasicHttpBinding_ILoginService" type="i0:ILoginService">
    <soap:binding transport="http://schemas.xmlsoap.org/soap/http"/>
    <wsdl:operation name="Login">
      <soap:operation soapAction="http://auth.example.com/2026/login/ILoginService/Login" style="document"/>
      <wsdl:input><soap:body use="literal"/></wsdl:input>
      <wsdl:output><soap:body use="literal"/></wsdl:output>
    </wsdl:operation>
  </wsdl:binding>
  <wsdl:service name="LoginService">
    <wsdl:port name="BasicHttpBinding_ILoginService" binding="tns:BasicHttpBinding_ILoginService">
      <soap:address location="https://auth.example.com/Login.svc"/>
    </wsdl:port>
  </wsdl:service>
</wsdl:definitions>
""".encode("utf-8")

WCF_WSDL0 = """<?xml version="1.0" encoding="utf-8"?>
<wsdl:definitions targetNamespace="http://auth.example.com/2026/login"
                  xmlns:wsdl="http://schemas.xmlsoap.org/wsdl/"
                  xmlns:xsd="http://www.w3.org/2001/XMLSchema"
                  xmlns:wsaw="http://www.w3.org/2006/05/addressing/wsdl"
                  xmlns:tns="http://auth.example.com/2026/login">
  <wsdl:types>
    <xsd:schema targetNamespace="http://auth.example.com/2026/login/Imports">
      <xsd:import schemaLocation="Login.svc?xsd=xsd0" namespace="http://auth.example.com/2026/login"/>
      <xsd:import schemaLocation="Login.svc?xsd=xsd1" namespace="http://schemas.microsoft.com/2003/10/Serialization/"/>
    </xsd:schema>
  </wsdl:types>
  <wsdl:message name="ILoginService_Login_InputMessage">
    <wsdl:part name="parameters" element="tns:Login"/>
  </wsdl:message>
  <wsdl:message name="ILoginService_Login_OutputMessage">
    <wsdl:part name="parameters" element="tns:LoginResponse"/>
  </wsdl:message>
  <wsdl:portType name="ILoginService">
    <wsdl:operation name="Login">
      <wsdl:input wsaw:Action="http://auth.example.com/2026/login/ILoginService/Login" message="tns:ILoginService_Login_InputMessage"/>
      <wsdl:output wsaw:Action="http://auth.example.com/2026/login/ILoginService/LoginResponse" message="tns:ILoginService_Login_OutputMessage"/>
    </wsdl:operation>
  </wsdl:portType>
</wsdl:definitions>
""".encode("utf-8")

WCF_XSD0 = """<?xml version="1.0" encoding="utf-8"?>
<xs:schema elementFormDefault="qualified" targetNamespace="http://auth.example.com/2026/login"
           xmlns:xs="http://www.w3.org/2001/XMLSchema"
           xmlns:tns="http://auth.example.com/2026/login">
  <xs:element name="Login">
    <xs:complexType>
      <xs:sequence>
        <xs:element minOccurs="0" name="username" nillable="true" type="xs:string"/>
        <xs:element minOccurs="0" name="password" nillable="true" type="xs:string"/>
      </xs:sequence>
    </xs:complexType>
  </xs:element>
  <xs:element name="LoginResponse">
    <xs:complexType>
      <xs:sequence>
        <xs:element minOccurs="0" name="LoginResult" nillable="true" type="tns:SessionInfo"/>
      </xs:sequence>
    </xs:complexType>
  </xs:element>
  <xs:complexType name="SessionInfo">
    <xs:sequence>
      <xs:element minOccurs="0" name="Token" nillable="true" type="xs:string"/>
      <xs:element minOccurs="0" name="Expires" type="xs:dateTime"/>
    </xs:sequence>
  </xs:complexType>
  <xs:element name="SessionInfo" nillable="true" type="tns:SessionInfo"/>
</xs:schema>
""".encode("utf-8")

WCF_XSD1 = """<?xml version="1.0" encoding="utf-8"?>
<xs:schema attributeFormDefault="qualified" elementFormDefault="qualified"
           targetNamespace="http://schemas.microsoft.com/2003/10/Serialization/"
           xmlns:xs="http://www.w3.org/2001/XMLSchema"
           xmlns:tns="http://schemas.microsoft.com/2003/10/Serialization/">
  <xs:element name="guid" nillable="true" type="tns:guid"/>
  <xs:simpleType name="guid">
    <xs:restriction base="xs:string"/>
  </xs:simpleType>
</xs:schema>
""".encode("utf-8")

WCF_DOCUMENTS = {
    WCF_WSDL_URL: WCF_ROOT_WSDL,
    "https://auth.example.com/Login.svc?wsdl=wsdl0": WCF_WSDL0,
    "https://auth.example.com/Login.svc?xsd=xsd0": WCF_XSD0,
    "https://auth.example.com/Login.svc?xsd=xsd1": WCF_XSD1,
}

LOGIN_RESPONSE = """<?xml version="1.0" encoding="utf-8"?>
<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/">
  <s:Body>
    <LoginResponse xmlns="http://auth.example.com/2026/login">
      <LoginResult><Token>t-1</Token></LoginResult>
    </LoginResponse>
  </s:Body>
</s:Envelope>
""".encode("utf-8")
