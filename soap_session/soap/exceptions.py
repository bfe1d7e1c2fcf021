class SoapError(Exception):
    """All errors related to the SOAP transport"""


class SoapFault(SoapError):
    """Raised when the service answers with a SOAP Fault element"""

    def __init__(self, code: str, message: str, detail=None):
        self.code = code
        self.message = message
        self.detail = detail
        super().__init__(f"{code}: {message}" if code else message)


class WsdlError(SoapError):
    pass


class UnknownOperation(SoapError):
    pass
