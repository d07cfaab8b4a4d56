from enum import Enum

class RequestErrorType(Enum):
    ReadError = "read error"
    WriteError = "write error"
    AuthError = "auth error"
    FormatError = "format error"

class RequestError(Exception):
    typ:RequestErrorType = RequestErrorType.FormatError

    def __init__(self, v:str|None=None):
        super().__init__(v or self.typ.value)
        self.v = v

    def __str__(self) -> str:
        if self.v is None:
            return self.typ.value
        return f"{self.typ.value}: {self.v}"

class ReadError(RequestError):
    typ = RequestErrorType.ReadError

class WriteError(RequestError):
    typ = RequestErrorType.WriteError

class AuthSpecError(Exception):
    """The credential string could not be parsed."""
    pass

class AuthenticationError(Exception):
    """The credential was parsed, but the key or signature did not check out."""
    pass
