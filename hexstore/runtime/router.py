import logging
import binascii
from enum import Enum
from typing import BinaryIO
from hexstore.errors import *
from hexstore.store import ObjectStore, ResourceKey
from hexstore.auth import AuthSpec, AuthResult, AuthChain

logger = logging.getLogger(__name__)

class RequestResultType(Enum):
    Found = "found"
    Changed = "changed"
    WriteError = "write error"
    AuthError = "auth error"
    InputError = "input error"
    RecordError = "record error"

class RequestResult:
    """What a request ended in, with either a text payload or a handle to stored content."""
    typ:RequestResultType
    v:str|None
    f:BinaryIO|None

    def __init__(self, typ:RequestResultType, v:str|None=None, f:BinaryIO|None=None):
        self.typ = typ
        self.v = v
        self.f = f

    def __repr__(self) -> str:
        return f"RequestResult({self.typ.name}, {self.v!r})"

def auth_from_header(value:str|None, method:str) -> AuthSpec|None:
    """Parses the value of an Authorization header.

    A missing header means the request is anonymous, a malformed one results in a
    credential without key, which never authenticates.
    """
    if value is None:
        return None
    try:
        return AuthSpec.from_str(value)
    except AuthSpecError:
        logger.error(f"malformed auth string ({len(value)} chars)")
        return AuthSpec.invalid(method)

class RequestRouter:
    """Decides, per request, between a read, an immutable write, or a mutable write."""

    def __init__(self, store:ObjectStore, auth_chain:AuthChain|None=None):
        self.store = store
        self.auth_chain = auth_chain if auth_chain is not None else AuthChain()

    def authenticate(self, auth_spec:AuthSpec|None, body:BinaryIO) -> AuthResult:
        body.seek(0)
        auth_result = self.auth_chain.authenticate(auth_spec, body)
        body.seek(0)
        return auth_result

    def process_method(self, method:str, name:str, body:BinaryIO, expected_size:int, auth_result:AuthResult) -> RequestResult:
        method = method.upper()
        if method == "PUT":
            return self._process_put(name, body, expected_size, auth_result)
        elif method == "GET":
            return self._process_get(name)
        logger.debug(f"unsupported method {method}")
        return RequestResult(RequestResultType.InputError, f"unsupported method {method}")

    def _process_put(self, name:str, body:BinaryIO, expected_size:int, auth_result:AuthResult) -> RequestResult:
        if not auth_result.valid():
            return RequestResult(RequestResultType.AuthError)
        try:
            if auth_result.active():
                rk = ResourceKey.from_str(name)
                pointer = rk.pointer_for(auth_result.identity)
                logger.debug(f"mutable put using mutable key {name} -> {rk.hex()}, pointer {pointer.hex()}")
                record = self.store.put_mutable(pointer, body, expected_size)
            else:
                logger.debug("immutable put")
                record = self.store.put_immutable(body, expected_size)
        except WriteError as e:
            logger.error(f"write failed for '{name}': {e}")
            return RequestResult(RequestResultType.WriteError, str(e))
        except RequestError as e:
            logger.error(f"put failed for '{name}': {e}")
            return RequestResult(RequestResultType.RecordError, str(e))
        return RequestResult(RequestResultType.Changed, record.digest.hex())

    def _process_get(self, name:str) -> RequestResult:
        try:
            binascii.unhexlify(name)
        except (binascii.Error, ValueError) as e:
            return RequestResult(RequestResultType.InputError, str(e))
        f = self.store.get(name.lower())
        if f is None:
            logger.debug(f"{name} not found")
            return RequestResult(RequestResultType.RecordError, "")
        return RequestResult(RequestResultType.Found, f=f)
