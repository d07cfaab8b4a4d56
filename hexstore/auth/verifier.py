import logging
from abc import ABC, abstractmethod
from typing import BinaryIO
from hexstore.errors import AuthenticationError, RequestError
from hexstore.store.object_model import Identity
from hexstore.auth.auth_spec import AuthSpec

logger = logging.getLogger(__name__)

class AuthResult:
    """Outcome of authenticating a request: anonymous, authenticated with an identity, or rejected."""
    identity:Identity
    error:bool

    def __init__(self, identity:Identity=b"", error:bool=False):
        self.identity = identity
        self.error = error

    @classmethod
    def anonymous(cls) -> 'AuthResult':
        return cls(b"", False)

    @classmethod
    def authenticated(cls, identity:Identity) -> 'AuthResult':
        if len(identity) == 0:
            raise ValueError("identity must not be empty")
        return cls(identity, False)

    @classmethod
    def rejected(cls) -> 'AuthResult':
        return cls(b"", True)

    def active(self) -> bool:
        return len(self.identity) > 0

    def valid(self) -> bool:
        return not self.error

    def __repr__(self) -> str:
        if self.error:
            return "AuthResult(rejected)"
        if not self.active():
            return "AuthResult(anonymous)"
        return f"AuthResult(authenticated, {len(self.identity)} byte identity)"

class AuthVerifier(ABC):
    """Checks a credential against the request body and returns the identity of the caller.

    Implementations raise AuthenticationError if the credential does not verify,
    including when the method is not theirs. The body is seekable and must be
    left rewound.
    """
    method:str

    @abstractmethod
    def verify(self, auth_spec:AuthSpec, body:BinaryIO) -> Identity:
        pass

class AuthChain:
    """Tries the configured verifiers in order, the first one that succeeds wins."""
    verifiers:list[AuthVerifier]

    def __init__(self, verifiers:list[AuthVerifier]|None=None):
        self.verifiers = list(verifiers or [])

    def authenticate(self, auth_spec:AuthSpec|None, body:BinaryIO) -> AuthResult:
        if auth_spec is None:
            return AuthResult.anonymous()
        if not auth_spec.valid():
            logger.info(f"invalid {auth_spec.method} credential, no key")
            return AuthResult.rejected()
        for verifier in self.verifiers:
            try:
                identity = verifier.verify(auth_spec, body)
            except AuthenticationError as e:
                logger.debug(f"{verifier.method} did not accept {auth_spec.method} credential: {e}")
                continue
            except RequestError as e:
                logger.error(f"{verifier.method} could not read the request body: {e}")
                continue
            finally:
                body.seek(0)
            if len(identity) == 0:
                logger.warning(f"{verifier.method} returned an empty identity, ignoring it")
                continue
            logger.debug(f"authenticated by {verifier.method}")
            return AuthResult.authenticated(identity)
        logger.info(f"no verifier accepted {auth_spec.method} credential")
        return AuthResult.rejected()
