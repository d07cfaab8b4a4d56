from typing import BinaryIO
from hexstore.errors import AuthenticationError
from hexstore.store.object_model import Identity
from hexstore.auth.auth_spec import AuthSpec
from hexstore.auth.verifier import AuthVerifier

class MockVerifier(AuthVerifier):
    """Shared-secret scheme for development: the signature must repeat the key."""
    method = "mock"

    def verify(self, auth_spec:AuthSpec, body:BinaryIO) -> Identity:
        if auth_spec.method != self.method:
            raise AuthenticationError(f"unsupported method {auth_spec.method}")
        if auth_spec.key != auth_spec.signature:
            raise AuthenticationError("auth key signature mismatch")
        return auth_spec.key.encode('utf-8')
