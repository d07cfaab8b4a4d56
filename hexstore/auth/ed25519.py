import logging
from typing import BinaryIO
from hexstore.errors import AuthenticationError
from hexstore.store.object_model import Identity
from hexstore.store.hashing import hash_stream
from hexstore.crypto.did_key import ED25519_CODEC, extract_key_type_and_public_key, verify_digest
from hexstore.auth.auth_spec import AuthSpec
from hexstore.auth.verifier import AuthVerifier

logger = logging.getLogger(__name__)

class Ed25519Verifier(AuthVerifier):
    """Public key signatures over the sha256 digest of the body.

    The key is the fingerprint part of a did:key (multibase, base58btc), the
    signature is base58 encoded. The identity is the raw public key.
    """
    method = "ed25519"

    def verify(self, auth_spec:AuthSpec, body:BinaryIO) -> Identity:
        if auth_spec.method != self.method:
            raise AuthenticationError(f"unsupported method {auth_spec.method}")
        try:
            codec, public_key_bytes = extract_key_type_and_public_key(auth_spec.key)
        except Exception as e:
            #multibase and multicodec raise assorted errors on garbage input
            raise AuthenticationError(f"cannot decode key {auth_spec.key}") from e
        if codec != ED25519_CODEC:
            raise AuthenticationError(f"unsupported key type {codec}")

        digest, _ = hash_stream(body)
        body.seek(0)
        if not verify_digest(public_key_bytes, auth_spec.signature, digest):
            raise AuthenticationError("signature does not match content")
        return public_key_bytes
