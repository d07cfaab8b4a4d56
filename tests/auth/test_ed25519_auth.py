import io
import pytest
from hexstore.errors import AuthenticationError
from hexstore.auth import AuthSpec, Ed25519Verifier
from hexstore.crypto.did_key import *
from hexstore.store import get_digest

def make_auth_spec(private_key_bytes:bytes, public_key_bytes:bytes, content:bytes) -> AuthSpec:
    signature = sign_digest(private_key_bytes, get_digest(content))
    return AuthSpec("ed25519", fingerprint_from_public_key(public_key_bytes), signature)

def test_did_round_trip():
    did, public_key_bytes, private_key_bytes = create_did()
    assert did.startswith("did:key:z6Mk")
    codec, public_key_bytes_2 = extract_key_type_and_public_key(did)
    assert codec == ED25519_CODEC
    assert public_key_bytes_2 == public_key_bytes
    assert public_key_from_private_key(private_key_bytes) == public_key_bytes
    #the fingerprint alone works too
    assert extract_key_type_and_public_key(fingerprint_from_public_key(public_key_bytes))[1] == public_key_bytes

def test_verify():
    _, public_key_bytes, private_key_bytes = create_did()
    body = io.BytesIO(b"foobar")
    auth_spec = make_auth_spec(private_key_bytes, public_key_bytes, b"foobar")
    identity = Ed25519Verifier().verify(auth_spec, body)
    assert identity == public_key_bytes
    #the body is left for the store to read
    assert body.read() == b"foobar"

def test_verify_tampered_body():
    _, public_key_bytes, private_key_bytes = create_did()
    auth_spec = make_auth_spec(private_key_bytes, public_key_bytes, b"foobar")
    with pytest.raises(AuthenticationError):
        Ed25519Verifier().verify(auth_spec, io.BytesIO(b"foobaz"))

def test_verify_other_key():
    _, public_key_bytes, _ = create_did()
    _, _, other_private_key_bytes = create_did()
    auth_spec = make_auth_spec(other_private_key_bytes, public_key_bytes, b"foobar")
    with pytest.raises(AuthenticationError):
        Ed25519Verifier().verify(auth_spec, io.BytesIO(b"foobar"))

def test_verify_garbage():
    verifier = Ed25519Verifier()
    with pytest.raises(AuthenticationError):
        verifier.verify(AuthSpec("ed25519", "foo", "bar"), io.BytesIO(b"foobar"))
    with pytest.raises(AuthenticationError):
        verifier.verify(AuthSpec("mock", "foo", "foo"), io.BytesIO(b"foobar"))
    _, public_key_bytes, _ = create_did()
    with pytest.raises(AuthenticationError):
        verifier.verify(AuthSpec("ed25519", fingerprint_from_public_key(public_key_bytes), "0OIl"), io.BytesIO(b"foobar"))
