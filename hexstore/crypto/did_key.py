from multibase import encode, decode
import base58
import multicodec
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat, PrivateFormat, NoEncryption

# Simple DIDs, using the did:key method, with Ed25519 keypairs.
# See https://w3c-ccg.github.io/did-method-key/ for the encoding of the key.

ED25519_CODEC = 'ed25519-pub'
DID_KEY_PREFIX = "did:key:"

def create_did() -> tuple[str, bytes, bytes]:
    "This creates a simple DID, using the did:key method, with an Ed25519 keypair."
    private_key = Ed25519PrivateKey.generate()
    public_key = private_key.public_key()

    public_key_bytes = public_key.public_bytes(Encoding.Raw, PublicFormat.Raw)
    private_key_bytes = private_key.private_bytes(Encoding.Raw, PrivateFormat.Raw, NoEncryption())
    return (did_from_public_key(public_key_bytes), public_key_bytes, private_key_bytes,)

def did_from_public_key(public_key_bytes:bytes) -> str:
    return DID_KEY_PREFIX + fingerprint_from_public_key(public_key_bytes)

def fingerprint_from_public_key(public_key_bytes:bytes) -> str:
    """The multibase encoded public key, i.e. the last part of a did:key."""
    public_encoded = encode('base58btc', multicodec.add_prefix(ED25519_CODEC, public_key_bytes))
    return public_encoded.decode('utf8')

def public_key_from_private_key(private_key_bytes:bytes) -> bytes:
    private_key = Ed25519PrivateKey.from_private_bytes(private_key_bytes)
    return private_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)

def extract_key_type_and_public_key(did_key:str) -> tuple[str, bytes]:
    """Function to extract the key type and bytes from a DID key or from just its fingerprint"""
    multi_pub = did_key.split(":")[-1]
    ed255_multi = decode(multi_pub.encode('utf8'))
    codec = multicodec.get_codec(ed255_multi)
    ed255_binary:bytes = multicodec.remove_prefix(ed255_multi)
    return (codec, ed255_binary,)

def sign_digest(private_key_bytes:bytes, digest:bytes) -> str:
    """Signs a content digest, returns the signature base58 encoded."""
    private_key = Ed25519PrivateKey.from_private_bytes(private_key_bytes)
    return base58.b58encode(private_key.sign(digest)).decode('ascii')

def verify_digest(public_key_bytes:bytes, signature:str, digest:bytes) -> bool:
    try:
        signature_bytes = base58.b58decode(signature)
        Ed25519PublicKey.from_public_bytes(public_key_bytes).verify(signature_bytes, digest)
    except (InvalidSignature, ValueError):
        return False
    return True
