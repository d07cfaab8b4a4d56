from starlette.testclient import TestClient
from hexstore.auth import create_auth_chain
from hexstore.store import get_digest
from hexstore.store.stores.file import FileObjectStore
from hexstore.runtime import RequestRouter
from hexstore.web import WebServer
from hexstore.crypto.did_key import fingerprint_from_public_key, sign_digest

def setup_client(store_path, auth_methods:list[str]=None, use_symlinks:bool=True) -> TestClient:
    if auth_methods is None:
        auth_methods = ["mock", "ed25519"]
    store = FileObjectStore(store_path, use_symlinks=use_symlinks)
    router = RequestRouter(store, create_auth_chain(auth_methods))
    return TestClient(WebServer(router).app())

def ed25519_header(private_key_bytes:bytes, public_key_bytes:bytes, content:bytes) -> str:
    signature = sign_digest(private_key_bytes, get_digest(content))
    return f"PUBSIG ed25519:{fingerprint_from_public_key(public_key_bytes)}:{signature}"
