from . auth_spec import AuthSpec, AUTH_PREFIX
from . verifier import AuthResult, AuthVerifier, AuthChain
from . mock import MockVerifier
from . ed25519 import Ed25519Verifier

AUTH_VERIFIERS:dict[str, type[AuthVerifier]] = {
    MockVerifier.method: MockVerifier,
    Ed25519Verifier.method: Ed25519Verifier,
}

def create_auth_chain(methods:list[str]) -> AuthChain:
    """Creates a chain with the verifiers for the given methods, in that order."""
    verifiers = []
    for method in methods:
        if method not in AUTH_VERIFIERS:
            raise ValueError(f"Unknown auth method '{method}', choose from {', '.join(AUTH_VERIFIERS)}")
        verifiers.append(AUTH_VERIFIERS[method]())
    return AuthChain(verifiers)
