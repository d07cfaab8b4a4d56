import hashlib
from hexstore.store.object_model import Digest, Identity, PointerAddress

class ResourceKey:
    """Stable key for a caller-chosen resource name.

    Combined with an authenticated identity, the key yields the pointer address
    under which the caller's mutable link for that name is kept.
    """
    v:bytes

    def __init__(self, v:bytes):
        self.v = v

    @classmethod
    def from_str(cls, name:str) -> 'ResourceKey':
        return cls(hashlib.sha256(name.encode('utf-8')).digest())

    def pointer_for(self, identity:Identity) -> PointerAddress:
        h = hashlib.sha256()
        h.update(self.v)
        h.update(identity)
        return h.digest()

    def hex(self) -> str:
        return self.v.hex()

    def __eq__(self, other) -> bool:
        return isinstance(other, ResourceKey) and self.v == other.v

    def __hash__(self) -> int:
        return hash(self.v)

    def __repr__(self) -> str:
        return f"ResourceKey({self.v.hex()})"

def derive_key(name:str) -> ResourceKey:
    return ResourceKey.from_str(name)

def derive_pointer(key:ResourceKey|Digest, identity:Identity) -> PointerAddress:
    if not isinstance(key, ResourceKey):
        key = ResourceKey(key)
    return key.pointer_for(identity)
