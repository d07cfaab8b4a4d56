from abc import ABC, abstractmethod
from pathlib import Path
from hexstore.store.object_model import Digest, PointerAddress

class References(ABC):
    """Interface for the mutable links that point at immutable objects."""
    @abstractmethod
    def get(self, pointer:PointerAddress) -> Digest | None:
        pass

    @abstractmethod
    def set(self, pointer:PointerAddress, digest:Digest) -> Path:
        """Creates or replaces the link, returns the path of the link."""
        pass

    @abstractmethod
    def resolve_path(self, key_hex:str) -> Path | None:
        """Returns the object path a link with the given name resolves to, or None."""
        pass
