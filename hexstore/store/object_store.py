from abc import ABC, abstractmethod
from typing import BinaryIO
from hexstore.store.object_model import *

class ObjectStore(ABC):
    """Interface for persisting and reading content in the object store."""
    @abstractmethod
    def put_immutable(self, body:BinaryIO, expected_size:int=0) -> Record:
        pass

    @abstractmethod
    def put_mutable(self, pointer:PointerAddress, body:BinaryIO, expected_size:int=0) -> Record:
        pass

    @abstractmethod
    def get(self, key_hex:str) -> BinaryIO | None:
        pass
