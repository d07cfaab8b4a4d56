import os
import logging
from pathlib import Path
from hexstore.store.object_model import Digest, PointerAddress
from hexstore.store.references import References
from hexstore.store.hashing import is_digest_str

logger = logging.getLogger(__name__)

REF_SUFFIX = ".ref"

class FileReferences(References):
    """Mutable links as small record files, for file systems without symlinks.

    Each link is a '<pointer>.ref' file holding the hex digest of the object it points at.
    Records are written to a temporary file and renamed into place.
    """
    def __init__(self, store_path:str|Path):
        super().__init__()
        self.store_path = Path(store_path)
        os.makedirs(self.store_path, exist_ok=True)

    def get(self, pointer:PointerAddress) -> Digest | None:
        digest_str = self._read_record(pointer.hex())
        if digest_str is None:
            return None
        return bytes.fromhex(digest_str)

    def set(self, pointer:PointerAddress, digest:Digest) -> Path:
        record_path = self._to_path(pointer.hex())
        tmp_path = record_path.with_name(f".{record_path.name}-{os.urandom(8).hex()}")
        try:
            with open(tmp_path, 'w') as f:
                f.write(digest.hex())
            os.replace(tmp_path, record_path)
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
        return record_path

    def resolve_path(self, key_hex:str) -> Path | None:
        digest_str = self._read_record(key_hex)
        if digest_str is None:
            return None
        return self.store_path / digest_str

    def _read_record(self, key_hex:str) -> str | None:
        try:
            with open(self._to_path(key_hex), 'r') as f:
                digest_str = f.read().strip()
        except FileNotFoundError:
            return None
        if not is_digest_str(digest_str):
            logger.warning(f"record {key_hex} is corrupt")
            return None
        return digest_str

    def _to_path(self, key_hex:str) -> Path:
        return self.store_path / f"{key_hex}{REF_SUFFIX}"
