import os
import logging
from pathlib import Path
from hexstore.store.object_model import Digest, PointerAddress
from hexstore.store.references import References
from hexstore.store.hashing import is_digest_str

logger = logging.getLogger(__name__)

class SymlinkReferences(References):
    """Mutable links as symbolic links named by the pointer, pointing at the object file.

    A link is replaced by creating a new link under a temporary name and renaming it
    over the old one, so a reader either follows the old or the new target.
    """

    def __init__(self, store_path:str|Path):
        super().__init__()
        self.store_path = Path(store_path)
        os.makedirs(self.store_path, exist_ok=True)

    def get(self, pointer:PointerAddress) -> Digest | None:
        target = self._read_link(self.store_path / pointer.hex())
        if target is None:
            return None
        return bytes.fromhex(target)

    def set(self, pointer:PointerAddress, digest:Digest) -> Path:
        link_path = self.store_path / pointer.hex()
        tmp_path = self.store_path / f".link-{pointer.hex()}-{os.urandom(8).hex()}"
        #relative target, so the store directory can be moved around
        os.symlink(digest.hex(), tmp_path)
        try:
            os.replace(tmp_path, link_path)
        except OSError:
            os.unlink(tmp_path)
            raise
        return link_path

    def resolve_path(self, key_hex:str) -> Path | None:
        target = self._read_link(self.store_path / key_hex)
        if target is None:
            return None
        return self.store_path / target

    def _read_link(self, link_path:Path) -> str | None:
        try:
            target = os.path.basename(os.readlink(link_path))
        except OSError:
            return None
        if not is_digest_str(target):
            logger.warning(f"link {link_path.name} points at something that is not an object: {target}")
            return None
        return target
