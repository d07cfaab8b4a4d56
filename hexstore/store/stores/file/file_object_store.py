import os
import logging
import tempfile
from pathlib import Path
from typing import BinaryIO
from hexstore.errors import WriteError
from hexstore.store.object_model import *
from hexstore.store.object_store import ObjectStore
from hexstore.store.references import References
from hexstore.store.hashing import hash_stream, is_digest_str
from . symlink_references import SymlinkReferences
from . file_references import FileReferences

logger = logging.getLogger(__name__)

STAGING_PREFIX = ".staging-"

class FileObjectStore(ObjectStore):
    """Stores content in a single flat directory, one file per digest.

    Content is streamed into a private staging file next to the final location and
    then linked into place, so a reader never sees a partially written object and
    concurrent writers of the same content cannot clobber each other.
    Mutable links are kept by the References implementation, by default as symlinks
    in the same directory.
    """

    def __init__(self, store_path:str|Path, references:References|None=None, use_symlinks:bool=True):
        super().__init__()
        self.store_path = Path(store_path)
        #ensure that the path exists
        os.makedirs(self.store_path, exist_ok=True)
        if references is None:
            if use_symlinks:
                references = SymlinkReferences(self.store_path)
            else:
                references = FileReferences(self.store_path)
        self.references = references

    def put_immutable(self, body:BinaryIO, expected_size:int=0) -> Record:
        try:
            fd, staging_path = tempfile.mkstemp(prefix=STAGING_PREFIX, dir=self.store_path)
        except OSError as e:
            logger.error(f"cannot create staging file in {self.store_path}: {e}")
            raise WriteError(str(e)) from e

        # the staging file never outlives this call, whatever happens
        try:
            logger.debug(f"writing to staging file {staging_path}")
            try:
                with os.fdopen(fd, 'wb') as f:
                    digest, total_size = hash_stream(body, expected_size, sink=f)
            except OSError as e:
                raise WriteError(str(e)) from e

            digest_str = digest.hex()
            logger.info(f"have hash {digest_str} for content ({total_size} bytes)")
            object_path = self._to_path(digest_str)
            self._place(Path(staging_path), object_path)
        finally:
            try:
                os.unlink(staging_path)
            except FileNotFoundError:
                pass
        return Record(digest, object_path)

    def put_mutable(self, pointer:PointerAddress, body:BinaryIO, expected_size:int=0) -> Record:
        record = self.put_immutable(body, expected_size)
        try:
            link_path = self.references.set(pointer, record.digest)
        except OSError as e:
            # the immutable object stays in place and can still be read by its digest
            logger.error(f"cannot link {pointer.hex()} to {record.digest.hex()}: {e}")
            raise WriteError(f"content stored as {record.digest.hex()}, but link failed") from e
        logger.debug(f"linked {pointer.hex()} -> {record.digest.hex()}")
        return Record(pointer, link_path)

    def get(self, key_hex:str) -> BinaryIO | None:
        if not is_digest_str(key_hex):
            return None
        key_hex = key_hex.lower()
        try:
            return open(self._to_path(key_hex), 'rb')
        except FileNotFoundError:
            pass
        object_path = self.references.resolve_path(key_hex)
        if object_path is None:
            return None
        try:
            return open(object_path, 'rb')
        except FileNotFoundError:
            return None

    def _place(self, staging_path:Path, object_path:Path):
        #check if the object already exists
        if os.path.exists(object_path):
            logger.debug(f"object {object_path.name} already exists")
            return
        try:
            # a hard link never replaces an existing file, so a racing writer of the same content wins cleanly
            os.link(staging_path, object_path)
        except FileExistsError:
            logger.debug(f"object {object_path.name} was placed concurrently")
        except OSError as e:
            # no hard links on this file system, a rename is still atomic and the content is identical
            logger.debug(f"cannot hard link {object_path.name}, renaming instead: {e}")
            try:
                os.replace(staging_path, object_path)
            except OSError as e:
                logger.error(f"cannot place object {object_path.name}: {e}")
                raise WriteError(str(e)) from e

    def _to_path(self, key_hex:str) -> Path:
        return self.store_path / key_hex
