import hashlib
import logging
import string
from typing import BinaryIO
from hexstore.errors import ReadError, WriteError
from hexstore.store.object_model import Digest

logger = logging.getLogger(__name__)

CHUNK_SIZE = 65535
_DIGEST_LEN = 32
_DIGEST_STR_LEN = 64

def get_digest(data:bytes | bytearray) -> Digest:
    return hashlib.sha256(data).digest()

def is_digest_str(digest_str:str) -> bool:
    return (isinstance(digest_str, str) and len(digest_str) == _DIGEST_STR_LEN
        and all(c in string.hexdigits for c in digest_str))

def is_digest(digest:Digest) -> bool:
    return isinstance(digest, (bytes, bytearray)) and len(digest) == _DIGEST_LEN

def to_digest_str(digest:Digest) -> str:
    return digest.hex()

def to_digest(digest_str:str) -> Digest:
    return bytes.fromhex(digest_str)

def hash_stream(stream:BinaryIO, expected_size:int=0, sink:BinaryIO|None=None) -> tuple[Digest, int]:
    """Consumes the stream in chunks, returning the sha256 digest and the number of bytes read.

    Every chunk is also written to the sink, if one is given, so that the content can be
    persisted while it is being hashed. If expected_size is larger than zero, the number of
    bytes read must match it exactly.
    """
    h = hashlib.sha256()
    total_size = 0
    while True:
        try:
            chunk = stream.read(CHUNK_SIZE)
        except (OSError, ValueError) as e:
            #closed or broken streams raise ValueError
            logger.error(f"cannot read from request body: {e}")
            raise ReadError(str(e)) from e
        if not chunk:
            break
        total_size += len(chunk)
        h.update(chunk)
        if sink is not None:
            try:
                sink.write(chunk)
            except OSError as e:
                raise WriteError(str(e)) from e

    if expected_size > 0 and expected_size != total_size:
        raise ReadError(f"expected {expected_size} bytes, got {total_size}")
    return h.digest(), total_size
