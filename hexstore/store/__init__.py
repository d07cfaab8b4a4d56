from . object_model import *
from . object_store import ObjectStore
from . references import References
from . hashing import (CHUNK_SIZE, get_digest, hash_stream, is_digest, is_digest_str, to_digest,
                       to_digest_str)
from . resource_key import ResourceKey, derive_key, derive_pointer
