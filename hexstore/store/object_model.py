from pathlib import Path
from typing import NamedTuple

# Type aliases and structures used by the object store.

Digest = bytes #32 bytes, sha256 of the content
PointerAddress = bytes #32 bytes, sha256 of resource key + identity
Identity = bytes #opaque, empty means anonymous

Record = NamedTuple("Record",
    [('digest', Digest | PointerAddress),
     ('path', Path)])
