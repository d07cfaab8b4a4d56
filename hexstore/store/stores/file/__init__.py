from . file_object_store import FileObjectStore
from . symlink_references import SymlinkReferences
from . file_references import FileReferences
