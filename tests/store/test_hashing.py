import io
import hashlib
import os
import pytest
from hexstore.errors import ReadError
from hexstore.store import *

FOO_DIGEST = "2c26b46b68ffc68ff99b453c1d30413413422d706483bfa0f98a5e886266e7ae"

class FailingStream(io.RawIOBase):
    def __init__(self, fail_after:int):
        self.fail_after = fail_after
        self.read_count = 0

    def readable(self):
        return True

    def read(self, size=-1):
        if self.read_count >= self.fail_after:
            raise OSError("connection reset")
        self.read_count += 1
        return b"x" * 10

def test_digest_of_foo():
    digest, total_size = hash_stream(io.BytesIO(b"foo"), 3)
    assert digest.hex() == FOO_DIGEST
    assert total_size == 3
    assert get_digest(b"foo") == digest

def test_digest_is_deterministic():
    data = os.urandom(CHUNK_SIZE * 3 + 17)
    digest_1, _ = hash_stream(io.BytesIO(data))
    digest_2, _ = hash_stream(io.BytesIO(data))
    assert digest_1 == digest_2
    assert digest_1 == hashlib.sha256(data).digest()

def test_sink_receives_all_chunks():
    data = os.urandom(CHUNK_SIZE * 2 + 5)
    sink = io.BytesIO()
    digest, total_size = hash_stream(io.BytesIO(data), len(data), sink=sink)
    assert sink.getvalue() == data
    assert total_size == len(data)
    assert digest == get_digest(data)

def test_no_expected_size():
    _, total_size = hash_stream(io.BytesIO(b"foobar"), 0)
    assert total_size == 6

def test_short_read():
    with pytest.raises(ReadError):
        hash_stream(io.BytesIO(b"foo"), 4)

def test_long_read():
    with pytest.raises(ReadError):
        hash_stream(io.BytesIO(b"foobar"), 3)

def test_stream_error():
    with pytest.raises(ReadError):
        hash_stream(FailingStream(fail_after=2))

def test_digest_str_helpers():
    digest = get_digest(b"foo")
    assert is_digest(digest)
    assert not is_digest(b"foo")
    assert is_digest_str(to_digest_str(digest))
    assert to_digest(to_digest_str(digest)) == digest
    assert not is_digest_str("deadbeef")
    assert not is_digest_str("z" * 64)

def test_closed_stream():
    stream = io.BytesIO(b"foo")
    stream.close()
    with pytest.raises(ReadError):
        hash_stream(stream, 3)
