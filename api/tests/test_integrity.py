import dataclasses
from datetime import datetime, timezone

import pytest

from stamper.errors import IntegrityComputationError
from stamper.integrity import hash_bytes, record_signing

EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_hash_is_sha256_hex():
    assert hash_bytes(b"") == EMPTY_SHA256
    assert len(hash_bytes(b"%PDF-1.4")) == 64


def test_hash_is_deterministic_across_buffer_types():
    data = b"%PDF-1.4 signed content"
    assert hash_bytes(data) == hash_bytes(data)
    assert hash_bytes(bytearray(data)) == hash_bytes(data)
    assert hash_bytes(memoryview(data)) == hash_bytes(data)


def test_single_byte_change_changes_hash():
    data = bytearray(b"%PDF-1.4 signed content")
    before = hash_bytes(data)
    data[-1] ^= 0x01
    assert hash_bytes(data) != before


@pytest.mark.parametrize("bad", ["text is not bytes", None, 42])
def test_unhashable_input_raises_integrity_error(bad):
    with pytest.raises(IntegrityComputationError):
        hash_bytes(bad)


def test_record_signing_packages_both_hashes():
    when = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    record = record_signing(b"original", b"final", "doc-1", "signer-9", timestamp=when)

    assert record.document_id == "doc-1"
    assert record.signer_id == "signer-9"
    assert record.original_hash == hash_bytes(b"original")
    assert record.final_hash == hash_bytes(b"final")
    assert record.timestamp == when


def test_record_defaults_to_aware_utc_timestamp_and_is_immutable():
    record = record_signing(b"a", b"b", "doc", "guest-signer")

    assert record.timestamp.tzinfo is not None
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.final_hash = "0" * 64


def test_record_signing_fails_without_partial_record():
    with pytest.raises(IntegrityComputationError):
        record_signing(b"original", "not-bytes", "doc", "guest-signer")
