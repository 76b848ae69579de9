"""Content digests and the audit record produced for every signing."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from .errors import IntegrityComputationError


@dataclass(frozen=True)
class IntegrityRecord:
    document_id: str
    original_hash: str
    final_hash: str
    signer_id: str
    timestamp: datetime


def hash_bytes(buffer) -> str:
    """SHA-256 hex digest of the exact byte sequence."""
    if not isinstance(buffer, (bytes, bytearray, memoryview)):
        raise IntegrityComputationError(f"cannot hash {type(buffer).__name__}: expected bytes")
    try:
        return hashlib.sha256(buffer).hexdigest()
    except (TypeError, ValueError, BufferError) as exc:
        raise IntegrityComputationError(f"cannot hash {type(buffer).__name__}: {exc}") from exc


def record_signing(
    original_bytes,
    final_bytes,
    document_id: str,
    signer_id: str,
    timestamp: Optional[datetime] = None,
) -> IntegrityRecord:
    original_hash = hash_bytes(original_bytes)
    final_hash = hash_bytes(final_bytes)
    return IntegrityRecord(
        document_id=document_id,
        original_hash=original_hash,
        final_hash=final_hash,
        signer_id=signer_id,
        timestamp=timestamp or datetime.now(timezone.utc),
    )
