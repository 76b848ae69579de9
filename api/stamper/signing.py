"""Signing flow: place a signature image on the template and record its hashes.

The service receives every collaborator explicitly; it never reaches for the
database engine, the object store client or the configuration module itself.
"""

from __future__ import annotations

import logging
import re
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable, List

from .geometry import (
    DEFAULT_POLICY,
    DrawInstruction,
    PlacementPolicy,
    PlacementRequest,
    fit_centered,
    to_absolute_box,
)
from .integrity import IntegrityRecord, record_signing
from .stamping import open_pdf, page_geometry, select_page, stamp_image
from .utils import b64image_to_bytes, read_image_dimensions

logger = logging.getLogger(__name__)

OVERFLOW_FALLBACK_WARNING = "overflow_fallback_applied"

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


@dataclass(frozen=True)
class SigningResult:
    url: str
    key: str
    record: IntegrityRecord
    draw: DrawInstruction
    warnings: List[str] = field(default_factory=list)

    def as_response(self) -> dict:
        return {
            "url": self.url,
            "originalHash": self.record.original_hash,
            "finalHash": self.record.final_hash,
            "signedAt": self.record.timestamp.isoformat(),
            "draw": self.draw.as_dict(),
            "warnings": list(self.warnings),
        }


class SigningService:
    def __init__(
        self,
        template_loader: Callable[[], bytes],
        storage,
        audit_store: Callable[[IntegrityRecord], object],
        base_url: str,
        policy: PlacementPolicy = DEFAULT_POLICY,
        prefix: str = "signed_docs",
    ) -> None:
        self.template_loader = template_loader
        self.storage = storage
        self.audit_store = audit_store
        self.base_url = base_url.rstrip("/")
        self.policy = policy
        self.prefix = prefix.strip("/")

    def _artifact_name(self, document_id: str) -> str:
        safe_id = _UNSAFE_KEY_CHARS.sub("_", document_id) or "document"
        return f"signed_{safe_id}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}.pdf"

    def sign(
        self,
        document_id: str,
        signature_data: str,
        placement: PlacementRequest,
        signer_id: str = "guest-signer",
    ) -> SigningResult:
        image_bytes = b64image_to_bytes(signature_data)
        image = read_image_dimensions(image_bytes)

        original = self.template_loader()
        reader = open_pdf(original)
        page_index = select_page(reader, placement.page_index)
        page = page_geometry(reader, page_index)

        box = to_absolute_box(placement, page, self.policy)
        logger.debug(
            "Page %d dims W=%.2f H=%.2f, box (bottom-left) X=%.2f Y=%.2f W=%.2f H=%.2f",
            page_index + 1, page.width_points, page.height_points,
            box.x, box.y, box.width, box.height,
        )
        warnings = []
        if box.fallback_applied:
            logger.warning(
                "Placement x=%s for document %s is off-page; using fallback box X=%.2f W=%.2f H=%.2f",
                placement.relative_x, document_id, box.x, box.width, box.height,
            )
            warnings.append(OVERFLOW_FALLBACK_WARNING)

        draw = fit_centered(box, image)
        logger.debug(
            "Final draw X=%.2f Y=%.2f W=%.2f H=%.2f", draw.x, draw.y, draw.width, draw.height
        )

        final = stamp_image(reader, page_index, draw, image_bytes)
        record = record_signing(original, final, document_id, signer_id)

        filename = self._artifact_name(document_id)
        key = f"{self.prefix}/{filename}"
        self.storage.put_bytes(key, final, "application/pdf")
        try:
            self.audit_store(record)
        except Exception:
            logger.error("Audit write failed for %s, removing stored artifact %s", document_id, key)
            try:
                self.storage.delete_object(key)
            except Exception:
                logger.error("Could not remove stored artifact %s", key, exc_info=True)
            raise
        logger.info("Signed PDF for document %s stored at %s", document_id, key)

        return SigningResult(
            url=f"{self.base_url}/{self.prefix}/{filename}",
            key=key,
            record=record,
            draw=draw,
            warnings=warnings,
        )
