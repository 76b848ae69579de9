"""Audit store: persists integrity records and looks them up by hash."""

import logging
from typing import List

from sqlalchemy import or_
from sqlmodel import Session, select

from .integrity import IntegrityRecord
from .models import AuditTrail

logger = logging.getLogger(__name__)


def save_audit(session: Session, record: IntegrityRecord) -> AuditTrail:
    row = AuditTrail(
        document_id=record.document_id,
        original_pdf_hash=record.original_hash,
        final_pdf_hash=record.final_hash,
        signer_id=record.signer_id,
        signed_at=record.timestamp,
    )
    session.add(row)
    session.commit()
    session.refresh(row)
    logger.info("Audit trail saved for document %s (final %s)", record.document_id, record.final_hash)
    return row


def records_for_document(session: Session, document_id: str) -> List[AuditTrail]:
    return session.exec(
        select(AuditTrail).where(AuditTrail.document_id == document_id).order_by(AuditTrail.id)
    ).all()


def records_matching_hash(session: Session, digest: str) -> List[AuditTrail]:
    return session.exec(
        select(AuditTrail).where(
            or_(AuditTrail.final_pdf_hash == digest, AuditTrail.original_pdf_hash == digest)
        ).order_by(AuditTrail.id)
    ).all()


def serialize_audit(row: AuditTrail) -> dict:
    return {
        "id": row.id,
        "document_id": row.document_id,
        "original_hash": row.original_pdf_hash,
        "final_hash": row.final_pdf_hash,
        "signer_id": row.signer_id,
        "signed_at": row.signed_at,
    }
