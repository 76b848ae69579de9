from fastapi import APIRouter, Depends, File, UploadFile
from sqlmodel import Session

from ..audit import records_for_document, records_matching_hash, serialize_audit
from ..db import get_session
from ..integrity import hash_bytes

router = APIRouter()

@router.get("/{document_id}")
def list_audit_records(document_id: str, session: Session = Depends(get_session)):
    return [serialize_audit(r) for r in records_for_document(session, document_id)]

@router.post("/verify")
async def verify_document(file: UploadFile = File(...), session: Session = Depends(get_session)):
    data = await file.read()
    digest = hash_bytes(data)
    rows = records_matching_hash(session, digest)
    return {
        "sha256": digest,
        "verified": any(r.final_pdf_hash == digest for r in rows),
        "records": [serialize_audit(r) for r in rows],
    }
