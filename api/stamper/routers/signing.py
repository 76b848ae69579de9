import logging
from functools import partial

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlmodel import Session

from .. import storage
from ..audit import save_audit
from ..config import SERVER_BASE_URL, SIGNED_DOCS_PREFIX, placement_policy
from ..db import get_session
from ..errors import DegenerateGeometryError, InvalidFieldError, InvalidImageDataError, StamperError
from ..schemas import SignPdfRequest
from ..signing import SigningService

logger = logging.getLogger(__name__)

router = APIRouter()

def build_service(session: Session) -> SigningService:
    return SigningService(
        template_loader=storage.read_template,
        storage=storage,
        audit_store=partial(save_audit, session),
        base_url=SERVER_BASE_URL,
        policy=placement_policy(),
        prefix=SIGNED_DOCS_PREFIX,
    )

@router.post("/sign-pdf")
def sign_pdf(payload: SignPdfRequest, session: Session = Depends(get_session)):
    if not payload.field_data:
        raise HTTPException(400, "Invalid signature field data or missing field data.")
    try:
        placement = payload.field_data.to_placement()
    except InvalidFieldError:
        raise HTTPException(400, "Invalid signature field data or missing field data.")
    service = build_service(session)
    try:
        result = service.sign(
            payload.pdf_id, payload.signature_base64, placement, payload.signer_id
        )
    except InvalidImageDataError as exc:
        raise HTTPException(400, f"Signature embedding failed: {exc}")
    except DegenerateGeometryError as exc:
        raise HTTPException(400, f"Cannot place signature: {exc}")
    except StamperError as exc:
        logger.error("Signing %s failed: %s", payload.pdf_id, exc)
        raise HTTPException(500, f"Internal Server Error during PDF signing: {exc}")
    return result.as_response()

@router.get(f"/{SIGNED_DOCS_PREFIX}/{{filename}}")
def get_signed_pdf(filename: str):
    try:
        pdf_bytes = storage.get_bytes(f"{SIGNED_DOCS_PREFIX}/{filename}")
    except FileNotFoundError:
        raise HTTPException(404, "signed document not found")
    return Response(content=pdf_bytes, media_type="application/pdf")
