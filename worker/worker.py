import logging
from functools import partial

from celery import Celery
from sqlmodel import Session

from stamper import db, storage
from stamper.audit import save_audit
from stamper.config import REDIS_URL, WORKER_QUEUE, SERVER_BASE_URL, SIGNED_DOCS_PREFIX, placement_policy
from stamper.schemas import FieldData
from stamper.signing import SigningService

logger = logging.getLogger(__name__)

cel = Celery("stamper", broker=REDIS_URL, backend=REDIS_URL)

@cel.task(name="sign_document", queue=WORKER_QUEUE)
def sign_document(document_id: str, signature_data: str, field: dict, signer_id: str = "guest-signer"):
    placement = FieldData(**field).to_placement()
    with Session(db.engine) as session:
        service = SigningService(
            template_loader=storage.read_template,
            storage=storage,
            audit_store=partial(save_audit, session),
            base_url=SERVER_BASE_URL,
            policy=placement_policy(),
            prefix=SIGNED_DOCS_PREFIX,
        )
        result = service.sign(document_id, signature_data, placement, signer_id)
    logger.info("Worker signed document %s -> %s", document_id, result.key)
    return result.as_response()
