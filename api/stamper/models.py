from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field as ORMField

class AuditTrail(SQLModel, table=True):
    id: Optional[int] = ORMField(default=None, primary_key=True)
    document_id: str = ORMField(index=True)
    original_pdf_hash: str = ORMField(index=True)
    final_pdf_hash: str = ORMField(index=True)
    signer_id: Optional[str] = None
    signed_at: datetime
