from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from .errors import InvalidFieldError
from .geometry import PlacementRequest

SIGNATURE_FIELD_TYPE = "Signature"

class FieldData(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    type: str
    x: float
    y: float
    width: float
    height: float
    page: int = 1

    def to_placement(self) -> PlacementRequest:
        if self.type != SIGNATURE_FIELD_TYPE:
            raise InvalidFieldError(f"field type {self.type!r} is not {SIGNATURE_FIELD_TYPE!r}")
        return PlacementRequest(
            relative_x=self.x,
            relative_y=self.y,
            relative_width=self.width,
            relative_height=self.height,
            page_index=self.page,
        )

class SignPdfRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pdf_id: str = Field(alias="pdfId")
    signature_base64: str = Field(default="", alias="signatureBase64")
    field_data: Optional[FieldData] = Field(default=None, alias="fieldData")
    signer_id: str = Field(default="guest-signer", alias="signerId")
