from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FilterStateModel(BaseModel):
    """Filter patterns as sent by the presentation layer (camelCase or snake_case)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    supplier_id: str = Field(default="", alias="supplierId")
    customer_id: str = Field(default="", alias="customerId")
    license_no: str = Field(default="", alias="licenseNo")
    category: str = ""
    model: str = ""
    lot_no: str = Field(default="", alias="lotNo")
    serial_no: str = Field(default="", alias="serialNo")
    udid: str = ""
    delivery_date: str = Field(default="", alias="deliveryDate")
    region: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_pattern(cls, value: object) -> str:
        if value is None:
            return ""
        return str(value)

