"""Pydantic models for request bodies."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FieldChangeForm(BaseModel):
    """Set one wizard field."""
    field: str = Field(..., min_length=1, description="Form field name")
    value: Any = Field(None, description="New value; null removes the field")


class JumpForm(BaseModel):
    """Activate a section directly."""
    index: int = Field(..., ge=0, description="Section index")


class DocumentForm(BaseModel):
    """Form snapshot sent for PDF download."""
    model_config = ConfigDict(populate_by_name=True)

    form_data: Dict[str, Any] = Field(..., alias="formData", description="Values keyed by field name")
    dates: Dict[str, Optional[str]] = Field(default_factory=dict, description="Date fields keyed by field name")
    strategy: Optional[str] = Field(None, description="PDF strategy: html or vector")

    @field_validator("strategy")
    @classmethod
    def validate_strategy(cls, v):
        """Validate PDF strategy value."""
        if v is not None and v not in ("html", "vector"):
            raise ValueError("Strategy must be html or vector")
        return v


class SendInquiryForm(DocumentForm):
    """Form snapshot plus optional recipient overrides."""
    customer_email: Optional[str] = Field(None, alias="customerEmail")
    agency_email: Optional[str] = Field(None, alias="agencyEmail")
