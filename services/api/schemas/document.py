"""
Pydantic schemas for repair documents.
"""
from dataclasses import asdict
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from models import DocumentStatus, DocumentType, PotholeDocument, Priority


class DocumentCreate(BaseModel):
    """Schema for creating a document."""
    title: str = Field(..., min_length=1, max_length=200)
    type: DocumentType
    status: DocumentStatus = DocumentStatus.PENDING
    priority: Priority = Priority.MEDIUM
    due_date: str = Field(..., min_length=1, description="ISO date the work is due")
    assigned_to: str = Field(..., min_length=1, max_length=200, description="Staff name")
    pothole_id: Optional[str] = Field(None, description="Linked defect, if any")


class DocumentPatch(BaseModel):
    """Partial update for document fields."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[DocumentType] = None
    status: Optional[DocumentStatus] = None
    priority: Optional[Priority] = None
    due_date: Optional[str] = Field(None, min_length=1)
    assigned_to: Optional[str] = Field(None, min_length=1, max_length=200)
    pothole_id: Optional[str] = None

    @field_validator("title", "type", "status", "priority", "due_date", "assigned_to", mode="before")
    @classmethod
    def reject_null(cls, v):
        # only pothole_id may be cleared
        if v is None:
            raise ValueError("may not be null")
        return v

    @model_validator(mode="after")
    def require_any_field(self) -> "DocumentPatch":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        return self


class DocumentOut(BaseModel):
    """Schema for document output."""
    id: str
    title: str
    type: DocumentType
    status: DocumentStatus
    priority: Priority
    due_date: str
    assigned_to: str
    pothole_id: Optional[str] = None
    created_at: str

    @classmethod
    def from_domain(cls, doc: PotholeDocument) -> "DocumentOut":
        return cls.model_validate(asdict(doc))
