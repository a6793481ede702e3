# services/api/routers/documents.py
from __future__ import annotations

import logging
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from adapters import StorageError
from core.validation import coerce_filter
from models import DocumentStatus, PotholeDocument
from schemas import DocumentCreate, DocumentOut, DocumentPatch

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


def get_storage():
    from main import get_storage_adapter

    return get_storage_adapter()


# ---- DI alias (no default value allowed) ----
Storage = Annotated[object, Depends(get_storage)]


def _to_domain(rows) -> List[PotholeDocument]:
    out: List[PotholeDocument] = []
    for row in rows:
        try:
            out.append(PotholeDocument.from_storage(row))
        except ValueError as e:
            logger.warning(f"Skipping document row {row.get('id')!r}: {e}")
    return out


def _get_or_404(storage, document_id: str) -> PotholeDocument:
    try:
        row = storage.get_document(document_id)
    except StorageError as e:
        logger.error(f"Loading document {document_id} failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not load documents. Please try again later.",
        )
    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="DOCUMENT_NOT_FOUND")
    return PotholeDocument.from_storage(row)


def _ensure_pothole_exists(storage, pothole_id: Optional[str]) -> None:
    if not pothole_id:
        return
    try:
        found = storage.get_pothole(pothole_id)
    except StorageError as e:
        logger.error(f"Checking pothole {pothole_id} failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not load potholes data. Please try again later.",
        )
    if not found:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="POTHOLE_NOT_FOUND")


@router.get("", response_model=List[DocumentOut])
async def list_documents(
    storage: Storage,
    pothole_id: Optional[str] = Query(None, description="Only documents linked to this defect"),
    status_: Optional[str] = Query(None, alias="status", description="pending|in-progress|completed|all"),
):
    """Document table, newest first."""
    st = coerce_filter(DocumentStatus, status_, "status")
    try:
        rows = storage.list_documents(pothole_id=pothole_id)
    except StorageError as e:
        logger.error(f"Listing documents failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not load documents. Please try again later.",
        )

    docs = _to_domain(rows)
    if st is not None:
        docs = [d for d in docs if d.status == st]
    docs.sort(key=lambda d: d.created_at or "", reverse=True)
    return [DocumentOut.from_domain(d) for d in docs]


@router.get("/{document_id}", response_model=DocumentOut)
async def get_document(document_id: str, storage: Storage):
    return DocumentOut.from_domain(_get_or_404(storage, document_id))


@router.post("", response_model=DocumentOut, status_code=status.HTTP_201_CREATED)
async def create_document(body: DocumentCreate, storage: Storage):
    _ensure_pothole_exists(storage, body.pothole_id)

    doc = PotholeDocument(
        title=body.title.strip(),
        type=body.type,
        status=body.status,
        priority=body.priority,
        due_date=body.due_date,
        assigned_to=body.assigned_to.strip(),
        pothole_id=body.pothole_id,
    )
    try:
        row = storage.create_document(doc.to_storage())
    except StorageError as e:
        logger.error(f"Creating document failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not save document. Please try again later.",
        )

    logger.info(f"Document {row.get('id')} created ({doc.type.value})")
    return DocumentOut.from_domain(PotholeDocument.from_storage(row))


@router.patch("/{document_id}", response_model=DocumentOut)
async def patch_document(document_id: str, body: DocumentPatch, storage: Storage):
    """Overwrite only the provided fields."""
    updates = body.model_dump(exclude_unset=True, mode="json")
    if "pothole_id" in updates:
        _ensure_pothole_exists(storage, updates["pothole_id"])

    try:
        row = storage.update_document(document_id, updates)
    except StorageError as e:
        logger.error(f"Updating document {document_id} failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not update document. Please try again later.",
        )
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="DOCUMENT_NOT_FOUND")
    return DocumentOut.from_domain(PotholeDocument.from_storage(row))
