from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from zorax.core.errors import NotFound, ValidationError
from zorax.core.security import get_current_user, require_admin
from zorax.dependencies import get_db
from zorax.models.users import User
from zorax.schemas.records import NextSlNoOut, RecordCreate, RecordOut, RecordUpdate
from zorax.schemas.users import MessageOut
from zorax.services.record_service import RecordService


MAX_RECORD_ID = 2**63 - 1


def parse_record_id(raw: str, label: str) -> int:
    """Path id as a positive integer that fits a 64-bit INTEGER column."""
    try:
        record_id = int(raw)
    except ValueError:
        raise ValidationError(f"Invalid {label} ID")
    if not 1 <= record_id <= MAX_RECORD_ID:
        raise ValidationError(f"Invalid {label} ID")
    return record_id


def build_router(service: RecordService) -> APIRouter:
    """Routes for one record kind; expenses and gains mount the same set."""
    router = APIRouter()
    label = service.label
    title = label.capitalize()

    @router.get("", response_model=List[RecordOut])
    def list_records(
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
    ):
        return service.list(db)

    # declared before "/{record_id}" so it is not captured as an id
    @router.get("/next-slno", response_model=NextSlNoOut)
    def next_sl_no(
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
    ):
        return {"sl_no": service.next_sl_no(db)}

    @router.get("/{record_id}", response_model=RecordOut)
    def get_record(
        record_id: str,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
    ):
        record = service.get(db, parse_record_id(record_id, label))
        if not record:
            raise NotFound(f"{title} not found")
        return record

    @router.post("", response_model=RecordOut, status_code=status.HTTP_201_CREATED)
    def create_record(
        data: RecordCreate,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
    ):
        return service.create(db, data, created_by=current_user.id)

    @router.put("/{record_id}", response_model=RecordOut, dependencies=[Depends(require_admin)])
    def update_record(
        record_id: str,
        data: RecordUpdate,
        db: Session = Depends(get_db),
    ):
        """Admin-only: partial update; fields left out keep their values."""
        record = service.update(db, parse_record_id(record_id, label), data)
        if not record:
            raise NotFound(f"{title} not found")
        return record

    @router.delete("/{record_id}", response_model=MessageOut, dependencies=[Depends(require_admin)])
    def delete_record(
        record_id: str,
        db: Session = Depends(get_db),
    ):
        if not service.delete(db, parse_record_id(record_id, label)):
            raise NotFound(f"{title} not found")
        return {"message": f"{title} deleted successfully"}

    return router
