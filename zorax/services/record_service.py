from typing import Iterable, List, Optional, Type

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from zorax.core.errors import Conflict, InternalError
from zorax.logger import Logger
from zorax.models.records import Expense, Gain, TransactionRecordMixin
from zorax.schemas.records import RecordCreate, RecordUpdate

logger = Logger.get_logger(__name__)


def next_sequence_value(prefix: str, sl_nos: Iterable[str]) -> str:
    """
    Successor of the highest numeric suffix among ``sl_nos``:
      - values without the prefix, or with a non-numeric suffix, are ignored
      - an empty input starts the sequence at 1
      - the counter is padded to three digits and grows past them (EXP999 -> EXP1000)
    """
    highest = 0
    for sl_no in sl_nos:
        if not sl_no or not sl_no.startswith(prefix):
            continue
        suffix = sl_no[len(prefix):]
        # plain ASCII digits only; isdigit() alone lets "²" through to int()
        if suffix.isascii() and suffix.isdigit():
            highest = max(highest, int(suffix))
    return f"{prefix}{highest + 1:03d}"


def is_sl_no_violation(exc: IntegrityError) -> bool:
    """True when the failed constraint is the unique index on sl_no."""
    return "sl_no" in str(exc.orig)


class RecordService:
    """Data access for one kind of transaction record (expenses or gains)."""

    def __init__(self, model: Type[TransactionRecordMixin], prefix: str, label: str, plural: str):
        self.model = model
        self.prefix = prefix
        self.label = label
        self.plural = plural

    def next_sl_no(self, db: Session) -> str:
        try:
            rows = db.query(self.model.sl_no).all()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Get next SL NO error (%s)", self.plural)
            raise InternalError("Failed to generate next SL NO")
        return next_sequence_value(self.prefix, (sl_no for (sl_no,) in rows))

    def list(self, db: Session) -> List[TransactionRecordMixin]:
        try:
            return db.query(self.model).order_by(self.model.date.desc()).all()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Get %s error", self.plural)
            raise InternalError(f"Failed to fetch {self.plural}")

    def get(self, db: Session, record_id: int) -> Optional[TransactionRecordMixin]:
        try:
            return db.query(self.model).filter(self.model.id == record_id).first()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Get %s error", self.label)
            raise InternalError(f"Failed to fetch {self.label}")

    def create(self, db: Session, data: RecordCreate, created_by: int) -> TransactionRecordMixin:
        fields = data.model_dump(exclude={"sl_no"})
        try:
            # allocation and insert share one transaction; the unique index on
            # sl_no rejects a concurrent writer that picked the same value
            sl_no = data.sl_no or self.next_sl_no(db)
            record = self.model(**fields, sl_no=sl_no, created_by=created_by)
            db.add(record)
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            if not is_sl_no_violation(exc):
                logger.exception("Create %s error", self.label)
                raise InternalError(f"Failed to create {self.label}")
            logger.warning("Duplicate SL NO %s for %s", sl_no, self.plural)
            raise Conflict("SL NO already exists")
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Create %s error", self.label)
            raise InternalError(f"Failed to create {self.label}")
        db.refresh(record)
        logger.info("Created %s %s by user %s", self.label, record.sl_no, created_by)
        return record

    def update(self, db: Session, record_id: int, data: RecordUpdate) -> Optional[TransactionRecordMixin]:
        record = self.get(db, record_id)
        if not record:
            return None

        changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        if not changes:
            return record

        for field, value in changes.items():
            setattr(record, field, value)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            if not is_sl_no_violation(exc):
                logger.exception("Update %s error", self.label)
                raise InternalError(f"Failed to update {self.label}")
            raise Conflict("SL NO already exists")
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Update %s error", self.label)
            raise InternalError(f"Failed to update {self.label}")
        db.refresh(record)
        logger.info("Updated %s %s (%s)", self.label, record.sl_no, ", ".join(sorted(changes)))
        return record

    def delete(self, db: Session, record_id: int) -> bool:
        try:
            deleted = db.query(self.model).filter(self.model.id == record_id).delete()
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Delete %s error", self.label)
            raise InternalError(f"Failed to delete {self.label}")
        if deleted:
            logger.info("Deleted %s #%s", self.label, record_id)
        return deleted > 0


expense_service = RecordService(Expense, prefix="EXP", label="expense", plural="expenses")
gain_service = RecordService(Gain, prefix="GN", label="gain", plural="gains")
