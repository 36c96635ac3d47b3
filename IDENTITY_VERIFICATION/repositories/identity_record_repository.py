import enum
import logging
from dataclasses import dataclass
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from models.identity_record import IdentityRecord

logger = logging.getLogger(__name__)


class CreateOutcome(str, enum.Enum):
    CREATED   = "CREATED"
    DUPLICATE = "DUPLICATE"
    INVALID   = "INVALID"
    FAILED    = "FAILED"


@dataclass
class RecordCreateResult:
    outcome: CreateOutcome
    record: Optional[IdentityRecord] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.outcome == CreateOutcome.CREATED


class IdentityRecordRepository:

    @staticmethod
    def exists_by_aadhaar(db: Session, aadhaar_number: str) -> bool:
        return db.query(IdentityRecord.id).filter(IdentityRecord.aadhaar_number == aadhaar_number).first() is not None

    @staticmethod
    def exists_by_pan(db: Session, pan_number: str) -> bool:
        return db.query(IdentityRecord.id).filter(IdentityRecord.pan_number == pan_number).first() is not None

    @staticmethod
    def get_by_aadhaar(db: Session, aadhaar_number: str) -> Optional[IdentityRecord]:
        return db.query(IdentityRecord).filter(IdentityRecord.aadhaar_number == aadhaar_number).first()

    @staticmethod
    def count_records(db: Session) -> int:
        return db.query(IdentityRecord).count()

    @staticmethod
    def create_record(db: Session, name, aadhaar_number, pan_number=None) -> RecordCreateResult:
        """
        Insert a record and report the outcome instead of raising.
        Field constraints are checked by the model validators, uniqueness by the database.
        """
        try:
            record = IdentityRecord(name=name, aadhaar_number=aadhaar_number, pan_number=pan_number)
        except ValueError as e:
            return RecordCreateResult(CreateOutcome.INVALID, error=str(e))

        try:
            db.add(record)
            db.commit()
            db.refresh(record)
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"Identity record rejected by unique constraint: {e.orig}")
            return RecordCreateResult(
                CreateOutcome.DUPLICATE,
                error="Aadhaar or PAN number is already registered",
            )
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Identity record insert failed: {str(e)}")
            return RecordCreateResult(CreateOutcome.FAILED, error=str(e))

        return RecordCreateResult(CreateOutcome.CREATED, record=record)
