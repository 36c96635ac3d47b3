import logging
from fastapi import HTTPException
from sqlalchemy.orm import Session

from models.identity_record import IdentityRecord
from repositories.identity_record_repository import IdentityRecordRepository, RecordCreateResult
from utils.validators import is_valid_aadhaar, is_valid_pan, normalize_aadhaar, normalize_pan, mask_identifier

logger = logging.getLogger(__name__)


def serialize_record(record: IdentityRecord) -> dict:
    return {
        "id":            record.id,
        "name":          record.name,
        "aadhaarNumber": record.aadhaar_number,
        "panNumber":     record.pan_number,
        "createdAt":     record.created_at.isoformat() if record.created_at else None,
    }


def raise_for_create_failure(result: RecordCreateResult) -> None:
    if not result.success:
        raise HTTPException(
            status_code=400,
            detail={"message": "Something went wrong", "error": result.error},
        )


class RecordService:

    @staticmethod
    def create_record(db: Session, name, aadhaar_number, pan_number=None) -> dict:
        """Direct insertion with no OTP step; only the store's own field and uniqueness rules apply."""
        result = IdentityRecordRepository.create_record(db, name, aadhaar_number, pan_number)
        if not result.success:
            logger.info(f"Direct record insert rejected ({result.outcome.value}): {result.error}")
        raise_for_create_failure(result)

        logger.info(f"Identity record {result.record.id} created directly "
                    f"for Aadhaar {mask_identifier(result.record.aadhaar_number)}")
        return {
            "message": "Data Saved Successfully",
            "detail":  serialize_record(result.record),
        }

    @staticmethod
    def check_aadhaar_unique(db: Session, aadhaar) -> dict:
        if not is_valid_aadhaar(aadhaar):
            raise HTTPException(400, "Invalid Aadhaar format.")
        exists = IdentityRecordRepository.exists_by_aadhaar(db, normalize_aadhaar(aadhaar))
        return {"exists": exists}

    @staticmethod
    def check_pan_unique(db: Session, pan) -> dict:
        if not is_valid_pan(pan):
            raise HTTPException(400, "Invalid PAN format.")
        exists = IdentityRecordRepository.exists_by_pan(db, normalize_pan(pan))
        return {"exists": exists}
