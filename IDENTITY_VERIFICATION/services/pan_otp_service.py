import logging
from fastapi import HTTPException
from sqlalchemy.orm import Session

from repositories.identity_record_repository import IdentityRecordRepository
from services.otp_store import OTPStore, OTPVerificationResult
from services.record_service import serialize_record, raise_for_create_failure
from utils.validators import is_valid_pan, normalize_pan, normalize_aadhaar, mask_identifier

logger = logging.getLogger(__name__)

PAN_OTP_FAILURES = {
    OTPVerificationResult.NOT_FOUND: "No OTP generated for this PAN.",
    OTPVerificationResult.EXPIRED:   "OTP expired. Please request a new one.",
    OTPVerificationResult.MISMATCH:  "Invalid OTP.",
}


class PANOTPService:

    @staticmethod
    def request_otp(db: Session, otp_store: OTPStore, pan, name, email=None) -> dict:
        if not pan or not name:
            raise HTTPException(400, "Missing required fields.")

        pan_number = normalize_pan(pan)
        if not is_valid_pan(pan_number):
            raise HTTPException(400, "Invalid PAN number.")

        if IdentityRecordRepository.exists_by_pan(db, pan_number):
            raise HTTPException(409, "PAN already registered.")

        otp = otp_store.generate(pan_number)
        logger.info(f"PAN OTP issued for {mask_identifier(pan_number)}"
                    + (" (email supplied)" if email else ""))

        return {
            "message": "OTP generated and sent (simulated).",
            "otp":     otp,
        }

    @staticmethod
    def verify_otp(db: Session, otp_store: OTPStore, pan, otp, aadhaar=None, name=None) -> dict:
        """
        OtpIssued → Verified+Persisted.

        The OTP is consumed before the insert. If the insert fails the caller
        has to request a fresh OTP; the consumed code is not restored.
        ``aadhaar`` and ``name`` are taken as supplied by the client.
        """
        if not pan or not otp:
            raise HTTPException(400, "Missing PAN or OTP.")

        pan_number = normalize_pan(pan)
        result = otp_store.verify(pan_number, otp)

        if result != OTPVerificationResult.VERIFIED:
            logger.info(f"PAN OTP rejected for {mask_identifier(pan_number)}: {result.value}")
            raise HTTPException(400, PAN_OTP_FAILURES[result])

        created = IdentityRecordRepository.create_record(
            db,
            name=name,
            aadhaar_number=normalize_aadhaar(aadhaar) or None,
            pan_number=pan_number,
        )
        if not created.success:
            logger.warning(f"PAN OTP verified for {mask_identifier(pan_number)} but record creation failed "
                           f"({created.outcome.value}): {created.error}")
        raise_for_create_failure(created)

        logger.info(f"PAN verified and identity record {created.record.id} created "
                    f"for {mask_identifier(pan_number)}")
        return {
            "message": "PAN verified successfully.",
            "data":    serialize_record(created.record),
        }
