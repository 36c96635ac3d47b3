import logging
from fastapi import HTTPException
from sqlalchemy.orm import Session

from repositories.identity_record_repository import IdentityRecordRepository
from services.otp_store import OTPStore, OTPVerificationResult
from utils.validators import is_valid_aadhaar, normalize_aadhaar, mask_identifier

logger = logging.getLogger(__name__)

AADHAAR_OTP_FAILURES = {
    OTPVerificationResult.NOT_FOUND: "No OTP generated for this Aadhaar.",
    OTPVerificationResult.EXPIRED:   "OTP expired. Please request a new one.",
    OTPVerificationResult.MISMATCH:  "Invalid OTP.",
}


class AadhaarOTPService:

    @staticmethod
    def request_otp(db: Session, otp_store: OTPStore, aadhaar, name, consent) -> dict:
        """
        Unregistered → OtpIssued.

        Rejects missing fields, checksum-invalid numbers and numbers that
        already belong to a stored record. A repeat request replaces the
        previous OTP for the same number.
        """
        if not aadhaar or not name or not consent:
            raise HTTPException(400, "Missing required fields.")

        if not is_valid_aadhaar(aadhaar):
            raise HTTPException(400, "Invalid Aadhaar number.")

        aadhaar_number = normalize_aadhaar(aadhaar)
        if IdentityRecordRepository.exists_by_aadhaar(db, aadhaar_number):
            raise HTTPException(409, "Aadhaar already registered.")

        otp = otp_store.generate(aadhaar_number)
        logger.info(f"Aadhaar OTP issued for {mask_identifier(aadhaar_number)} "
                    f"(valid {int(otp_store.expiry.total_seconds() // 60)} min)")

        return {
            "message": "OTP generated and sent (simulated).",
            "otp":     otp,
        }

    @staticmethod
    def verify_otp(otp_store: OTPStore, aadhaar, otp) -> dict:
        """OtpIssued → Verified. Nothing is persisted at this step."""
        if not aadhaar or not otp:
            raise HTTPException(400, "Missing Aadhaar or OTP.")

        aadhaar_number = normalize_aadhaar(aadhaar)
        result = otp_store.verify(aadhaar_number, otp)

        if result != OTPVerificationResult.VERIFIED:
            logger.info(f"Aadhaar OTP rejected for {mask_identifier(aadhaar_number)}: {result.value}")
            raise HTTPException(400, AADHAAR_OTP_FAILURES[result])

        logger.info(f"Aadhaar OTP verified for {mask_identifier(aadhaar_number)}")
        return {
            "message": "Aadhaar verified successfully.",
            "otp":     otp,
        }
