from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from core.database import get_db
from services.otp_store import OTPStore, get_aadhaar_otp_store, get_pan_otp_store
from services.aadhaar_otp_service import AadhaarOTPService
from services.pan_otp_service import PANOTPService
from services.record_service import RecordService
import logging
from schemas.identity_schema import (
    IdentityRecordCreateRequest, RecordCreateResponse,
    AadhaarOTPRequest, AadhaarOTPVerifyRequest, OTPResponse,
    PANOTPRequest, PANOTPVerifyRequest, PANVerificationResponse,
    AadhaarUniqueRequest, PANUniqueRequest, ExistsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/data", tags=["Identity Records"])


@router.post("", response_model=RecordCreateResponse)
def create_record(request: IdentityRecordCreateRequest, db: Session = Depends(get_db)):
    try:
        return RecordService.create_record(
            db,
            name=request.name,
            aadhaar_number=request.aadhaar_number,
            pan_number=request.pan_number,
        )
    except HTTPException:
        raise
    except Exception:
        logger.exception("Direct record creation error")
        raise HTTPException(status_code=500, detail="Internal server error.")


@router.get("")
def data_route():
    return {"message": "You have reached the data Route"}


@router.post("/generateOtp", response_model=OTPResponse)
def generate_aadhaar_otp(
    request: AadhaarOTPRequest,
    db: Session = Depends(get_db),
    otp_store: OTPStore = Depends(get_aadhaar_otp_store),
):
    try:
        return AadhaarOTPService.request_otp(
            db, otp_store,
            aadhaar=request.aadhaar,
            name=request.name,
            consent=request.consent,
        )
    except HTTPException:
        raise
    except Exception:
        logger.exception("Aadhaar OTP generation error")
        raise HTTPException(status_code=500, detail="Internal server error.")


@router.post("/verifyOtp", response_model=OTPResponse)
def verify_aadhaar_otp(
    request: AadhaarOTPVerifyRequest,
    otp_store: OTPStore = Depends(get_aadhaar_otp_store),
):
    try:
        return AadhaarOTPService.verify_otp(otp_store, aadhaar=request.aadhaar, otp=request.otp)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Aadhaar OTP verification error")
        raise HTTPException(status_code=500, detail="Internal server error.")


@router.post("/generatePanOtp", response_model=OTPResponse)
def generate_pan_otp(
    request: PANOTPRequest,
    db: Session = Depends(get_db),
    otp_store: OTPStore = Depends(get_pan_otp_store),
):
    try:
        return PANOTPService.request_otp(
            db, otp_store,
            pan=request.pan,
            name=request.name,
            email=request.email,
        )
    except HTTPException:
        raise
    except Exception:
        logger.exception("PAN OTP generation error")
        raise HTTPException(status_code=500, detail="Internal server error.")


@router.post("/verifyPanOtp", response_model=PANVerificationResponse)
def verify_pan_otp(
    request: PANOTPVerifyRequest,
    db: Session = Depends(get_db),
    otp_store: OTPStore = Depends(get_pan_otp_store),
):
    try:
        return PANOTPService.verify_otp(
            db, otp_store,
            pan=request.pan,
            otp=request.otp,
            aadhaar=request.aadhaar,
            name=request.name,
        )
    except HTTPException:
        raise
    except Exception:
        logger.exception("PAN OTP verification error")
        raise HTTPException(status_code=500, detail="Internal server error.")


@router.post("/verifyAadhaar", response_model=ExistsResponse)
def check_aadhaar_unique(request: AadhaarUniqueRequest, db: Session = Depends(get_db)):
    try:
        return RecordService.check_aadhaar_unique(db, request.aadhaar)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Aadhaar uniqueness check error")
        raise HTTPException(status_code=500, detail="Internal server error.")


@router.post("/verifyPan", response_model=ExistsResponse)
def check_pan_unique(request: PANUniqueRequest, db: Session = Depends(get_db)):
    try:
        return RecordService.check_pan_unique(db, request.pan)
    except HTTPException:
        raise
    except Exception:
        logger.exception("PAN uniqueness check error")
        raise HTTPException(status_code=500, detail="Internal server error.")
