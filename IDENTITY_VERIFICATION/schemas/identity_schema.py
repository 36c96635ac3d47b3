from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional


class IdentityRequest(BaseModel):
    """Fields are optional; the services answer missing values with 400 "Missing required fields."."""

    model_config = ConfigDict(coerce_numbers_to_str=True)


class IdentityRecordCreateRequest(IdentityRequest):
    name: Optional[str] = None
    aadhaar_number: Optional[str] = Field(
        None, validation_alias=AliasChoices("aadhaarNumber", "adharNumber", "aadhaar_number")
    )
    pan_number: Optional[str] = Field(
        None, validation_alias=AliasChoices("panNumber", "pan_number")
    )


class AadhaarOTPRequest(IdentityRequest):
    aadhaar: Optional[str] = None
    name: Optional[str] = None
    consent: Optional[bool] = None


class AadhaarOTPVerifyRequest(IdentityRequest):
    aadhaar: Optional[str] = None
    otp: Optional[str] = None


class PANOTPRequest(IdentityRequest):
    pan: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None


class PANOTPVerifyRequest(IdentityRequest):
    pan: Optional[str] = None
    otp: Optional[str] = None
    aadhaar: Optional[str] = None
    name: Optional[str] = None


class AadhaarUniqueRequest(IdentityRequest):
    aadhaar: Optional[str] = None


class PANUniqueRequest(IdentityRequest):
    pan: Optional[str] = None


class IdentityRecordData(BaseModel):
    id: int
    name: str
    aadhaarNumber: str
    panNumber: Optional[str] = None
    createdAt: Optional[str] = None


class RecordCreateResponse(BaseModel):
    message: str
    detail: IdentityRecordData


class OTPResponse(BaseModel):
    message: str
    otp: str


class PANVerificationResponse(BaseModel):
    message: str
    data: IdentityRecordData


class ExistsResponse(BaseModel):
    exists: bool
