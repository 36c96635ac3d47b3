import re
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, BigInteger, Integer
from sqlalchemy.orm import validates
from core.database import Base
from core.config import NAME_MIN_LENGTH, NAME_MAX_LENGTH

AADHAAR_FIELD_PATTERN = re.compile(r"[0-9]{12}")
PAN_FIELD_PATTERN     = re.compile(r"[A-Z]{5}[0-9]{4}[A-Z]{1}")


class IdentityRecord(Base):
    __tablename__ = "identity_records"

    # Integer variant keeps SQLite autoincrement working
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    aadhaar_number = Column(String(12), unique=True, nullable=False, index=True)
    pan_number = Column(String(10), unique=True, nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    @validates("name")
    def validate_name(self, key, value):
        if value is None:
            raise ValueError("name is required")
        value = str(value)
        if len(value) < NAME_MIN_LENGTH:
            raise ValueError(f"Name should be at least {NAME_MIN_LENGTH} characters")
        if len(value) > NAME_MAX_LENGTH:
            raise ValueError(f"Name cannot exceed {NAME_MAX_LENGTH} characters")
        return value

    @validates("aadhaar_number")
    def validate_aadhaar_number(self, key, value):
        if value is None:
            raise ValueError("aadhaarNumber is required")
        value = str(value)
        if not AADHAAR_FIELD_PATTERN.fullmatch(value):
            raise ValueError(f"{value} is not a valid 12-digit Aadhaar number!")
        return value

    @validates("pan_number")
    def validate_pan_number(self, key, value):
        if value is None or value == "":
            return None
        value = str(value).upper()
        if not PAN_FIELD_PATTERN.fullmatch(value):
            raise ValueError(f"{value} is not a valid PAN number!")
        return value
