import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./identity_records.db")
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

# OTP Configuration
OTP_LENGTH = 6
OTP_EXPIRY_MINUTES           = int(os.getenv("OTP_EXPIRY_MINUTES",           "5"))
OTP_CLEANUP_INTERVAL_MINUTES = int(os.getenv("OTP_CLEANUP_INTERVAL_MINUTES", "0"))

# Identity record constraints
NAME_MIN_LENGTH = 4
NAME_MAX_LENGTH = 48
