import enum
import logging
import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timezone, timedelta
from typing import Callable, Dict, Optional

from core.config import OTP_EXPIRY_MINUTES, OTP_LENGTH

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OTPVerificationResult(str, enum.Enum):
    VERIFIED  = "VERIFIED"
    NOT_FOUND = "NOT_FOUND"
    EXPIRED   = "EXPIRED"
    MISMATCH  = "MISMATCH"


@dataclass
class OTPEntry:
    code: str
    expires_at: datetime


def generate_otp_code() -> str:
    low = 10 ** (OTP_LENGTH - 1)
    return str(low + secrets.randbelow(9 * low))


class OTPStore:
    """
    Process-local one-time password table.

    One live entry per key: ``generate`` overwrites, a successful or expired
    ``verify`` removes the entry. A wrong code leaves the entry in place.
    """

    def __init__(self, name: str, expiry_minutes: int = OTP_EXPIRY_MINUTES,
                 clock: Callable[[], datetime] = utc_now):
        self.name = name
        self.expiry = timedelta(minutes=expiry_minutes)
        self._clock = clock
        self._entries: Dict[str, OTPEntry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def generate(self, key: str) -> str:
        code = generate_otp_code()
        with self._lock:
            self._entries[key] = OTPEntry(code=code, expires_at=self._clock() + self.expiry)
        return code

    def verify(self, key: str, supplied_code) -> OTPVerificationResult:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return OTPVerificationResult.NOT_FOUND

            if self._clock() > entry.expires_at:
                del self._entries[key]
                return OTPVerificationResult.EXPIRED

            if str(supplied_code) != entry.code:
                return OTPVerificationResult.MISMATCH

            del self._entries[key]
            return OTPVerificationResult.VERIFIED

    def get_entry(self, key: str) -> Optional[OTPEntry]:
        with self._lock:
            return self._entries.get(key)

    def set_entry(self, key: str, code: str, expires_at: datetime) -> None:
        with self._lock:
            self._entries[key] = OTPEntry(code=str(code), expires_at=expires_at)

    def purge_expired(self) -> int:
        """
        Drop entries that expired more than one full lifetime ago.

        Entries inside that window are left for ``verify`` so a late attempt
        still reports ``EXPIRED`` rather than ``NOT_FOUND``.
        """
        cutoff = self._clock() - self.expiry
        with self._lock:
            expired = [key for key, entry in self._entries.items() if cutoff > entry.expires_at]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug(f"Purged {len(expired)} expired {self.name} OTP(s)")
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


aadhaar_otp_store = OTPStore("Aadhaar")
pan_otp_store     = OTPStore("PAN")


def get_aadhaar_otp_store() -> OTPStore:
    return aadhaar_otp_store


def get_pan_otp_store() -> OTPStore:
    return pan_otp_store
