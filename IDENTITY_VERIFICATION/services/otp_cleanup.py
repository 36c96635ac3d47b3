import logging
import threading
from typing import Iterable

from services.otp_store import OTPStore

logger = logging.getLogger(__name__)


class OTPCleanup:

    def __init__(self, stores: Iterable[OTPStore], interval_minutes: int = 0):
        self.stores = list(stores)
        self.interval_minutes = interval_minutes
        self._stop_event = threading.Event()
        self._thread = None
        logger.info(f"OTPCleanup initialized with interval: {interval_minutes}min")

    def start(self):
        if self.is_running():
            logger.warning("OTP cleanup already running")
            return
        if self.interval_minutes <= 0:
            logger.info("OTP cleanup disabled (interval <= 0); expired OTPs are removed on verify only")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()
        logger.info(f"OTP cleanup started (runs every {self.interval_minutes}min)")

    def stop(self):
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=5)
            self._thread = None
        logger.info("OTP cleanup stopped")

    def is_running(self):
        return self._thread is not None and self._thread.is_alive()

    def _run(self):
        while not self._stop_event.wait(self.interval_minutes * 60):
            try:
                self.run_once()
            except Exception as e:
                logger.error(f"OTP cleanup error: {str(e)}", exc_info=True)

    def run_once(self) -> int:
        removed = 0
        for store in self.stores:
            count = store.purge_expired()
            if count:
                logger.info(f"Removed {count} expired {store.name} OTP(s)")
            removed += count
        return removed
