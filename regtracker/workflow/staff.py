"""
StaffAccess - Shared-PIN gate for staff mode on a single device.

The PIN only toggles whether sign-off forms are shown; it is not
authentication and is kept out of the step progression rules.
"""

import logging
from typing import Optional

from regtracker.errors import RegistrationValidationError

from .store import PIN_KEY, LocalStorage


logger = logging.getLogger(__name__)

DEFAULT_STAFF_PIN = "2025"
MIN_PIN_LENGTH = 4


class StaffAccess:
    """Staff mode toggle backed by a PIN kept in local storage."""

    def __init__(self, storage: LocalStorage, default_pin: Optional[str] = None):
        self.storage = storage
        self.default_pin = default_pin or DEFAULT_STAFF_PIN
        self._enabled = False

    @property
    def pin(self) -> str:
        return self.storage.get_item(PIN_KEY) or self.default_pin

    @property
    def enabled(self) -> bool:
        return self._enabled

    def unlock(self, pin: str) -> bool:
        """Enable staff mode if the PIN matches. Returns whether it is now enabled."""
        if pin == self.pin:
            self._enabled = True
            logger.info("Staff mode enabled")
        else:
            logger.info("Rejected staff PIN")
        return self._enabled

    def lock(self):
        self._enabled = False

    def update_pin(self, new_pin: str):
        """
        Replace the stored PIN.

        Raises:
            RegistrationValidationError: If the PIN is shorter than MIN_PIN_LENGTH
        """
        new_pin = (new_pin or "").strip()
        if len(new_pin) < MIN_PIN_LENGTH:
            raise RegistrationValidationError(
                f"PIN must be at least {MIN_PIN_LENGTH} digits"
            )
        self.storage.set_item(PIN_KEY, new_pin)
        logger.info("Staff PIN updated")
