from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable, Optional

from hotelkeeper.models.room import format_money

logger = logging.getLogger(__name__)

APPROVE_CHOICE = "1"
DECLINE_CHOICE = "2"


class PaymentService:
    """
    Simulated payment step. Asks the operator whether the charge went
    through; anything other than the approve choice counts as a failure.
    """

    def __init__(
        self,
        input_func: Optional[Callable[[str], str]] = None,
        output: Optional[Callable[[str], None]] = None,
    ):
        self._input = input_func or input
        self._output = output or print

    def __call__(self, amount: Decimal) -> bool:
        return self.process(amount)

    def process(self, amount: Decimal) -> bool:
        self._output("\n--- PAYMENT SIMULATION ---")
        self._output(f"Total Due: {format_money(amount)}")
        self._output(f"{APPROVE_CHOICE}. Simulate Successful Payment")
        self._output(f"{DECLINE_CHOICE}. Simulate Payment Failure (Cancel Booking)")
        choice = self._input(f"Choose action ({APPROVE_CHOICE} or {DECLINE_CHOICE}): ").strip()

        if choice == APPROVE_CHOICE:
            self._output("Payment processed successfully. Booking confirmed.")
            return True
        if choice == DECLINE_CHOICE:
            self._output("Payment failed. Reservation cancelled.")
            return False

        logger.warning(f"Unknown payment choice {choice!r}, treating as failure")
        self._output("Invalid choice. Defaulting to payment failure.")
        return False
