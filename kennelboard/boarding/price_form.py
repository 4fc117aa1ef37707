"""Price state for the booking form."""

from __future__ import annotations

import datetime as dt
import enum
import logging

from .errors import ValidationError
from .pricing import Tariffs, calculate_price

logger = logging.getLogger(__name__)


class PriceMode(enum.Enum):
    AUTO = "auto"
    MANUAL = "manual"


class BookingPriceForm:
    """Tracks a booking's dates, dog count and price.

    In ``AUTO`` mode the price follows the inputs. Typing a price switches to
    ``MANUAL`` and freezes it until :meth:`reset_price` is called or new dates
    are picked.
    """

    def __init__(
        self,
        tariffs: Tariffs | None = None,
        *,
        check_in: dt.date | None = None,
        check_out: dt.date | None = None,
        dog_count: int = 1,
    ) -> None:
        self.tariffs = tariffs
        self.check_in = check_in
        self.check_out = check_out
        self.dog_count = dog_count
        self.total_price = 0.0
        self.mode = PriceMode.AUTO
        self._recompute()

    @classmethod
    def from_booking(
        cls,
        tariffs: Tariffs | None,
        *,
        check_in: dt.date,
        check_out: dt.date,
        dog_count: int,
        total_price: float,
    ) -> BookingPriceForm:
        """Load a saved booking without repricing it."""

        form = cls(tariffs)
        form.check_in = check_in
        form.check_out = check_out
        form.dog_count = dog_count
        form.total_price = total_price
        form.mode = PriceMode.MANUAL
        return form

    @property
    def is_manual(self) -> bool:
        return self.mode is PriceMode.MANUAL

    def _recompute(self) -> None:
        if self.mode is not PriceMode.AUTO:
            return
        if self.tariffs is None or self.check_in is None or self.check_out is None:
            return
        self.total_price = calculate_price(
            self.check_in, self.check_out, self.dog_count, self.tariffs
        )

    def set_dates(self, check_in: dt.date, check_out: dt.date | None = None) -> float:
        # A single picked date is a day trip.
        self.check_in = check_in
        self.check_out = check_out if check_out is not None else check_in
        self.mode = PriceMode.AUTO
        self._recompute()
        return self.total_price

    def set_dog_count(self, dog_count: int) -> float:
        self.dog_count = dog_count
        self._recompute()
        return self.total_price

    def set_tariffs(self, tariffs: Tariffs) -> float:
        self.tariffs = tariffs
        self._recompute()
        return self.total_price

    def override_price(self, price: float) -> float:
        if price < 0:
            raise ValidationError("Price cannot be negative")
        logger.info("Booking price set manually to %.2f", price)
        self.total_price = float(price)
        self.mode = PriceMode.MANUAL
        return self.total_price

    def reset_price(self) -> float:
        self.mode = PriceMode.AUTO
        self._recompute()
        return self.total_price

    def as_dict(self) -> dict:
        return {
            "check_in": self.check_in.isoformat() if self.check_in else None,
            "check_out": self.check_out.isoformat() if self.check_out else None,
            "dog_count": self.dog_count,
            "total_price": self.total_price,
            "mode": self.mode.value,
        }
