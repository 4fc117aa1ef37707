"""Core orchestration logic for the kennel boarding platform."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any

from .database import get_connection, initialize_database
from .errors import ValidationError
from .price_form import BookingPriceForm
from .pricing import Tariffs, calculate_price, count_nights
from .tariff_store import TariffStore

logger = logging.getLogger(__name__)


def parse_date(value: str | dt.date | None, field: str) -> dt.date | None:
    """Parse an ISO date; datetimes and ISO datetime strings keep only the date."""

    if value is None or value == "":
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    try:
        return dt.datetime.fromisoformat(value).date()
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field} must be an ISO date") from exc


class BoardingSystem:
    """High level façade that exposes boarding pricing behaviours."""

    def __init__(self, db_path: str = ":memory:") -> None:
        self.conn = get_connection(db_path)
        initialize_database(self.conn)
        self.tariff_store = TariffStore(self.conn)

    # ------------------------------------------------------------------
    # Tariffs
    # ------------------------------------------------------------------
    def get_tariffs(self) -> Tariffs:
        return self.tariff_store.get()

    def update_tariffs(self, **changes: Any) -> Tariffs:
        return self.tariff_store.update(**changes)

    def reset_tariffs(self) -> Tariffs:
        return self.tariff_store.reset()

    # ------------------------------------------------------------------
    # Quotes
    # ------------------------------------------------------------------
    def quote_stay(
        self,
        *,
        check_in: str | dt.date | None,
        check_out: str | dt.date | None,
        dog_count: int | None,
    ) -> dict:
        """Price a stay with the stored tariffs.

        Unparsable dates raise :class:`ValidationError`; anything the
        calculator cannot price comes back with a total of ``0``.
        """

        start = parse_date(check_in, "check_in")
        end = parse_date(check_out, "check_out")
        total = calculate_price(start, end, dog_count, self.get_tariffs())
        nights = None
        if start and end and start <= end:
            nights = count_nights(start, end)
        if total == 0:
            logger.info("Stay %s to %s for %s dogs priced at zero", start, end, dog_count)
        return {
            "check_in": start.isoformat() if start else None,
            "check_out": end.isoformat() if end else None,
            "nights": nights,
            "dog_count": dog_count,
            "total_price": total,
        }

    def new_price_form(
        self,
        *,
        check_in: str | dt.date | None = None,
        check_out: str | dt.date | None = None,
        dog_count: int = 1,
    ) -> BookingPriceForm:
        return BookingPriceForm(
            self.get_tariffs(),
            check_in=parse_date(check_in, "check_in"),
            check_out=parse_date(check_out, "check_out"),
            dog_count=dog_count,
        )

    def close(self) -> None:
        self.conn.close()


__all__ = ["BoardingSystem", "ValidationError", "parse_date"]
