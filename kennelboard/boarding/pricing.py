"""Stay pricing for boarding bookings.

A stay is priced from its check-in date, check-out date and the number of
dogs. Same-day visits and single nights use flat rates; longer stays are
priced night by night so August and long-stay rates can apply to individual
nights of the same booking.
"""

from __future__ import annotations

import datetime as dt
import logging
import math
from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping

from .errors import ValidationError

logger = logging.getLogger(__name__)

# Night index (0-based) from which the long-stay rate applies.
LONG_STAY_THRESHOLD = 30
AUGUST = 8

# Field names used by the original tariff documents.
LEGACY_FIELD_NAMES = {
    "precio_una_noche": "single_night_rate",
    "precio_estancia_un_dia": "day_trip_rate",
    "precio_dia_adulto": "standard_night_rate",
    "precio_larga_estancia": "long_stay_night_rate",
    "precio_agosto": "august_night_rate",
    "descuento_perro_adicional": "additional_dog_discount_fraction",
}


@dataclass(frozen=True)
class Tariffs:
    """Configured rates used to price a stay.

    Every rate is the price for the first dog. ``additional_dog_discount_fraction``
    is the share taken off (or, for day trips and single nights, added on) for
    each further dog and must lie in ``[0, 1)``.
    """

    single_night_rate: float
    day_trip_rate: float
    standard_night_rate: float
    long_stay_night_rate: float
    august_night_rate: float
    additional_dog_discount_fraction: float

    def __post_init__(self) -> None:
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValidationError(f"{field.name} must be a number")
            try:
                number = float(value)
            except OverflowError as exc:
                raise ValidationError(f"{field.name} must be finite") from exc
            if not math.isfinite(number):
                raise ValidationError(f"{field.name} must be finite")
            if number < 0:
                raise ValidationError(f"{field.name} cannot be negative")
            object.__setattr__(self, field.name, number)
        if self.additional_dog_discount_fraction >= 1:
            raise ValidationError("additional_dog_discount_fraction must be below 1")

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(field.name for field in fields(cls))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Tariffs:
        """Build tariffs from a stored row or request payload.

        Legacy field names are accepted; keys that are not tariff fields are
        ignored so database rows can be passed straight in.
        """

        names = cls.field_names()
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = LEGACY_FIELD_NAMES.get(key, key)
            if name in names:
                values[name] = value
        missing = [name for name in names if values.get(name) is None]
        if missing:
            raise ValidationError(f"Missing tariff fields: {', '.join(missing)}")
        return cls(**values)

    def as_dict(self) -> dict[str, float]:
        return asdict(self)

    def with_changes(self, **changes: Any) -> Tariffs:
        return Tariffs.from_mapping({**self.as_dict(), **changes})


DEFAULT_TARIFFS = Tariffs(
    single_night_rate=22,
    day_trip_rate=10,
    standard_night_rate=17,
    long_stay_night_rate=10,
    august_night_rate=18,
    additional_dog_discount_fraction=0.5,
)


def _as_date(value: dt.date | dt.datetime) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    return value


def count_nights(check_in: dt.date | dt.datetime, check_out: dt.date | dt.datetime) -> int:
    """Return the number of whole nights between two dates, ignoring time of day."""

    return (_as_date(check_out) - _as_date(check_in)).days


def _night_price(night: dt.date, index: int, dog_count: int, tariffs: Tariffs) -> float:
    if night.month == AUGUST:
        return tariffs.august_night_rate * dog_count

    if index >= LONG_STAY_THRESHOLD:
        base = tariffs.long_stay_night_rate
    else:
        base = tariffs.standard_night_rate

    if dog_count == 1:
        return base
    extra_unit = base * (1 - tariffs.additional_dog_discount_fraction)
    return base + extra_unit * (dog_count - 1)


def calculate_price(
    check_in: dt.date | dt.datetime | None,
    check_out: dt.date | dt.datetime | None,
    dog_count: int | None,
    tariffs: Tariffs | None,
) -> float:
    """Return the total price of a stay.

    Returns ``0`` when the stay cannot be priced: no tariffs, a missing date,
    fewer than one dog or a check-out before the check-in. Callers treat ``0``
    as "cannot price yet".
    """

    if tariffs is None or check_in is None or check_out is None:
        logger.debug("Cannot price stay without tariffs and both dates")
        return 0.0
    if dog_count is None or dog_count < 1:
        logger.debug("Cannot price stay for %r dogs", dog_count)
        return 0.0

    start = _as_date(check_in)
    end = _as_date(check_out)
    if start > end:
        logger.debug("Check-out %s is before check-in %s", end, start)
        return 0.0

    nights = (end - start).days
    extra_dogs = dog_count - 1
    fraction = tariffs.additional_dog_discount_fraction

    # Day trips and single nights add the discount fraction per extra dog
    # instead of discounting each extra dog.
    if nights == 0:
        return tariffs.day_trip_rate + extra_dogs * fraction * tariffs.day_trip_rate
    if nights == 1:
        return tariffs.single_night_rate + extra_dogs * fraction * tariffs.single_night_rate

    total = 0.0
    for index in range(nights):
        night = start + dt.timedelta(days=index)
        total += _night_price(night, index, dog_count, tariffs)
    return total if total > 0 else 0.0


__all__ = [
    "DEFAULT_TARIFFS",
    "LONG_STAY_THRESHOLD",
    "Tariffs",
    "calculate_price",
    "count_nights",
]
