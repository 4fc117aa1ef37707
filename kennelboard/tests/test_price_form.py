import datetime as dt
import unittest

from kennelboard.boarding.errors import ValidationError
from kennelboard.boarding.price_form import BookingPriceForm, PriceMode
from kennelboard.boarding.pricing import DEFAULT_TARIFFS


class BookingPriceFormTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.form = BookingPriceForm(DEFAULT_TARIFFS)
        self.june_1 = dt.date(2024, 6, 1)
        self.june_3 = dt.date(2024, 6, 3)

    def test_starts_in_auto_without_a_price(self) -> None:
        self.assertIs(self.form.mode, PriceMode.AUTO)
        self.assertEqual(self.form.total_price, 0)

    def test_picking_dates_prices_the_stay(self) -> None:
        self.assertEqual(self.form.set_dates(self.june_1, self.june_3), 34.0)
        self.assertEqual(self.form.set_dog_count(2), 51.0)

    def test_single_date_becomes_day_trip(self) -> None:
        self.form.set_dates(self.june_1)
        self.assertEqual(self.form.check_out, self.june_1)
        self.assertEqual(self.form.total_price, 10.0)

    def test_manual_price_is_kept_when_dogs_change(self) -> None:
        self.form.set_dates(self.june_1, self.june_3)
        self.form.override_price(40)
        self.assertTrue(self.form.is_manual)
        self.assertEqual(self.form.set_dog_count(3), 40.0)
        self.assertEqual(self.form.set_tariffs(DEFAULT_TARIFFS.with_changes(standard_night_rate=20)), 40.0)

    def test_reset_returns_to_computed_price(self) -> None:
        self.form.set_dates(self.june_1, self.june_3)
        self.form.set_dog_count(2)
        self.form.override_price(40)
        self.assertEqual(self.form.reset_price(), 51.0)
        self.assertIs(self.form.mode, PriceMode.AUTO)

    def test_new_dates_clear_manual_price(self) -> None:
        self.form.set_dates(self.june_1, self.june_3)
        self.form.override_price(5)
        self.assertEqual(self.form.set_dates(self.june_1, dt.date(2024, 6, 2)), 22.0)
        self.assertFalse(self.form.is_manual)

    def test_negative_manual_price_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            self.form.override_price(-1)
        self.assertIs(self.form.mode, PriceMode.AUTO)

    def test_no_recompute_without_tariffs(self) -> None:
        form = BookingPriceForm()
        form.set_dates(self.june_1, self.june_3)
        self.assertEqual(form.total_price, 0)
        self.assertEqual(form.set_tariffs(DEFAULT_TARIFFS), 34.0)

    def test_loaded_booking_keeps_saved_price(self) -> None:
        form = BookingPriceForm.from_booking(
            DEFAULT_TARIFFS,
            check_in=self.june_1,
            check_out=self.june_3,
            dog_count=2,
            total_price=45.0,
        )
        self.assertTrue(form.is_manual)
        self.assertEqual(form.set_dog_count(1), 45.0)
        self.assertEqual(form.reset_price(), 34.0)

    def test_as_dict(self) -> None:
        self.form.set_dates(self.june_1, self.june_3)
        self.assertEqual(
            self.form.as_dict(),
            {
                "check_in": "2024-06-01",
                "check_out": "2024-06-03",
                "dog_count": 1,
                "total_price": 34.0,
                "mode": "auto",
            },
        )


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
