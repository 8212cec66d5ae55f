"""
Unit tests para las utilidades de fechas UTC.
"""

from datetime import datetime, timedelta, timezone

import pytest

from taller.core.dates import (
    EPOCH,
    day_range,
    ensure_utc,
    month_range,
    open_range,
    parse_date_utc,
)
from taller.core.exceptions import BusinessValidationError

UTC = timezone.utc


# ============================================================
# parse_date_utc
# ============================================================


class TestParseDateUtc:
    """Tests para la conversión de strings a instantes UTC."""

    def test_calendar_date_is_utc_midnight(self):
        """Test YYYY-MM-DD se toma como medianoche UTC, sin hora local."""
        assert parse_date_utc("2025-03-10") == datetime(2025, 3, 10, tzinfo=UTC)

    def test_calendar_date_keeps_day(self):
        """Test el día calendario no se corre por la zona horaria."""
        parsed = parse_date_utc("2025-01-01")
        assert (parsed.year, parsed.month, parsed.day) == (2025, 1, 1)
        assert parsed.utcoffset() == timedelta(0)

    def test_iso_with_offset_is_converted(self):
        """Test un datetime ISO con offset se convierte a UTC."""
        parsed = parse_date_utc("2025-03-10T21:00:00-03:00")
        assert parsed == datetime(2025, 3, 11, 0, 0, tzinfo=UTC)

    def test_iso_with_z_suffix(self):
        parsed = parse_date_utc("2025-03-09T23:59:59.999Z")
        assert parsed == datetime(2025, 3, 9, 23, 59, 59, 999000, tzinfo=UTC)

    def test_naive_iso_assumed_utc(self):
        """Test un datetime sin zona se asume UTC."""
        parsed = parse_date_utc("2025-03-10T08:30:00")
        assert parsed == datetime(2025, 3, 10, 8, 30, tzinfo=UTC)

    @pytest.mark.parametrize("value", ["", "hoy", "2025-13-01", "2025-02-30", "10/03/2025"])
    def test_invalid_dates_raise(self, value):
        """Test strings inválidos producen BusinessValidationError."""
        with pytest.raises(BusinessValidationError):
            parse_date_utc(value)

    def test_business_validation_error_is_value_error(self):
        """Test el error puede lanzarse desde validadores Pydantic."""
        with pytest.raises(ValueError):
            parse_date_utc("no-es-fecha")


# ============================================================
# Rangos
# ============================================================


class TestDayRange:
    """Tests para el rango de un día."""

    def test_day_range_bounds(self):
        start, end = day_range("2025-03-10")
        assert start == datetime(2025, 3, 10, 0, 0, 0, tzinfo=UTC)
        assert end == datetime(2025, 3, 10, 23, 59, 59, 999000, tzinfo=UTC)

    def test_day_range_excludes_neighbours(self):
        """Test el rango excluye el último ms del día anterior y el primero del siguiente."""
        start, end = day_range("2025-03-10")
        before = datetime(2025, 3, 9, 23, 59, 59, 999000, tzinfo=UTC)
        after = datetime(2025, 3, 11, 0, 0, 0, tzinfo=UTC)

        assert not start <= before <= end
        assert not start <= after <= end
        assert start <= datetime(2025, 3, 10, tzinfo=UTC) <= end


class TestMonthRange:
    """Tests para el rango de un mes."""

    def test_march_2025(self):
        start, end = month_range(3, 2025)
        assert start == datetime(2025, 3, 1, tzinfo=UTC)
        assert end == datetime(2025, 3, 31, 23, 59, 59, 999000, tzinfo=UTC)

    def test_month_boundaries(self):
        """Test incluye 31/03 23:59:59.999 y excluye 01/04 00:00:00.000."""
        start, end = month_range(3, 2025)
        assert start <= datetime(2025, 3, 31, 23, 59, 59, 999000, tzinfo=UTC) <= end
        assert not start <= datetime(2025, 4, 1, tzinfo=UTC) <= end

    def test_february_leap_year(self):
        _, end = month_range(2, 2024)
        assert end.day == 29

    def test_february_common_year(self):
        _, end = month_range(2, 2025)
        assert end.day == 28

    def test_december_rolls_year(self):
        start, end = month_range(12, 2025)
        assert start == datetime(2025, 12, 1, tzinfo=UTC)
        assert end == datetime(2025, 12, 31, 23, 59, 59, 999000, tzinfo=UTC)

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_invalid_month(self, month):
        with pytest.raises(BusinessValidationError):
            month_range(month, 2025)


class TestOpenRange:
    """Tests para el rango con extremos opcionales."""

    NOW = datetime(2025, 6, 15, 14, 30, tzinfo=UTC)

    def test_both_bounds(self):
        start, end = open_range("2025-01-01", "2025-01-31", now=self.NOW)
        assert start == datetime(2025, 1, 1, tzinfo=UTC)
        assert end == datetime(2025, 1, 31, 23, 59, 59, 999000, tzinfo=UTC)

    def test_missing_from_defaults_to_epoch(self):
        start, _ = open_range(None, "2025-01-31", now=self.NOW)
        assert start == EPOCH

    def test_missing_to_defaults_to_end_of_today(self):
        """Test sin "hasta" el fin es hoy a las 23:59:59.999 UTC."""
        _, end = open_range("2025-01-01", None, now=self.NOW)
        assert end == datetime(2025, 6, 15, 23, 59, 59, 999000, tzinfo=UTC)


class TestEnsureUtc:
    """Tests para la normalización a UTC."""

    def test_naive_is_labelled_utc(self):
        assert ensure_utc(datetime(2025, 1, 1)).tzinfo == UTC

    def test_aware_is_converted(self):
        value = datetime(2025, 1, 1, 21, 0, tzinfo=timezone(timedelta(hours=-3)))
        assert ensure_utc(value) == datetime(2025, 1, 2, 0, 0, tzinfo=UTC)
