"""
Unit tests para la exportación del historial: CSV, agrupación y HTML.
"""

import csv
import io
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from taller.schemas.report import GroupBy
from taller.services.report_export import (
    CSV_HEADERS,
    ReportRenderer,
    build_csv,
    format_date,
    format_price,
    group_appointments,
)
from taller.services.report_service import ReportFilter

from helpers import make_appointment, make_job


def _parse(content: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(content.lstrip("\ufeff"))))


# ============================================================
# Formato
# ============================================================


class TestFormat:
    """Tests para el formato de fechas y precios."""

    def test_date_uses_utc_day(self):
        assert format_date(datetime(2025, 3, 10, tzinfo=timezone.utc)) == "10/03/2025"

    def test_naive_date_treated_as_utc(self):
        assert format_date(datetime(2025, 12, 31)) == "31/12/2025"

    @pytest.mark.parametrize(
        "value,expected",
        [("1500.00", "1500"), ("12.50", "12.5"), ("0.99", "0.99"), ("0", "0")],
    )
    def test_price(self, value, expected):
        assert format_price(Decimal(value)) == expected


# ============================================================
# CSV
# ============================================================


class TestBuildCsv:
    """Tests para la generación del CSV."""

    def test_starts_with_bom(self):
        assert build_csv([]).startswith("\ufeff")

    def test_header_only_when_empty(self):
        assert _parse(build_csv([])) == [CSV_HEADERS]

    def test_every_cell_quoted(self):
        content = build_csv([make_appointment()]).lstrip("\ufeff")
        first_line = content.split("\n")[0]
        assert first_line == ",".join(f'"{header}"' for header in CSV_HEADERS)

    def test_row_values(self):
        appointment = make_appointment(
            jobs=[make_job("Cambio de aceite", "1500.00"), make_job("Filtro", "350.50")],
        )

        rows = _parse(build_csv([appointment]))

        assert rows[1] == [
            "01/06/2025",
            "09:00",
            "PENDING",
            "Ana",
            "555-1",
            "Ford Ka",
            "XYZ999",
            "Service completo",
            "Cambio de aceite ($1500) | Filtro ($350.5)",
            "1850.50",
        ]

    def test_inner_quotes_doubled(self):
        appointment = make_appointment(description='Ruido en "tren delantero"')
        content = build_csv([appointment])
        assert '"Ruido en ""tren delantero"""' in content

    def test_no_jobs_total_zero(self):
        rows = _parse(build_csv([make_appointment()]))
        assert rows[1][8] == ""
        assert rows[1][9] == "0.00"

    def test_no_trailing_newline(self):
        assert not build_csv([make_appointment()]).endswith("\n")


# ============================================================
# Agrupación
# ============================================================


class TestGrouping:
    """Tests para la agrupación del historial."""

    def _appointments(self):
        ana = SimpleNamespace(name="Ana", phone="555-1")
        juan = SimpleNamespace(name="Juan", phone="555-2")
        ka = SimpleNamespace(plate="XYZ999", make="Ford", model="Ka")
        gol = SimpleNamespace(plate="AB123CD", make="VW", model="Gol")
        return [
            make_appointment(client=ana, vehicle=ka, jobs=[make_job(price="100")]),
            make_appointment(client=juan, vehicle=gol, jobs=[make_job(price="50")]),
            make_appointment(client=ana, vehicle=ka, jobs=[make_job(price="25.50")]),
        ]

    def test_none_is_single_group(self):
        groups = group_appointments(self._appointments(), GroupBy.NONE)
        assert len(groups) == 1
        assert groups[0]["key"] == ""
        assert groups[0]["total"] == Decimal("175.50")

    def test_by_client(self):
        groups = group_appointments(self._appointments(), GroupBy.CLIENT)
        assert [g["key"] for g in groups] == ["Ana · 555-1", "Juan · 555-2"]
        assert len(groups[0]["appointments"]) == 2
        assert groups[0]["total"] == Decimal("125.50")

    def test_by_vehicle(self):
        groups = group_appointments(self._appointments(), GroupBy.VEHICLE)
        assert [g["key"] for g in groups] == ["XYZ999 · Ford Ka", "AB123CD · VW Gol"]

    def test_empty(self):
        assert group_appointments([], GroupBy.CLIENT) == []


# ============================================================
# HTML
# ============================================================


class TestRenderHtml:
    """Tests para el HTML del reporte (sin generar el PDF)."""

    def test_contains_rows_and_totals(self):
        renderer = ReportRenderer()
        appointment = make_appointment(jobs=[make_job("Alineación", "1200")])

        html = renderer.render_html(
            [appointment],
            group_by=GroupBy.CLIENT,
            filters={"plate": "XYZ", "client": None},
            generated_at=datetime(2025, 6, 2, 10, 0, tzinfo=timezone.utc),
        )

        assert "Ana · 555-1" in html
        assert "Alineación ($1200)" in html
        assert "$1200.00" in html
        assert "Patente: XYZ" in html
        assert "Cliente:" not in html
        assert "02/06/2025 10:00" in html

    def test_escapes_user_text(self):
        renderer = ReportRenderer()
        appointment = make_appointment(description="<script>alert(1)</script>")

        html = renderer.render_html([appointment])

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_empty_report(self):
        html = ReportRenderer().render_html([])
        assert "No hay turnos" in html


# ============================================================
# Filtro del reporte
# ============================================================


class TestReportFilter:
    """Tests para ReportFilter."""

    def test_blank_values_are_ignored(self):
        report_filter = ReportFilter(client="  ", plate="", date_from=None, date_to=" ")
        assert report_filter == ReportFilter()
        assert report_filter.conditions() == []

    def test_conditions_per_filter(self):
        report_filter = ReportFilter(client="ana", plate="xyz")
        assert len(report_filter.conditions()) == 2

    def test_date_range_only_when_bound_present(self):
        assert ReportFilter().date_bounds() is None
        assert len(ReportFilter(date_from="2025-01-01").conditions()) == 2

    def test_open_upper_bound(self):
        now = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)
        start, end = ReportFilter(date_from="2025-01-01").date_bounds(now=now)
        assert start == datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert end == datetime(2025, 6, 15, 23, 59, 59, 999000, tzinfo=timezone.utc)
