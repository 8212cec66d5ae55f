"""
Exportación del Historial de turnos: agrupación, CSV y PDF
Proyecto: Taller Manager (Gestión de Taller)

El PDF se genera con WeasyPrint + Jinja2 a partir de
templates/report_template.html.
"""

import csv
import datetime
import io
import logging
import os
from decimal import Decimal
from typing import Iterable, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from taller.core.config import settings
from taller.core.dates import ensure_utc
from taller.models import Appointment
from taller.schemas.report import GroupBy

logger = logging.getLogger(__name__)

# Path a la carpeta de templates
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
TEMPLATES_DIR = os.path.join(BASE_DIR, "templates")

# Byte order mark: Excel abre el CSV como UTF-8
UTF8_BOM = "\ufeff"

CSV_HEADERS = [
    "Fecha",
    "Hora",
    "Estado",
    "Cliente",
    "Teléfono",
    "Vehículo",
    "Patente",
    "Descripción",
    "Trabajos",
    "Total trabajos",
]

STATUS_LABELS = {
    "PENDING": "Pendiente",
    "IN_PROGRESS": "En progreso",
    "COMPLETED": "Completado",
    "CANCELLED": "Cancelado",
}


# Lazy import de weasyprint para no fallar al inicio si faltan las librerías del sistema
def _get_weasyprint():
    """Importa weasyprint solo cuando se pide un PDF."""
    try:
        from weasyprint import CSS, HTML
        return HTML, CSS
    except OSError as e:
        raise RuntimeError(
            "Faltan las dependencias de WeasyPrint. Instale las librerías "
            "Pango/GTK del sistema."
        ) from e


# -------------------------------------------------------------------
# Formato
# -------------------------------------------------------------------

def format_date(value: datetime.datetime) -> str:
    """Día calendario UTC del turno como dd/mm/yyyy."""
    return ensure_utc(value).strftime("%d/%m/%Y")


def format_price(value: Decimal) -> str:
    """Precio sin ceros decimales sobrantes: 1500.00 → "1500", 12.50 → "12.5"."""
    normalized = Decimal(value).normalize()
    return f"{normalized:f}"


def format_jobs(appointment: Appointment) -> str:
    """Lista de trabajos "descripción ($precio)" separados por " | "."""
    return " | ".join(
        f"{job.description} (${format_price(job.price)})" for job in appointment.jobs
    )


def format_total(value: Decimal) -> str:
    return f"{Decimal(value):.2f}"


# -------------------------------------------------------------------
# Agrupación
# -------------------------------------------------------------------

def group_key(appointment: Appointment, group_by: GroupBy) -> str:
    """
    Clave del grupo de un turno.

    "nombre · teléfono" por cliente, "patente · marca modelo" por vehículo
    y "" sin agrupar.
    """
    if group_by == GroupBy.CLIENT:
        client = appointment.client
        return f"{client.name} · {client.phone}"
    if group_by == GroupBy.VEHICLE:
        vehicle = appointment.vehicle
        return f"{vehicle.plate} · {vehicle.make} {vehicle.model}"
    return ""


def group_appointments(
    appointments: Iterable[Appointment],
    group_by: GroupBy = GroupBy.NONE,
) -> list[dict]:
    """
    Agrupa los turnos conservando el orden de aparición.

    Returns:
        Lista de dict con key, appointments y total (suma de los trabajos)
    """
    groups: dict[str, dict] = {}
    for appointment in appointments:
        key = group_key(appointment, group_by)
        group = groups.setdefault(
            key, {"key": key, "appointments": [], "total": Decimal("0")}
        )
        group["appointments"].append(appointment)
        group["total"] += appointment.total

    return list(groups.values())


# -------------------------------------------------------------------
# CSV
# -------------------------------------------------------------------

def csv_row(appointment: Appointment) -> list[str]:
    """Una fila del CSV para el turno."""
    vehicle = appointment.vehicle
    return [
        format_date(appointment.date),
        appointment.start_time,
        appointment.status,
        appointment.client.name,
        appointment.client.phone,
        f"{vehicle.make} {vehicle.model}",
        vehicle.plate,
        appointment.description,
        format_jobs(appointment),
        format_total(appointment.total),
    ]


def build_csv(appointments: Iterable[Appointment]) -> str:
    """
    Genera el CSV del historial.

    Todas las celdas van entre comillas dobles (las comillas internas se
    duplican) y el texto empieza con el BOM de UTF-8.
    """
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")

    writer.writerow(CSV_HEADERS)
    for appointment in appointments:
        writer.writerow(csv_row(appointment))

    # Sin salto de línea después de la última fila
    return UTF8_BOM + output.getvalue().rstrip("\n")


# -------------------------------------------------------------------
# HTML / PDF
# -------------------------------------------------------------------

class ReportRenderer:
    """
    Genera el reporte imprimible a partir del template HTML/CSS.

    El HTML se puede obtener por separado; el PDF lo produce WeasyPrint.
    """

    def __init__(self, templates_dir: str = TEMPLATES_DIR):
        self.templates_dir = templates_dir
        self.env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(["html"]),
        )
        self.env.filters["fecha"] = format_date
        self.env.filters["precio"] = format_price
        self.env.filters["total"] = format_total
        self.env.filters["estado"] = lambda status: STATUS_LABELS.get(status, status)

    def render_html(
        self,
        appointments: list[Appointment],
        group_by: GroupBy = GroupBy.NONE,
        filters: Optional[dict] = None,
        generated_at: Optional[datetime.datetime] = None,
    ) -> str:
        """
        Renderiza el reporte como HTML.

        Args:
            appointments: Turnos del reporte, con cliente, vehículo y trabajos
            group_by: Criterio de agrupación
            filters: Filtros aplicados, para mostrarlos en el encabezado
            generated_at: Fecha de generación (default: ahora)
        """
        template = self.env.get_template("report_template.html")
        groups = group_appointments(appointments, group_by)
        generated_at = generated_at or datetime.datetime.now(datetime.timezone.utc)

        context = {
            # Datos del taller (desde settings)
            "workshop_name": settings.workshop_name,
            "workshop_address": settings.workshop_address,
            "workshop_phone": settings.workshop_phone,

            "groups": groups,
            "grouped": group_by != GroupBy.NONE,
            "filters": {k: v for k, v in (filters or {}).items() if v},
            "count": len(appointments),
            "grand_total": sum((g["total"] for g in groups), Decimal("0")),
            "generated_at": generated_at.strftime("%d/%m/%Y %H:%M"),
        }
        return template.render(context)

    def render_pdf(
        self,
        appointments: list[Appointment],
        group_by: GroupBy = GroupBy.NONE,
        filters: Optional[dict] = None,
    ) -> bytes:
        """
        Genera el PDF del reporte.

        Returns:
            bytes: PDF listo para descargar
        """
        HTML, CSS = _get_weasyprint()

        html_out = self.render_html(appointments, group_by, filters)
        css = CSS(filename=os.path.join(self.templates_dir, "report_style.css"))

        pdf_bytes = HTML(string=html_out, base_url=self.templates_dir).write_pdf(
            stylesheets=[css]
        )
        logger.info("Generado PDF del reporte: %s turnos", len(appointments))
        return pdf_bytes


report_renderer = ReportRenderer()
