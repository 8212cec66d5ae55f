"""
Router FastAPI para los Reportes
Proyecto: Taller Manager (Gestión de Taller)

Historial de turnos con filtros, agrupación, exportación CSV y PDF.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response, StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from taller.core.config import settings
from taller.core.database import get_db
from taller.schemas.appointment import AppointmentRead
from taller.schemas.report import GroupBy, ReportGroup
from taller.services.report_export import build_csv, group_appointments, report_renderer
from taller.services.report_service import ReportFilter, report_service

# Logger de este módulo
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/reports",
    tags=["Reportes"],
)


def get_report_filter(
    client: Optional[str] = Query(None, description="Nombre o teléfono del cliente (contiene)"),
    plate: Optional[str] = Query(None, description="Patente (contiene)"),
    date_from: Optional[str] = Query(None, alias="from", description="Desde YYYY-MM-DD"),
    date_to: Optional[str] = Query(None, alias="to", description="Hasta YYYY-MM-DD"),
) -> ReportFilter:
    """Dependency: arma el ReportFilter desde los query params y valida las fechas."""
    report_filter = ReportFilter(
        client=client,
        plate=plate,
        date_from=date_from,
        date_to=date_to,
    )
    report_filter.date_bounds()
    return report_filter


@router.get(
    "",
    name="reporte",
    summary="Historial de turnos",
    description="Turnos filtrados por cliente, patente y rango de fechas, del más reciente al más antiguo.",
    response_model=list[AppointmentRead],
    status_code=status.HTTP_200_OK,
)
async def get_report(
    report_filter: ReportFilter = Depends(get_report_filter),
    db: AsyncSession = Depends(get_db),
) -> list[AppointmentRead]:
    """
    Recupera el historial de turnos.

    Raises:
        BusinessValidationError: Si alguna fecha es inválida
    """
    appointments = await report_service.get_report(db=db, report_filter=report_filter)
    return [AppointmentRead.model_validate(a) for a in appointments]


@router.get(
    "/grouped",
    name="reporte_agrupado",
    summary="Historial agrupado",
    description="Historial agrupado por cliente o por vehículo, con el total de cada grupo.",
    response_model=list[ReportGroup],
    status_code=status.HTTP_200_OK,
)
async def get_grouped_report(
    group_by: GroupBy = Query(GroupBy.NONE, alias="groupBy"),
    report_filter: ReportFilter = Depends(get_report_filter),
    db: AsyncSession = Depends(get_db),
) -> list[ReportGroup]:
    """
    Recupera el historial agrupado. Los grupos siguen el orden del historial.
    """
    appointments = await report_service.get_report(db=db, report_filter=report_filter)
    return [
        ReportGroup.model_validate(group)
        for group in group_appointments(appointments, group_by)
    ]


@router.get(
    "/export",
    name="reporte_csv",
    summary="Exporta el historial a CSV",
    response_class=StreamingResponse,
    status_code=status.HTTP_200_OK,
)
async def export_report_csv(
    report_filter: ReportFilter = Depends(get_report_filter),
    db: AsyncSession = Depends(get_db),
) -> StreamingResponse:
    """
    Descarga el historial filtrado como CSV (UTF-8 con BOM).
    """
    appointments = await report_service.get_report(db=db, report_filter=report_filter)
    content = build_csv(appointments)

    logger.info("Exportado CSV del historial: %s turnos", len(appointments))
    return StreamingResponse(
        iter([content.encode("utf-8")]),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{settings.report_csv_filename}"'
        },
    )


@router.get(
    "/pdf",
    name="reporte_pdf",
    summary="Historial en PDF",
    response_class=Response,
    status_code=status.HTTP_200_OK,
)
async def export_report_pdf(
    group_by: GroupBy = Query(GroupBy.NONE, alias="groupBy"),
    report_filter: ReportFilter = Depends(get_report_filter),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """
    Genera el reporte imprimible en PDF.
    """
    appointments = await report_service.get_report(db=db, report_filter=report_filter)
    pdf_bytes = report_renderer.render_pdf(
        appointments,
        group_by=group_by,
        filters={
            "client": report_filter.client,
            "plate": report_filter.plate,
            "date_from": report_filter.date_from,
            "date_to": report_filter.date_to,
        },
    )

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": 'inline; filename="historial_turnos.pdf"'},
    )
