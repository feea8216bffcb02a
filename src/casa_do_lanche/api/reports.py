"""Relatórios mensais: do próprio cliente (/my-reports) e consolidado do admin (/admin/reports)."""
from __future__ import annotations
from io import BytesIO
from flask import Blueprint, request, jsonify, send_file
from kink import di
from ..core.settings import Settings
from ..core.dates import parse_month, month_name
from ..core.errors import AppError, NotFound
from ..core.logging import get_logger
from ..domain.services import report_service, pdf_service
from .session import login_required, admin_required, current_user

log = get_logger()

bp = Blueprint("reports", __name__)

def _periodo() -> tuple[int, int]:
    return parse_month(request.args.get("month"), request.args.get("year"), di[Settings].timezone)

def _pdf_response(report: dict, year: int, month: int):
    """Falhas ao gerar o PDF viram o mesmo toast de erro das demais operações."""
    try:
        content, filename = pdf_service.generate_client_report_pdf(
            report, month_name(month).capitalize(), year, logo_path=di[Settings].logo_path,
        )
    except Exception as exc:
        log.exception("pdf_failed", user_id=report.get("userId"))
        raise AppError(f"Erro ao gerar PDF: {exc}", status=500)
    log.info("pdf_generated", user_id=report.get("userId"), filename=filename)
    return send_file(BytesIO(content), mimetype="application/pdf", as_attachment=True, download_name=filename)

@bp.get("/my-reports")
@login_required
def my_reports():
    year, month = _periodo()
    report = report_service.client_report(current_user()["id"], year, month)
    return jsonify({"relatorio": report, "filtros": report_service.filters()})

@bp.get("/my-reports/pdf")
@login_required
def my_reports_pdf():
    year, month = _periodo()
    report = report_service.client_report(current_user()["id"], year, month)
    return _pdf_response(report, year, month)

@bp.get("/admin/reports")
@admin_required
def admin_reports():
    year, month = _periodo()
    return jsonify(report_service.monthly_reports(year, month) | {"filtros": report_service.filters()})

@bp.get("/admin/reports/<user_id>/pdf")
@admin_required
def admin_report_pdf(user_id: str):
    year, month = _periodo()
    report = report_service.client_report(user_id, year, month)
    if not report["numOrders"]:
        raise NotFound("Nenhum pedido deste cliente no período.")
    return _pdf_response(report, year, month)
