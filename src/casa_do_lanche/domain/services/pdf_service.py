"""Relatório mensal de pedidos de um cliente em PDF (reportlab).

Conteúdo: logo (se configurado), título, período, dados do cliente (nome, telefone,
setor, total gasto, número de pedidos) e tabela Item / Quantidade / Total / Data.
"""
from __future__ import annotations
from io import BytesIO
import os
import re

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas as pdf_canvas

from ...core.formatting import format_brl
from ...core.logging import get_logger

log = get_logger()

HEADER_FILL = (56 / 255, 189 / 255, 248 / 255)
COLUNAS = (("Item", 0), ("Quantidade", 230), ("Total", 320), ("Data", 410))
LARGURA_ITEM = 220
ALTURA_LINHA = 15

def report_filename(user_name: str, month_name: str, year) -> str:
    """Relatorio_Pedidos_<nome>_<mes>_<ano>.pdf, sem caracteres que quebram o download."""
    safe = re.sub(r"[^\w\-]+", "_", f"{user_name}_{month_name}_{year}", flags=re.UNICODE).strip("_")
    return f"Relatorio_Pedidos_{safe}.pdf"

def _draw_logo(c, logo_path: str | None, left: float, y: float) -> float:
    if not logo_path or not os.path.isfile(logo_path):
        return y
    try:
        img = ImageReader(logo_path)
        iw, ih = img.getSize()
        max_h = 90
        w = (iw * max_h / ih) if ih else max_h
        c.drawImage(img, left, y - max_h, width=min(w, 160), height=max_h, mask="auto")
        return y - max_h - 20
    except OSError:
        log.warning("pdf_logo_unreadable", logo_path=logo_path)
        return y

def item_lines(nome: str) -> list[str]:
    """Quebra o nome do item na largura da coluna, sem cortar texto."""
    return simpleSplit(nome, "Helvetica", 10, LARGURA_ITEM) or [""]

def _table_header(c, left: float, y: float, width: float) -> float:
    c.setFillColorRGB(*HEADER_FILL)
    c.rect(left - 4, y - 5, width - 2 * left + 8, 18, stroke=0, fill=1)
    c.setFillColorRGB(1, 1, 1)
    c.setFont("Helvetica-Bold", 10)
    for titulo, dx in COLUNAS:
        c.drawString(left + dx, y, titulo)
    c.setFillColorRGB(0, 0, 0)
    c.setFont("Helvetica", 10)
    return y - 18

def generate_client_report_pdf(report: dict, month_name: str, year, logo_path: str | None = None) -> tuple[bytes, str]:
    """Gera o PDF a partir do relatório do cliente; retorna (bytes, nome do arquivo)."""
    buf = BytesIO()
    c = pdf_canvas.Canvas(buf, pagesize=A4)
    width, height = A4
    left = 40
    y = _draw_logo(c, logo_path, left, height - 30)
    if y == height - 30:
        y = height - 50

    c.setFont("Helvetica-Bold", 18)
    c.drawString(left, y, "Relatório Mensal de Pedidos")
    y -= 22
    c.setFont("Helvetica", 12)
    c.drawString(left, y, f"Período: {month_name}/{year}")
    y -= 34

    c.setFont("Helvetica-Bold", 14)
    c.drawString(left, y, "Dados do Cliente:")
    y -= 20
    c.setFont("Helvetica", 12)
    for linha in (
        f"Nome: {report['userName']}",
        f"Telefone: {report.get('userPhone') or '-'}",
        f"Setor: {report.get('userSector') or '-'}",
        f"Total Gasto: {format_brl(report['totalSpent'])}",
        f"Número de Pedidos: {report['numOrders']}",
    ):
        c.drawString(left, y, linha)
        y -= 17
    y -= 18

    c.setFont("Helvetica-Bold", 14)
    c.drawString(left, y, "Detalhes dos Pedidos:")
    y -= 26
    y = _table_header(c, left, y, width)

    for order in report.get("orders", []):
        linhas_item = item_lines(order.get("item_nome") or "N/A")
        if y - ALTURA_LINHA * (len(linhas_item) - 1) < 60:
            c.showPage()
            y = _table_header(c, left, height - 50, width)
        valores = (
            str(order["quantidade"]),
            format_brl(order["total"]),
            order.get("data_pedido_local", ""),
        )
        for (_, dx), valor in zip(COLUNAS[1:], valores):
            c.drawString(left + dx, y, valor)
        for i, linha in enumerate(linhas_item):
            c.drawString(left, y - i * ALTURA_LINHA, linha)
        y -= ALTURA_LINHA * len(linhas_item)

    c.showPage()
    c.save()
    buf.seek(0)
    return buf.getvalue(), report_filename(report["userName"], month_name, year)
