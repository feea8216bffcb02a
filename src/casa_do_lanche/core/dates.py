"""Datas no fuso da loja.

O banco guarda timestamps em UTC sem tzinfo; filtros de dia e mês são montados
no fuso local da loja e convertidos para UTC antes da consulta.
"""
from __future__ import annotations
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo
from .errors import ValidationFailed

MESES = [
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
]

DATA_FORA_DO_INTERVALO = "Data inválida ou fora do intervalo suportado."

def utcnow() -> datetime:
    """Agora em UTC, sem tzinfo (formato das colunas)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)

def _to_utc_naive(local: datetime) -> datetime:
    return local.astimezone(timezone.utc).replace(tzinfo=None)

def to_local(value: datetime, tz: str) -> datetime:
    """Converte timestamp UTC (naive) para o fuso da loja."""
    return value.replace(tzinfo=timezone.utc).astimezone(ZoneInfo(tz))

def local_today(tz: str) -> date:
    return datetime.now(ZoneInfo(tz)).date()

def local_date_of(value: datetime, tz: str) -> date:
    return to_local(value, tz).date()

def day_bounds(day: date, tz: str) -> tuple[datetime, datetime]:
    """Intervalo [00:00 do dia, 00:00 do dia seguinte) em UTC."""
    zone = ZoneInfo(tz)
    try:
        start = datetime.combine(day, time.min, tzinfo=zone)
        end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=zone)
        return _to_utc_naive(start), _to_utc_naive(end)
    except (ValueError, OverflowError):
        raise ValidationFailed(DATA_FORA_DO_INTERVALO)

def month_bounds(year: int, month: int, tz: str) -> tuple[datetime, datetime]:
    """Intervalo [dia 1 00:00, dia 1 do mês seguinte 00:00) em UTC."""
    zone = ZoneInfo(tz)
    try:
        first = date(year, month, 1)
        nxt = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
        start = datetime.combine(first, time.min, tzinfo=zone)
        end = datetime.combine(nxt, time.min, tzinfo=zone)
        return _to_utc_naive(start), _to_utc_naive(end)
    except (ValueError, OverflowError):
        raise ValidationFailed(DATA_FORA_DO_INTERVALO)

def parse_day(value: str | None, tz: str) -> date:
    """'2025-10-07' -> date; vazio = hoje no fuso da loja."""
    if not value:
        return local_today(tz)
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationFailed("Data inválida, use o formato AAAA-MM-DD.")

def parse_month(month: str | None, year: str | None, tz: str) -> tuple[int, int]:
    """Lê filtros ?month=&year=; padrão é o mês corrente."""
    today = local_today(tz)
    try:
        m = int(month) if month else today.month
        y = int(year) if year else today.year
    except ValueError:
        raise ValidationFailed("Mês ou ano inválido.")
    if not 1 <= m <= 12 or not 1900 <= y <= 9999:
        raise ValidationFailed("Mês ou ano inválido.")
    return y, m

def month_name(month: int) -> str:
    return MESES[month - 1]

def month_options() -> list[dict]:
    return [{"value": str(i + 1), "label": nome} for i, nome in enumerate(MESES)]

def year_options(tz: str) -> list[str]:
    current = local_today(tz).year
    return [str(current - 2 + i) for i in range(5)]

def format_datetime_br(value: datetime, tz: str) -> str:
    """Timestamp UTC -> 'dd/MM/yyyy HH:mm' no fuso da loja."""
    return to_local(value, tz).strftime("%d/%m/%Y %H:%M")
