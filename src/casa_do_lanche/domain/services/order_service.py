"""Serviço de pedidos: criação com baixa de estoque, listagens do admin, status e aviso ao dono."""
from __future__ import annotations
from datetime import date, datetime
from decimal import Decimal
from kink import di
from sqlalchemy import select
from ...repo import repo
from ...repo.models import Order, STATUS_PAGO, STATUS_PEDIDO
from ...core.settings import Settings
from ...core.dates import day_bounds, month_bounds, local_today
from ...core.messages import MessageBuilder
from ...core.formatting import money_json
from ...core.errors import NotFound, ServiceUnavailable, ValidationFailed, Forbidden
from ...connectors.whatsapp.cloud_api_adapter import build_whatsapp_link
from ...ports.interfaces import MensagemSaidaDTO
from ...core.logging import get_logger

log = get_logger()

def orders_between(start: datetime, end: datetime, usuario_id: str | None = None, status: str | None = None) -> list[dict]:
    """Pedidos com data_pedido em [start, end), mais recentes primeiro."""
    tz = di[Settings].timezone
    Session = di["session_factory"]
    with Session() as s:
        q = select(Order).where(Order.data_pedido >= start, Order.data_pedido < end)
        if usuario_id:
            q = q.where(Order.usuario_id == usuario_id)
        if status:
            q = q.where(Order.status == status)
        rows = s.execute(q.order_by(Order.data_pedido.desc())).unique().scalars().all()
        return [repo.serialize_order(o, tz) for o in rows]

def sum_totals(orders: list[dict]) -> float:
    return money_json(sum((Decimal(str(o["total"])) for o in orders), Decimal("0")))

def place_order(usuario_id: str, cardapio_id: str, quantidade: int) -> dict:
    """Cria o pedido e devolve o link wa.me com a mensagem pronta para o dono."""
    pedido = repo.place_order_and_deduct_stock(usuario_id, cardapio_id, quantidade)
    settings = di[Settings]
    texto = di[MessageBuilder].order_link_text(pedido)
    return {"pedido": pedido, "whatsapp_link": build_whatsapp_link(settings.owner_phone, texto)}

def get_order(order_id: str) -> dict:
    tz = di[Settings].timezone
    Session = di["session_factory"]
    with Session() as s:
        o = s.get(Order, order_id)
        if not o:
            raise NotFound("Pedido não encontrado.")
        return repo.serialize_order(o, tz)

def notify_owner(order_id: str, usuario_id: str) -> dict:
    """Envia ao dono, pela Cloud API, o aviso de que o cliente confirmou o pedido."""
    pedido = get_order(order_id)
    if pedido["usuario_id"] != usuario_id:
        raise Forbidden("Este pedido não pertence a você.")
    sender = di["whatsapp"]
    if not sender.configured():
        log.error("whatsapp_not_configured", order_id=order_id)
        raise ServiceUnavailable("WhatsApp API credentials not configured")
    texto = di[MessageBuilder].owner_notice(pedido)
    res = sender.send(MensagemSaidaDTO(wa_id=di[Settings].owner_phone, texto=texto))
    if not res.ok:
        log.error("whatsapp_send_failed", order_id=order_id, error_code=res.error_code, error=res.error_detail)
        raise ServiceUnavailable(f"Falha ao enviar mensagem de WhatsApp: {res.error_detail or res.error_code}")
    log.info("whatsapp_sent", order_id=order_id, provider_message_id=res.provider_message_id)
    return res.model_dump()

def list_orders_for_day(day: date) -> dict:
    """Pedidos do dia + total do dia + total do mês corrente."""
    tz = di[Settings].timezone
    start, end = day_bounds(day, tz)
    pedidos = orders_between(start, end)
    hoje = local_today(tz)
    m_start, m_end = month_bounds(hoje.year, hoje.month, tz)
    mensais = orders_between(m_start, m_end)
    return {"pedidos": pedidos, "total_dia": sum_totals(pedidos), "total_mes": sum_totals(mensais)}

def cancel_order(order_id: str) -> dict:
    return repo.cancel_order_and_restore_stock(order_id)

def list_paid_orders(day: date) -> dict:
    tz = di[Settings].timezone
    start, end = day_bounds(day, tz)
    pedidos = orders_between(start, end, status=STATUS_PAGO)
    return {"pedidos": pedidos, "total_pago": sum_totals(pedidos)}

def set_order_status(order_id: str, status: str) -> dict:
    if status not in STATUS_PEDIDO:
        raise ValidationFailed("Status inválido.")
    tz = di[Settings].timezone
    Session = di["session_factory"]
    with Session() as s, s.begin():
        o = s.get(Order, order_id)
        if not o:
            raise NotFound("Pedido não encontrado.")
        o.status = status
        data = repo.serialize_order(o, tz)
    log.info("order_status_set", order_id=order_id, status=status)
    return data

