"""Repositório: procedimentos transacionais de estoque (pedido com baixa / cancelamento com estorno)."""
from __future__ import annotations
from datetime import datetime
from sqlalchemy import update
from kink import di
from ..repo.models import Order, MenuItem, User, DailyAvailability, STATUS_PENDENTE
from ..core.settings import Settings
from ..core.dates import utcnow, local_date_of, format_datetime_br
from ..core.formatting import order_total, money_json
from ..core.errors import NotFound, OutOfStock, ValidationFailed
from ..core.logging import get_logger

log = get_logger()

def serialize_order(order: Order, tz: str, usuario: User | None = None, item: MenuItem | None = None) -> dict:
    """Linha de pedido já com nome/email do cliente e nome do item ("N/A" se ausente)."""
    usuario = usuario or order.usuario
    item = item or order.item
    return {
        "id": order.id,
        "usuario_id": order.usuario_id,
        "cardapio_id": order.cardapio_id,
        "quantidade": order.quantidade,
        "total": money_json(order.total),
        "status": order.status,
        "data_pedido": order.data_pedido.isoformat() + "Z",
        "data_pedido_local": format_datetime_br(order.data_pedido, tz),
        "usuario_nome": usuario.nome if usuario else "N/A",
        "usuario_email": usuario.email if usuario else "N/A",
        "usuario_telefone": usuario.telefone if usuario else "",
        "usuario_setor": usuario.setor if usuario else "",
        "item_nome": item.nome if item else "N/A",
        "preco_unitario": money_json(item.preco) if item else 0.0,
    }

def place_order_and_deduct_stock(usuario_id: str, cardapio_id: str, quantidade: int, now: datetime | None = None) -> dict:
    """Cria pedido 'Pendente' e baixa o estoque do dia numa única transação.

    A baixa é um UPDATE condicional (quantidade_disponivel >= quantidade): se nenhuma
    linha casar, não há estoque e nada é gravado.
    """
    if quantidade < 1:
        raise ValidationFailed("A quantidade deve ser maior que zero.")
    tz = di[Settings].timezone
    now = now or utcnow()
    dia = local_date_of(now, tz)
    Session = di["session_factory"]
    with Session() as s, s.begin():
        item = s.get(MenuItem, cardapio_id)
        if not item or not item.ativo:
            raise NotFound("Item do cardápio não encontrado.")
        usuario = s.get(User, usuario_id)
        if not usuario:
            raise NotFound("Usuário não encontrado.")
        res = s.execute(
            update(DailyAvailability)
            .where(
                DailyAvailability.cardapio_id == cardapio_id,
                DailyAvailability.data_disponibilidade == dia,
                DailyAvailability.quantidade_disponivel >= quantidade,
            )
            .values(quantidade_disponivel=DailyAvailability.quantidade_disponivel - quantidade)
            .execution_options(synchronize_session=False)
        )
        if res.rowcount != 1:
            raise OutOfStock("Quantidade indisponível para hoje.")
        order = Order(
            usuario_id=usuario_id,
            cardapio_id=cardapio_id,
            quantidade=quantidade,
            total=order_total(item.preco, quantidade),
            status=STATUS_PENDENTE,
            data_pedido=now,
        )
        s.add(order)
        s.flush()
        data = serialize_order(order, tz, usuario=usuario, item=item)
    log.info("order_placed", order_id=data["id"], cardapio_id=cardapio_id, quantidade=quantidade, dia=dia.isoformat())
    return data

def cancel_order_and_restore_stock(order_id: str) -> dict:
    """Exclui o pedido e devolve a quantidade ao estoque do dia em que foi feito."""
    tz = di[Settings].timezone
    Session = di["session_factory"]
    with Session() as s, s.begin():
        order = s.get(Order, order_id)
        if not order:
            raise NotFound("Pedido não encontrado.")
        dia = local_date_of(order.data_pedido, tz)
        res = s.execute(
            update(DailyAvailability)
            .where(
                DailyAvailability.cardapio_id == order.cardapio_id,
                DailyAvailability.data_disponibilidade == dia,
            )
            .values(quantidade_disponivel=DailyAvailability.quantidade_disponivel + order.quantidade)
            .execution_options(synchronize_session=False)
        )
        data = serialize_order(order, tz)
        s.delete(order)
    log.info("order_cancelled", order_id=order_id, restocked=res.rowcount == 1, dia=dia.isoformat())
    return data
