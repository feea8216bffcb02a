"""Cardápio do cliente: vitrine com estoque do dia, prévia de total e pedido."""
from __future__ import annotations
from flask import Blueprint, request, jsonify
from kink import di
from ..core.settings import Settings
from ..core.dates import local_today
from ..core.toast import show_success
from ..core.errors import ValidationFailed
from ..domain.services import menu_service, order_service
from ..ports.interfaces import PedidoDTO
from .session import login_required, current_user

bp = Blueprint("menu", __name__, url_prefix="/menu")

@bp.get("")
def menu():
    """Itens ativos com quantidade disponível hoje; sem estoque => pode_pedir falso."""
    hoje = local_today(di[Settings].timezone)
    return jsonify({"data": hoje.isoformat(), "itens": menu_service.list_menu(hoje)})

@bp.get("/<cardapio_id>/quote")
def quote(cardapio_id: str):
    try:
        quantidade = int(request.args.get("quantidade", "1"))
    except ValueError:
        raise ValidationFailed("Quantidade inválida.")
    if quantidade < 1:
        raise ValidationFailed("A quantidade deve ser maior que zero.")
    return jsonify(menu_service.quote(cardapio_id, quantidade))

@bp.post("/orders")
@login_required
def place_order():
    dto = PedidoDTO.model_validate(request.get_json(silent=True) or {})
    out = order_service.place_order(current_user()["id"], dto.cardapio_id, dto.quantidade)
    pedido = out["pedido"]
    msg = f"Pedido de {pedido['quantidade']}x {pedido['item_nome']} realizado com sucesso!"
    return jsonify(out | {"toast": show_success(msg)}), 201

@bp.post("/orders/<order_id>/notify-owner")
@login_required
def notify_owner(order_id: str):
    """Cliente confirma que enviou o pedido; o dono recebe aviso pelo WhatsApp."""
    entrega = order_service.notify_owner(order_id, current_user()["id"])
    return jsonify({"entrega": entrega, "toast": show_success("Mensagem de WhatsApp enviada ao responsável.")})
