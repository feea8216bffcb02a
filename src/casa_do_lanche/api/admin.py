"""Painel do admin: cardápio, disponibilidade diária, gestão de pedidos e pedidos pagos."""
from __future__ import annotations
from flask import Blueprint, request, jsonify
from kink import di
from ..core.settings import Settings
from ..core.dates import parse_day
from ..core.toast import show_success
from ..domain.services import menu_service, availability_service, order_service
from ..ports.interfaces import ItemCardapioDTO, DisponibilidadeDTO, StatusPedidoDTO
from .session import admin_required, current_user

bp = Blueprint("admin", __name__, url_prefix="/admin")

PAGINAS = [
    {"titulo": "Gerenciar Cardápio", "rota": "/admin/menu-management"},
    {"titulo": "Disponibilidade Diária", "rota": "/admin/daily-availability"},
    {"titulo": "Gerenciar Pedidos", "rota": "/admin/order-management"},
    {"titulo": "Pedidos Pagos", "rota": "/admin/paid-orders"},
    {"titulo": "Relatórios", "rota": "/admin/reports"},
    {"titulo": "Ver Cardápio", "rota": "/menu"},
]

def _dia():
    return parse_day(request.args.get("date"), di[Settings].timezone)

def _body() -> dict:
    return request.get_json(silent=True) or {}

@bp.get("")
@admin_required
def dashboard():
    return jsonify({"usuario": current_user(), "paginas": PAGINAS})

# ---------- Cardápio ----------
@bp.get("/menu-management")
@admin_required
def list_items():
    return jsonify({"itens": menu_service.list_items()})

@bp.post("/menu-management")
@admin_required
def create_item():
    item = menu_service.create_item(ItemCardapioDTO.model_validate(_body()))
    return jsonify({"item": item, "toast": show_success("Item do cardápio salvo com sucesso.")}), 201

@bp.put("/menu-management/<cardapio_id>")
@admin_required
def update_item(cardapio_id: str):
    item = menu_service.update_item(cardapio_id, ItemCardapioDTO.model_validate(_body()))
    return jsonify({"item": item, "toast": show_success("Item do cardápio salvo com sucesso.")})

@bp.delete("/menu-management/<cardapio_id>")
@admin_required
def delete_item(cardapio_id: str):
    menu_service.delete_item(cardapio_id)
    return jsonify({"toast": show_success("Item do cardápio excluído com sucesso.")})

# ---------- Disponibilidade ----------
@bp.get("/daily-availability")
@admin_required
def list_availability():
    dia = _dia()
    return jsonify({"data": dia.isoformat(), "disponibilidade": availability_service.list_availability(dia)})

@bp.put("/daily-availability")
@admin_required
def save_availability():
    dto = DisponibilidadeDTO.model_validate(_body())
    linha = availability_service.save_availability(dto, _dia())
    return jsonify({"disponibilidade": linha, "toast": show_success("Disponibilidade salva com sucesso.")})

# ---------- Pedidos ----------
@bp.get("/order-management")
@admin_required
def list_orders():
    dia = _dia()
    return jsonify({"data": dia.isoformat()} | order_service.list_orders_for_day(dia))

@bp.delete("/order-management/<order_id>")
@admin_required
def cancel_order(order_id: str):
    pedido = order_service.cancel_order(order_id)
    return jsonify({"pedido": pedido, "toast": show_success("Pedido excluído e estoque restaurado com sucesso.")})

@bp.get("/paid-orders")
@admin_required
def paid_orders():
    dia = _dia()
    return jsonify({"data": dia.isoformat()} | order_service.list_paid_orders(dia))

@bp.patch("/paid-orders/<order_id>/status")
@admin_required
def set_status(order_id: str):
    dto = StatusPedidoDTO.model_validate(_body())
    pedido = order_service.set_order_status(order_id, dto.status)
    return jsonify({"pedido": pedido, "toast": show_success(f'Status do pedido atualizado para "{dto.status}".')})
