"""Relatórios mensais: pedidos do cliente e consolidado por cliente para o admin."""
from __future__ import annotations
from collections import OrderedDict
from kink import di
from ...core.settings import Settings
from ...core.dates import month_bounds, month_name, month_options, year_options
from ...core.formatting import format_name
from ...core.errors import NotFound
from . import auth_service
from .order_service import orders_between, sum_totals

def filters() -> dict:
    """Opções dos seletores de mês (PT-BR) e ano (atual-2 .. atual+2)."""
    return {"meses": month_options(), "anos": year_options(di[Settings].timezone)}

def client_report(usuario_id: str, year: int, month: int) -> dict:
    """Pedidos do usuário no mês, com total gasto e número de pedidos."""
    user = auth_service.get_user(usuario_id)
    if not user:
        raise NotFound("Usuário não encontrado.")
    start, end = month_bounds(year, month, di[Settings].timezone)
    pedidos = orders_between(start, end, usuario_id=usuario_id)
    return {
        "userId": user["id"],
        "userName": format_name(user["nome"]),
        "userPhone": user["telefone"],
        "userSector": user["setor"],
        "totalSpent": sum_totals(pedidos),
        "numOrders": len(pedidos),
        "orders": pedidos,
        "mes": month,
        "mes_nome": month_name(month),
        "ano": year,
    }

def monthly_reports(year: int, month: int) -> dict:
    """Agrupa os pedidos do mês por cliente (ordenado pelo nome formatado)."""
    start, end = month_bounds(year, month, di[Settings].timezone)
    pedidos = orders_between(start, end)
    grupos: "OrderedDict[str, list[dict]]" = OrderedDict()
    for p in pedidos:
        grupos.setdefault(p["usuario_id"], []).append(p)
    clientes = []
    for usuario_id, lista in grupos.items():
        primeiro = lista[0]
        clientes.append({
            "userId": usuario_id,
            "userName": format_name(primeiro["usuario_nome"]),
            "userPhone": primeiro["usuario_telefone"],
            "userSector": primeiro["usuario_setor"],
            "totalSpent": sum_totals(lista),
            "numOrders": len(lista),
            "orders": lista,
        })
    clientes.sort(key=lambda c: c["userName"].lower())
    return {
        "mes": month,
        "mes_nome": month_name(month),
        "ano": year,
        "clientes": clientes,
        "total_mes": sum_totals(pedidos),
    }
