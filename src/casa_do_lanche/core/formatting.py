"""Formatação de valores para exibição (PT-BR): dinheiro e nomes."""
from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP
from .sanitize import sanitize_text

CENTAVOS = Decimal("0.01")
PARTICULAS = {"da", "de", "do", "das", "dos", "e"}

def round_money(value) -> Decimal:
    """Arredonda para 2 casas (meio para cima). Aceita float, int, str ou Decimal."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTAVOS, rounding=ROUND_HALF_UP)

def order_total(preco, quantidade: int) -> Decimal:
    """Total do pedido = preço unitário × quantidade, com 2 casas."""
    return round_money(round_money(preco) * quantidade)

def format_brl(value) -> str:
    """1234.5 -> 'R$ 1.234,50'."""
    txt = f"{round_money(value):,.2f}"
    return "R$ " + txt.replace(",", "_").replace(".", ",").replace("_", ".")

def format_name(name: str | None) -> str:
    """'maria DA silva' -> 'Maria da Silva'."""
    words = sanitize_text(name).lower().split()
    return " ".join(
        w if i > 0 and w in PARTICULAS else w.capitalize()
        for i, w in enumerate(words)
    )

def money_json(value) -> float:
    return float(round_money(value))
