"""Textos (PT-BR) enviados ao WhatsApp, renderizados com Jinja2.

- Aviso ao dono quando o cliente confirma o pedido.
- Texto pré-preenchido do deep link wa.me.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict
from jinja2 import Environment, BaseLoader, StrictUndefined
from .formatting import format_brl, format_name

AVISO_DONO = (
    "Olá {{ dono }}, o cliente {{ cliente }} confirmou ter enviado o pedido #{{ pedido_id }} para você! "
    "Detalhes: {{ quantidade }}x {{ item }} ({{ preco | brl }} cada). Total do item: {{ total | brl }}."
)

LINK_PEDIDO = (
    "Olá! Sou {{ cliente }}{% if setor %} ({{ setor }}){% endif %} e acabei de fazer o pedido "
    "#{{ pedido_id }} na {{ loja_nome }}: {{ quantidade }}x {{ item }}, total {{ total | brl }}."
)

@dataclass
class MessageBuilder:
    loja_nome: str = "Casa do Lanche"
    dono: str = ""
    env: Environment = field(default_factory=lambda: Environment(
        loader=BaseLoader(),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    ))

    def __post_init__(self) -> None:
        self.env.filters["brl"] = format_brl

    def _render(self, source: str, **ctx: Any) -> str:
        return self.env.from_string(source).render(**ctx).strip()

    def owner_notice(self, pedido: Dict[str, Any]) -> str:
        """Mensagem ao dono: cliente confirmou o envio do pedido."""
        return self._render(
            AVISO_DONO,
            dono=self.dono,
            cliente=format_name(pedido.get("usuario_nome")),
            pedido_id=pedido["id"],
            quantidade=pedido["quantidade"],
            item=pedido.get("item_nome") or "N/A",
            preco=pedido["preco_unitario"],
            total=pedido["total"],
        )

    def order_link_text(self, pedido: Dict[str, Any]) -> str:
        """Texto pré-preenchido do link wa.me aberto pelo cliente."""
        return self._render(
            LINK_PEDIDO,
            loja_nome=self.loja_nome,
            cliente=format_name(pedido.get("usuario_nome")),
            setor=pedido.get("usuario_setor") or "",
            pedido_id=pedido["id"],
            quantidade=pedido["quantidade"],
            item=pedido.get("item_nome") or "N/A",
            total=pedido["total"],
        )
