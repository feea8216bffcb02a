"""Serviço de cardápio: vitrine do cliente (com estoque do dia) e CRUD do admin."""
from __future__ import annotations
from datetime import date
from kink import di
from sqlalchemy import select, delete
from ...repo.models import MenuItem, DailyAvailability, Order
from ...ports.interfaces import ItemCardapioDTO
from ...core.formatting import money_json, order_total
from ...core.errors import Conflict, NotFound
from ...core.logging import get_logger

log = get_logger()

def item_to_dict(it: MenuItem) -> dict:
    return {
        "id": it.id,
        "nome": it.nome,
        "descricao": it.descricao,
        "preco": money_json(it.preco),
        "imagem_url": it.imagem_url,
        "ativo": it.ativo,
    }

def list_menu(day: date) -> list[dict]:
    """Itens ativos (por nome) com a quantidade disponível no dia.

    Sem linha de disponibilidade o item aparece com 0 e `pode_pedir` falso.
    """
    Session = di["session_factory"]
    with Session() as s:
        rows = s.execute(
            select(MenuItem, DailyAvailability.quantidade_disponivel)
            .outerjoin(
                DailyAvailability,
                (DailyAvailability.cardapio_id == MenuItem.id) & (DailyAvailability.data_disponibilidade == day),
            )
            .where(MenuItem.ativo.is_(True))
            .order_by(MenuItem.nome.asc())
        ).all()
        out = []
        for item, disponivel in rows:
            disponivel = disponivel or 0
            out.append(item_to_dict(item) | {"quantidade_disponivel": disponivel, "pode_pedir": disponivel > 0})
        return out

def quote(cardapio_id: str, quantidade: int) -> dict:
    """Prévia do total (preço × quantidade, 2 casas) antes de confirmar."""
    Session = di["session_factory"]
    with Session() as s:
        item = s.get(MenuItem, cardapio_id)
        if not item or not item.ativo:
            raise NotFound("Item do cardápio não encontrado.")
        return {"cardapio_id": item.id, "quantidade": quantidade, "total": money_json(order_total(item.preco, quantidade))}

def list_items() -> list[dict]:
    """Todos os itens (ativos e inativos), por nome."""
    Session = di["session_factory"]
    with Session() as s:
        rows = s.execute(select(MenuItem).order_by(MenuItem.nome.asc())).scalars().all()
        return [item_to_dict(r) for r in rows]

def create_item(dto: ItemCardapioDTO) -> dict:
    """Novos itens entram ativos."""
    Session = di["session_factory"]
    with Session() as s, s.begin():
        it = MenuItem(nome=dto.nome, descricao=dto.descricao, preco=dto.preco, imagem_url=dto.imagem_url, ativo=True)
        s.add(it)
        s.flush()
        data = item_to_dict(it)
    log.info("menu_item_created", cardapio_id=data["id"])
    return data

def update_item(cardapio_id: str, dto: ItemCardapioDTO) -> dict:
    Session = di["session_factory"]
    with Session() as s, s.begin():
        it = s.get(MenuItem, cardapio_id)
        if not it:
            raise NotFound("Item do cardápio não encontrado.")
        it.nome = dto.nome
        it.descricao = dto.descricao
        it.preco = dto.preco
        it.imagem_url = dto.imagem_url
        it.ativo = dto.ativo
        data = item_to_dict(it)
    log.info("menu_item_updated", cardapio_id=cardapio_id, ativo=dto.ativo)
    return data

def delete_item(cardapio_id: str) -> None:
    """Remove item sem pedidos; com histórico, o caminho é desativar."""
    Session = di["session_factory"]
    with Session() as s, s.begin():
        it = s.get(MenuItem, cardapio_id)
        if not it:
            raise NotFound("Item do cardápio não encontrado.")
        if s.execute(select(Order.id).where(Order.cardapio_id == cardapio_id).limit(1)).first():
            raise Conflict("Este item possui pedidos registrados. Desative-o em vez de excluir.")
        s.execute(delete(DailyAvailability).where(DailyAvailability.cardapio_id == cardapio_id))
        s.delete(it)
    log.info("menu_item_deleted", cardapio_id=cardapio_id)
