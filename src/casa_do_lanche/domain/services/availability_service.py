"""Serviço de disponibilidade diária (estoque por item e dia)."""
from __future__ import annotations
from datetime import date
from kink import di
from sqlalchemy import select
from ...repo.models import MenuItem, DailyAvailability
from ...ports.interfaces import DisponibilidadeDTO
from ...core.errors import NotFound
from ...core.logging import get_logger

log = get_logger()

def list_availability(day: date) -> list[dict]:
    """Cada item ativo combinado com sua linha do dia (id vazio e zeros se não houver)."""
    Session = di["session_factory"]
    with Session() as s:
        items = s.execute(select(MenuItem).where(MenuItem.ativo.is_(True)).order_by(MenuItem.nome.asc())).scalars().all()
        rows = s.execute(select(DailyAvailability).where(DailyAvailability.data_disponibilidade == day)).scalars().all()
        por_item = {r.cardapio_id: r for r in rows}
        out = []
        for it in items:
            r = por_item.get(it.id)
            out.append({
                "id": r.id if r else None,
                "cardapio_id": it.id,
                "data_disponibilidade": day.isoformat(),
                "quantidade_inicial": r.quantidade_inicial if r else 0,
                "quantidade_disponivel": r.quantidade_disponivel if r else 0,
                "menu_item_name": it.nome,
            })
        return out

def save_availability(dto: DisponibilidadeDTO, day: date) -> dict:
    """Insere ou atualiza a linha (item, dia)."""
    day = dto.data_disponibilidade or day
    Session = di["session_factory"]
    with Session() as s, s.begin():
        item = s.get(MenuItem, dto.cardapio_id)
        if not item:
            raise NotFound("Item do cardápio não encontrado.")
        row = s.execute(
            select(DailyAvailability).where(
                DailyAvailability.cardapio_id == dto.cardapio_id,
                DailyAvailability.data_disponibilidade == day,
            )
        ).scalars().first()
        if row:
            row.quantidade_inicial = dto.quantidade_inicial
            row.quantidade_disponivel = dto.quantidade_disponivel
        else:
            row = DailyAvailability(
                cardapio_id=dto.cardapio_id,
                data_disponibilidade=day,
                quantidade_inicial=dto.quantidade_inicial,
                quantidade_disponivel=dto.quantidade_disponivel,
            )
            s.add(row)
        s.flush()
        data = {
            "id": row.id,
            "cardapio_id": row.cardapio_id,
            "data_disponibilidade": day.isoformat(),
            "quantidade_inicial": row.quantidade_inicial,
            "quantidade_disponivel": row.quantidade_disponivel,
            "menu_item_name": item.nome,
        }
    log.info("availability_saved", cardapio_id=dto.cardapio_id, dia=day.isoformat(), disponivel=dto.quantidade_disponivel)
    return data
