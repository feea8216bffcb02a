"""Modelos SQLAlchemy: usuários, cardápio, disponibilidade diária e pedidos."""
from __future__ import annotations
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy import String, Integer, Boolean, Date, Numeric, ForeignKey, UniqueConstraint, CheckConstraint, TIMESTAMP, Text
from datetime import date, datetime
from decimal import Decimal
from uuid import uuid4
from ..core.dates import utcnow

STATUS_PENDENTE = "Pendente"
STATUS_PAGO = "Pago"
STATUS_PEDIDO = (STATUS_PENDENTE, STATUS_PAGO)

ROLE_ADMIN = "admin"
ROLE_CLIENTE = "cliente"

def _uuid() -> str:
    return str(uuid4())

class Base(DeclarativeBase):
    """Base declarativa."""
    pass

class User(Base):
    __tablename__ = "usuario"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    nome: Mapped[str] = mapped_column(String(120))
    telefone: Mapped[str] = mapped_column(String(32), default="")
    setor: Mapped[str] = mapped_column(String(80), default="")
    email: Mapped[str] = mapped_column(String(255), unique=True)
    senha_hash: Mapped[str] = mapped_column(String(255))
    tipo_usuario: Mapped[str] = mapped_column(String(16), default=ROLE_CLIENTE)  # admin|cliente
    criado_em: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=False), default=utcnow)

class MenuItem(Base):
    __tablename__ = "cardapio"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    nome: Mapped[str] = mapped_column(String(120))
    descricao: Mapped[str] = mapped_column(Text, default="")
    preco: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    imagem_url: Mapped[str] = mapped_column(String(500), default="")
    ativo: Mapped[bool] = mapped_column(Boolean, default=True)

class DailyAvailability(Base):
    __tablename__ = "disponibilidade_diaria_cardapio"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    cardapio_id: Mapped[str] = mapped_column(ForeignKey("cardapio.id", ondelete="CASCADE"))
    data_disponibilidade: Mapped[date] = mapped_column(Date)
    quantidade_inicial: Mapped[int] = mapped_column(Integer, default=0)
    quantidade_disponivel: Mapped[int] = mapped_column(Integer, default=0)
    __table_args__ = (
        UniqueConstraint("cardapio_id", "data_disponibilidade", name="uq_disponibilidade_item_dia"),
        CheckConstraint("quantidade_disponivel >= 0", name="ck_disponivel_nao_negativo"),
    )

class Order(Base):
    __tablename__ = "pedidos"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    usuario_id: Mapped[str] = mapped_column(ForeignKey("usuario.id"))
    cardapio_id: Mapped[str] = mapped_column(ForeignKey("cardapio.id"))
    quantidade: Mapped[int] = mapped_column(Integer)
    total: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    status: Mapped[str] = mapped_column(String(16), default=STATUS_PENDENTE)  # Pendente|Pago
    data_pedido: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=False), default=utcnow, index=True)

    usuario: Mapped[User] = relationship(lazy="joined")
    item: Mapped[MenuItem] = relationship(lazy="joined")
