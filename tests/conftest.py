from __future__ import annotations
from datetime import date, datetime
from decimal import Decimal
import pytest
from kink import di
from sqlalchemy import select
from casa_do_lanche.api.app import create_app
from casa_do_lanche.core.settings import Settings
from casa_do_lanche.core.dates import local_today
from casa_do_lanche.domain.services import auth_service
from casa_do_lanche.repo.models import MenuItem, DailyAvailability, Order, ROLE_ADMIN, STATUS_PENDENTE
from casa_do_lanche.ports.interfaces import EntregaDTO

TZ = "America/Sao_Paulo"


class FakeSender:
    """Substitui o adapter do WhatsApp; guarda as mensagens enviadas."""

    def __init__(self, ok: bool = True, is_configured: bool = True):
        self.ok = ok
        self.is_configured = is_configured
        self.sent = []

    def configured(self) -> bool:
        return self.is_configured

    def send(self, msg):
        self.sent.append(msg)
        if self.ok:
            return EntregaDTO(ok=True, provider_message_id="wamid.TESTE")
        return EntregaDTO(ok=False, error_code="131030", error_detail="Recipient not allowed")


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        create_tables=True,
        secret_key="test-secret",
        timezone=TZ,
        owner_phone="+55 (11) 99999-0000",
        owner_name="CLAUDIO RODRIGUES",
    )


@pytest.fixture
def app(settings):
    application = create_app(settings)
    application.config.update(TESTING=True)
    return application


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    auth_service.create_user("Admin Casa", "admin@casa.com", "admin123", tipo_usuario=ROLE_ADMIN)
    c = app.test_client()
    r = c.post("/login", json={"email": "admin@casa.com", "password": "admin123"})
    assert r.status_code == 200
    return c


def register_and_login(app, email="maria@casa.com", name="maria da silva", password="segredo1"):
    c = app.test_client()
    r = c.post("/register", json={
        "name": name, "email": email, "phone": "(11) 98888-7777", "sector": "Financeiro", "password": password,
    })
    assert r.status_code == 201, r.get_json()
    r = c.post("/login", json={"email": email, "password": password})
    assert r.status_code == 200
    return c, r.get_json()["usuario"]


@pytest.fixture
def customer(app):
    return register_and_login(app)


def add_item(nome="X-Burger", preco="25.00", ativo=True) -> str:
    Session = di["session_factory"]
    with Session() as s, s.begin():
        it = MenuItem(nome=nome, descricao="desc", preco=Decimal(preco), imagem_url="http://img", ativo=ativo)
        s.add(it)
        s.flush()
        return it.id


def set_stock(cardapio_id: str, quantidade: int, dia: date | None = None) -> None:
    Session = di["session_factory"]
    with Session() as s, s.begin():
        s.add(DailyAvailability(
            cardapio_id=cardapio_id,
            data_disponibilidade=dia or local_today(TZ),
            quantidade_inicial=quantidade,
            quantidade_disponivel=quantidade,
        ))


def stock_of(cardapio_id: str, dia: date | None = None) -> int:
    Session = di["session_factory"]
    with Session() as s:
        return s.execute(
            select(DailyAvailability.quantidade_disponivel).where(
                DailyAvailability.cardapio_id == cardapio_id,
                DailyAvailability.data_disponibilidade == (dia or local_today(TZ)),
            )
        ).scalar_one()


def add_order(usuario_id: str, cardapio_id: str, when: datetime, quantidade=1, total="10.00", status=STATUS_PENDENTE) -> str:
    """Pedido direto no banco, com timestamp UTC controlado."""
    Session = di["session_factory"]
    with Session() as s, s.begin():
        o = Order(usuario_id=usuario_id, cardapio_id=cardapio_id, quantidade=quantidade,
                  total=Decimal(total), status=status, data_pedido=when)
        s.add(o)
        s.flush()
        return o.id
