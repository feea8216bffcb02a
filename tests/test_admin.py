from datetime import timedelta
from kink import di
from sqlalchemy import select, func
from casa_do_lanche.core.dates import local_today, utcnow, day_bounds
from casa_do_lanche.repo.models import DailyAvailability, Order
from conftest import add_item, set_stock, stock_of, add_order, TZ

ITEM = {
    "nome": "X-Tudo",
    "descricao": "Hambúrguer com tudo.",
    "preco": "32.90",
    "imagem_url": "https://img/x-tudo.png",
}


def test_admin_pages_require_admin_role(client, customer):
    r = client.get("/admin/menu-management")
    assert r.status_code == 401
    assert r.get_json()["redirect"] == "/login"

    c, _ = customer
    r = c.get("/admin/menu-management")
    assert r.status_code == 403
    assert r.get_json()["redirect"] == "/"
    assert c.get("/admin/reports").status_code == 403


def test_menu_item_crud(admin_client):
    r = admin_client.post("/admin/menu-management", json=ITEM)
    assert r.status_code == 201
    item = r.get_json()["item"]
    assert item["preco"] == 32.9
    assert item["ativo"] is True

    r = admin_client.put(f"/admin/menu-management/{item['id']}", json=ITEM | {"preco": "35.00", "ativo": False})
    assert r.status_code == 200
    assert r.get_json()["item"]["ativo"] is False

    itens = admin_client.get("/admin/menu-management").get_json()["itens"]
    assert [(i["nome"], i["preco"], i["ativo"]) for i in itens] == [("X-Tudo", 35.0, False)]

    r = admin_client.delete(f"/admin/menu-management/{item['id']}")
    assert r.status_code == 200
    assert admin_client.get("/admin/menu-management").get_json()["itens"] == []


def test_menu_item_requires_all_fields(admin_client):
    r = admin_client.post("/admin/menu-management", json={"nome": "X", "preco": "10"})
    assert r.status_code == 400
    r = admin_client.post("/admin/menu-management", json=ITEM | {"preco": "0"})
    assert r.status_code == 400


def test_item_with_orders_cannot_be_deleted(admin_client, customer):
    _, usuario = customer
    item = add_item()
    add_order(usuario["id"], item, utcnow())
    r = admin_client.delete(f"/admin/menu-management/{item}")
    assert r.status_code == 409


def test_availability_upsert(admin_client):
    item = add_item("X-Burger")
    add_item("Batata")
    dia = local_today(TZ).isoformat()

    linhas = admin_client.get(f"/admin/daily-availability?date={dia}").get_json()["disponibilidade"]
    assert {l["menu_item_name"]: l["quantidade_inicial"] for l in linhas} == {"Batata": 0, "X-Burger": 0}

    payload = {"cardapio_id": item, "quantidade_inicial": 10, "quantidade_disponivel": 10}
    r = admin_client.put(f"/admin/daily-availability?date={dia}", json=payload)
    assert r.status_code == 200
    assert stock_of(item) == 10

    r = admin_client.put(f"/admin/daily-availability?date={dia}", json=payload | {"quantidade_disponivel": 4})
    assert r.status_code == 200
    assert stock_of(item) == 4


def test_availability_cannot_exceed_initial(admin_client):
    item = add_item()
    r = admin_client.put("/admin/daily-availability", json={
        "cardapio_id": item, "quantidade_inicial": 5, "quantidade_disponivel": 6,
    })
    assert r.status_code == 400
    assert r.get_json()["error"] == "A quantidade disponível não pode ser maior que a inicial."


def test_availability_for_another_day(admin_client):
    item = add_item()
    amanha = local_today(TZ) + timedelta(days=1)
    r = admin_client.put(f"/admin/daily-availability?date={amanha.isoformat()}", json={
        "cardapio_id": item, "quantidade_inicial": 3, "quantidade_disponivel": 3,
    })
    assert r.status_code == 200
    assert stock_of(item, amanha) == 3


def test_order_management_lists_day_and_cancel_restores_stock(admin_client, customer):
    c, _ = customer
    item = add_item("X-Burger", "25.00")
    set_stock(item, 5)
    pedido = c.post("/menu/orders", json={"cardapio_id": item, "quantidade": 2}).get_json()["pedido"]
    assert stock_of(item) == 3

    body = admin_client.get("/admin/order-management").get_json()
    assert [p["id"] for p in body["pedidos"]] == [pedido["id"]]
    assert body["pedidos"][0]["usuario_nome"] == "maria da silva"
    assert body["pedidos"][0]["item_nome"] == "X-Burger"
    assert body["total_dia"] == 50.0
    assert body["total_mes"] >= 50.0

    r = admin_client.delete(f"/admin/order-management/{pedido['id']}")
    assert r.status_code == 200
    assert r.get_json()["toast"]["description"] == "Pedido excluído e estoque restaurado com sucesso."
    assert stock_of(item) == 5
    assert admin_client.get("/admin/order-management").get_json()["pedidos"] == []

    assert admin_client.delete(f"/admin/order-management/{pedido['id']}").status_code == 404


def test_order_management_other_day_is_empty(admin_client, customer):
    _, usuario = customer
    item = add_item()
    add_order(usuario["id"], item, utcnow())
    ontem = (local_today(TZ) - timedelta(days=1)).isoformat()
    body = admin_client.get(f"/admin/order-management?date={ontem}").get_json()
    assert body["pedidos"] == []
    assert body["total_dia"] == 0.0


def test_paid_orders_toggle(admin_client, customer):
    _, usuario = customer
    item = add_item()
    primeiro = add_order(usuario["id"], item, utcnow(), total="10.00")
    add_order(usuario["id"], item, utcnow(), total="7.50")

    r = admin_client.patch(f"/admin/paid-orders/{primeiro}/status", json={"status": "Pago"})
    assert r.status_code == 200
    assert r.get_json()["toast"]["description"] == 'Status do pedido atualizado para "Pago".'

    body = admin_client.get("/admin/paid-orders").get_json()
    assert [p["id"] for p in body["pedidos"]] == [primeiro]
    assert body["total_pago"] == 10.0

    admin_client.patch(f"/admin/paid-orders/{primeiro}/status", json={"status": "Pendente"})
    assert admin_client.get("/admin/paid-orders").get_json()["pedidos"] == []


def test_invalid_status(admin_client, customer):
    _, usuario = customer
    item = add_item()
    pedido = add_order(usuario["id"], item, utcnow())
    r = admin_client.patch(f"/admin/paid-orders/{pedido}/status", json={"status": "Entregue"})
    assert r.status_code == 400


def test_invalid_date_filter(admin_client):
    assert admin_client.get("/admin/order-management?date=07/10/2025").status_code == 400


def _count(model) -> int:
    Session = di["session_factory"]
    with Session() as s:
        return s.execute(select(func.count(model.id))).scalar_one()


def test_menu_item_blank_fields_get_required_message(admin_client):
    for payload in (ITEM | {"nome": ""}, ITEM | {"imagem_url": "   "}, ITEM | {"preco": 0}, ITEM | {"preco": "0.00"}):
        r = admin_client.post("/admin/menu-management", json=payload)
        assert r.status_code == 400
        assert r.get_json()["error"] == "Por favor, preencha todos os campos obrigatórios."
    assert admin_client.get("/admin/menu-management").get_json()["itens"] == []


def test_cancel_restores_stock_of_the_order_day(admin_client, customer):
    _, usuario = customer
    item = add_item()
    ontem = local_today(TZ) - timedelta(days=1)
    set_stock(item, 2, ontem)
    set_stock(item, 5)
    inicio_ontem, _ = day_bounds(ontem, TZ)
    pedido = add_order(usuario["id"], item, inicio_ontem + timedelta(hours=12), quantidade=3)

    r = admin_client.delete(f"/admin/order-management/{pedido}")
    assert r.status_code == 200
    assert stock_of(item, ontem) == 5
    assert stock_of(item) == 5


def test_cancel_without_availability_row_still_deletes_order(admin_client, customer):
    _, usuario = customer
    item = add_item()
    pedido = add_order(usuario["id"], item, utcnow(), quantidade=2)

    r = admin_client.delete(f"/admin/order-management/{pedido}")
    assert r.status_code == 200
    assert _count(Order) == 0
    assert _count(DailyAvailability) == 0


def test_date_filter_at_the_edge_of_the_calendar(admin_client):
    for rota in ("/admin/order-management", "/admin/paid-orders"):
        r = admin_client.get(f"{rota}?date=9999-12-31")
        assert r.status_code == 400
        assert r.get_json()["toast"]["variant"] == "destructive"
