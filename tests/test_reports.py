import re
from datetime import datetime
from casa_do_lanche.domain.services.pdf_service import report_filename, generate_client_report_pdf, item_lines
from conftest import add_item, add_order, register_and_login


def _outubro(usuario_id, item):
    """Pedidos nas bordas de outubro/2025 em America/Sao_Paulo (UTC-3)."""
    add_order(usuario_id, item, datetime(2025, 10, 1, 2, 59), total="1.00")    # 30/09 23:59 local
    add_order(usuario_id, item, datetime(2025, 10, 1, 3, 0), total="10.00")    # 01/10 00:00 local
    add_order(usuario_id, item, datetime(2025, 10, 31, 23, 0), total="20.50")  # 31/10 20:00 local
    add_order(usuario_id, item, datetime(2025, 11, 1, 3, 0), total="100.00")   # 01/11 00:00 local


def test_my_report_covers_the_whole_local_month(customer):
    c, usuario = customer
    item = add_item("X-Burger")
    _outubro(usuario["id"], item)

    body = c.get("/my-reports?month=10&year=2025").get_json()
    rel = body["relatorio"]
    assert rel["numOrders"] == 2
    assert rel["totalSpent"] == 30.5
    assert rel["userName"] == "Maria da Silva"
    assert rel["mes_nome"] == "outubro"
    # mais recente primeiro
    assert [o["data_pedido_local"] for o in rel["orders"]] == ["31/10/2025 20:00", "01/10/2025 00:00"]
    assert len(body["filtros"]["meses"]) == 12
    assert len(body["filtros"]["anos"]) == 5


def test_my_report_only_shows_own_orders(app, customer):
    c, usuario = customer
    _, outro = register_and_login(app, email="joao@casa.com", name="joão")
    item = add_item()
    add_order(usuario["id"], item, datetime(2025, 10, 10, 15, 0))
    add_order(outro["id"], item, datetime(2025, 10, 10, 16, 0))
    rel = c.get("/my-reports?month=10&year=2025").get_json()["relatorio"]
    assert rel["numOrders"] == 1


def test_my_report_requires_login(client):
    assert client.get("/my-reports").status_code == 401


def test_invalid_month(customer):
    c, _ = customer
    assert c.get("/my-reports?month=13&year=2025").status_code == 400


def test_admin_monthly_reports_grouped_by_customer(app, admin_client, customer):
    _, maria = customer
    _, ze = register_and_login(app, email="ze@casa.com", name="ANTONIO dos santos")
    item = add_item()
    _outubro(maria["id"], item)
    add_order(ze["id"], item, datetime(2025, 10, 15, 12, 0), total="8.00")

    body = admin_client.get("/admin/reports?month=10&year=2025").get_json()
    assert body["mes"] == 10 and body["ano"] == 2025
    assert [c["userName"] for c in body["clientes"]] == ["Antonio dos Santos", "Maria da Silva"]
    assert [c["numOrders"] for c in body["clientes"]] == [1, 2]
    assert body["clientes"][1]["totalSpent"] == 30.5
    assert body["total_mes"] == 38.5


def test_admin_reports_empty_month(admin_client):
    body = admin_client.get("/admin/reports?month=1&year=2024").get_json()
    assert body["clientes"] == []
    assert body["total_mes"] == 0.0


def test_my_report_pdf_download(customer):
    c, usuario = customer
    item = add_item("X-Burger")
    _outubro(usuario["id"], item)
    r = c.get("/my-reports/pdf?month=10&year=2025")
    assert r.status_code == 200
    assert r.mimetype == "application/pdf"
    assert r.data.startswith(b"%PDF")
    assert "Relatorio_Pedidos_Maria_da_Silva_Outubro_2025.pdf" in r.headers["Content-Disposition"]


def test_admin_pdf_for_customer(admin_client, customer):
    _, usuario = customer
    item = add_item()
    _outubro(usuario["id"], item)
    r = admin_client.get(f"/admin/reports/{usuario['id']}/pdf?month=10&year=2025")
    assert r.status_code == 200
    assert r.data.startswith(b"%PDF")

    r = admin_client.get(f"/admin/reports/{usuario['id']}/pdf?month=1&year=2024")
    assert r.status_code == 404


def test_report_filename_is_download_safe():
    assert report_filename("Ana / Paula", "Março", 2025) == "Relatorio_Pedidos_Ana_Paula_Março_2025.pdf"


def test_pdf_breaks_pages_for_long_reports():
    pedido = {"item_nome": "X-Burger", "quantidade": 1, "total": 25.0, "data_pedido_local": "01/10/2025 12:00"}
    report = {
        "userName": "Maria da Silva", "userPhone": "", "userSector": "",
        "totalSpent": 2500.0, "numOrders": 100, "orders": [pedido] * 100,
    }
    content, filename = generate_client_report_pdf(report, "Outubro", 2025)
    assert content.startswith(b"%PDF")
    assert len(re.findall(rb"/Type /Page(?!s)", content)) >= 2
    assert filename == "Relatorio_Pedidos_Maria_da_Silva_Outubro_2025.pdf"


def test_year_beyond_calendar_is_rejected(admin_client, customer):
    c, usuario = customer
    r = c.get("/my-reports?month=12&year=9999")
    assert r.status_code == 400
    assert admin_client.get("/admin/reports?month=12&year=9999").status_code == 400
    assert admin_client.get(f"/admin/reports/{usuario['id']}/pdf?month=12&year=9999").status_code == 400


def test_long_item_names_wrap_without_losing_text():
    nome = "Combo Família Super Especial com Batata Grande, Refrigerante de 2 litros e Sobremesa"
    linhas = item_lines(nome)
    assert len(linhas) > 1
    assert " ".join(linhas) == nome

    pedido = {"item_nome": nome, "quantidade": 1, "total": 89.9, "data_pedido_local": "01/10/2025 12:00"}
    report = {"userName": "Ana", "totalSpent": 89.9 * 60, "numOrders": 60, "orders": [pedido] * 60}
    content, _ = generate_client_report_pdf(report, "Outubro", 2025)
    assert content.startswith(b"%PDF")
