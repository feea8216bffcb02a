"""Comandos `flask` de operação: criar admin e popular o cardápio inicial."""
from __future__ import annotations
from decimal import Decimal
import click
from flask import Flask
from .domain.services import auth_service, menu_service
from .ports.interfaces import ItemCardapioDTO
from .repo.models import ROLE_ADMIN

CARDAPIO_INICIAL = [
    ("X-Burger Clássico", "Hambúrguer de carne, queijo, alface, tomate e maionese no pão de brioche.", "25.00"),
    ("X-Salada Especial", "Hambúrguer de carne, queijo, bacon, ovo, alface, tomate e maionese no pão de brioche.", "30.00"),
    ("Batata Frita Grande", "Porção generosa de batatas fritas crocantes.", "15.00"),
    ("Refrigerante Lata", "Coca-Cola, Guaraná, Soda Limonada (escolha a sua).", "7.00"),
]

def register_cli(app: Flask) -> None:
    @app.cli.command("create-admin")
    @click.option("--name", required=True)
    @click.option("--email", required=True)
    @click.password_option()
    @click.option("--phone", default="")
    @click.option("--sector", default="Administração")
    def create_admin(name: str, email: str, password: str, phone: str, sector: str) -> None:
        """Cria um usuário administrador."""
        user = auth_service.create_user(name, email, password, telefone=phone, setor=sector, tipo_usuario=ROLE_ADMIN)
        click.echo(f"admin criado: {user['id']} <{user['email']}>")

    @app.cli.command("seed-menu")
    def seed_menu() -> None:
        """Cadastra o cardápio inicial quando ainda não há itens."""
        if menu_service.list_items():
            click.echo("cardápio já possui itens; nada a fazer")
            return
        for nome, descricao, preco in CARDAPIO_INICIAL:
            menu_service.create_item(ItemCardapioDTO(
                nome=nome,
                descricao=descricao,
                preco=Decimal(preco),
                imagem_url=f"https://via.placeholder.com/150?text={nome.split()[0]}",
            ))
        click.echo(f"{len(CARDAPIO_INICIAL)} itens cadastrados")
