"""Migração inicial: usuários, cardápio, disponibilidade diária e pedidos."""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        "usuario",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("nome", sa.String(120), nullable=False),
        sa.Column("telefone", sa.String(32), nullable=False, server_default=""),
        sa.Column("setor", sa.String(80), nullable=False, server_default=""),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("senha_hash", sa.String(255), nullable=False),
        sa.Column("tipo_usuario", sa.String(16), nullable=False, server_default="cliente"),
        sa.Column("criado_em", sa.TIMESTAMP(timezone=False)),
    )
    op.create_table(
        "cardapio",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("nome", sa.String(120), nullable=False),
        sa.Column("descricao", sa.Text(), nullable=False, server_default=""),
        sa.Column("preco", sa.Numeric(10, 2), nullable=False),
        sa.Column("imagem_url", sa.String(500), nullable=False, server_default=""),
        sa.Column("ativo", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_table(
        "disponibilidade_diaria_cardapio",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("cardapio_id", sa.String(36), sa.ForeignKey("cardapio.id", ondelete="CASCADE"), nullable=False),
        sa.Column("data_disponibilidade", sa.Date(), nullable=False),
        sa.Column("quantidade_inicial", sa.Integer, nullable=False, server_default="0"),
        sa.Column("quantidade_disponivel", sa.Integer, nullable=False, server_default="0"),
        sa.UniqueConstraint("cardapio_id", "data_disponibilidade", name="uq_disponibilidade_item_dia"),
        sa.CheckConstraint("quantidade_disponivel >= 0", name="ck_disponivel_nao_negativo"),
    )
    op.create_table(
        "pedidos",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("usuario_id", sa.String(36), sa.ForeignKey("usuario.id"), nullable=False),
        sa.Column("cardapio_id", sa.String(36), sa.ForeignKey("cardapio.id"), nullable=False),
        sa.Column("quantidade", sa.Integer, nullable=False),
        sa.Column("total", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="Pendente"),
        sa.Column("data_pedido", sa.TIMESTAMP(timezone=False), nullable=False),
    )
    op.create_index("ix_pedidos_data_pedido", "pedidos", ["data_pedido"])

def downgrade() -> None:
    op.drop_index("ix_pedidos_data_pedido", table_name="pedidos")
    op.drop_table("pedidos")
    op.drop_table("disponibilidade_diaria_cardapio")
    op.drop_table("cardapio")
    op.drop_table("usuario")
