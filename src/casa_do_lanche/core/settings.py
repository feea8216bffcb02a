"""Configurações Pydantic Settings para a aplicação."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    """Configurações da aplicação. Carrega de env e .env.

    Credenciais (secret_key, token do WhatsApp) devem vir via env.
    """
    model_config = SettingsConfigDict(env_file=".env", env_prefix="CDL_", case_sensitive=False)

    # Flask
    flask_debug: bool = Field(default=False)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    secret_key: str = Field(default="dev-secret", description="Assina o cookie de sessão e os tokens de senha")

    # DB
    database_url: str = Field(default="sqlite:///casa_do_lanche.db", description="ex: postgresql+psycopg://user:pass@db:5432/app")
    create_tables: bool = Field(default=False, description="create_all no boot (dev/testes); em produção use alembic")

    # Loja
    store_name: str = Field(default="Casa do Lanche")
    timezone: str = Field(default="America/Sao_Paulo")
    logo_path: str | None = Field(default=None, description="PNG usado no cabeçalho dos relatórios em PDF")

    # Contas
    min_password_length: int = Field(default=6)
    reset_token_max_age_s: int = Field(default=3600)

    # WhatsApp
    owner_name: str = Field(default="CLAUDIO RODRIGUES")
    owner_phone: str | None = Field(default=None, description="Número do dono, com DDI, que recebe os avisos de pedido")
    whatsapp_token: str | None = Field(default=None)
    whatsapp_phone_number_id: str | None = Field(default=None)
    whatsapp_api_base: str = Field(default="https://graph.facebook.com/v20.0")
