"""Portas (interfaces) e DTOs de entrada/saída."""
from typing import Literal, Protocol
from datetime import date
from decimal import Decimal, InvalidOperation
from pydantic import BaseModel, Field, PositiveInt, field_validator, model_validator
from ..core.sanitize import sanitize_text, normalize_email

CAMPOS_OBRIGATORIOS = "Por favor, preencha todos os campos obrigatórios."

def _exige_campos(data, campos):
    """Campo ausente ou em branco vira a mensagem única de formulário incompleto."""
    if not isinstance(data, dict):
        return data
    for campo in campos:
        v = data.get(campo)
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError(CAMPOS_OBRIGATORIOS)
    return data

class RegistroDTO(BaseModel):
    """Cadastro de cliente."""
    name: str = Field(min_length=2, max_length=120)
    email: str = Field(min_length=3, max_length=255)
    phone: str = Field(min_length=8, max_length=32)
    sector: str = Field(min_length=1, max_length=80)
    password: str

    @model_validator(mode="before")
    @classmethod
    def _obrigatorios(cls, data):
        return _exige_campos(data, ("name", "email", "phone", "sector", "password"))

    @field_validator("name", "phone", "sector", mode="before")
    @classmethod
    def _limpa(cls, v):
        return sanitize_text(v) if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v):
        return normalize_email(v) if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def _formato_email(cls, v: str) -> str:
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("Email inválido.")
        return v

class LoginDTO(BaseModel):
    email: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v):
        return normalize_email(v) if isinstance(v, str) else v

class EsqueciSenhaDTO(BaseModel):
    email: str = ""

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v):
        return normalize_email(v) if isinstance(v, str) else v

class AtualizarSenhaDTO(BaseModel):
    password: str
    confirm_password: str
    token: str | None = None

class ItemCardapioDTO(BaseModel):
    """Criação/edição de item do cardápio; todos os campos obrigatórios."""
    nome: str = Field(min_length=1, max_length=120)
    descricao: str = Field(min_length=1)
    preco: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    imagem_url: str = Field(min_length=1, max_length=500)
    ativo: bool = True

    @model_validator(mode="before")
    @classmethod
    def _obrigatorios(cls, data):
        data = _exige_campos(data, ("nome", "descricao", "preco", "imagem_url"))
        try:
            preco = Decimal(str(data["preco"]))
        except (InvalidOperation, TypeError, KeyError):
            return data
        if preco <= 0:
            raise ValueError(CAMPOS_OBRIGATORIOS)
        return data

    @field_validator("nome", "descricao", "imagem_url", mode="before")
    @classmethod
    def _limpa(cls, v):
        return sanitize_text(v) if isinstance(v, str) else v

class DisponibilidadeDTO(BaseModel):
    cardapio_id: str
    data_disponibilidade: date | None = None
    quantidade_inicial: int = Field(ge=0)
    quantidade_disponivel: int = Field(ge=0)

    @model_validator(mode="after")
    def _disponivel_ate_inicial(self):
        if self.quantidade_disponivel > self.quantidade_inicial:
            raise ValueError("A quantidade disponível não pode ser maior que a inicial.")
        return self

class PedidoDTO(BaseModel):
    cardapio_id: str
    quantidade: PositiveInt = 1

class StatusPedidoDTO(BaseModel):
    status: Literal["Pendente", "Pago"]

class MensagemSaidaDTO(BaseModel):
    """DTO de mensagem de saída para o provedor."""
    wa_id: str
    texto: str

class EntregaDTO(BaseModel):
    """Resultado padronizado de envio pelo provedor."""
    ok: bool
    provider_message_id: str | None = None
    error_code: str | None = None
    error_detail: str | None = None

class EgressPort(Protocol):
    def configured(self) -> bool: ...
    def send(self, msg: MensagemSaidaDTO) -> EntregaDTO: ...
