"""Serviço de contas: cadastro, login, papel do usuário e troca de senha."""
from __future__ import annotations
from kink import di
from sqlalchemy import select
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
from werkzeug.security import generate_password_hash, check_password_hash
from ...repo.models import User, ROLE_CLIENTE, ROLE_ADMIN
from ...ports.interfaces import RegistroDTO
from ...core.settings import Settings
from ...core.sanitize import normalize_email, sanitize_text
from ...core.errors import Conflict, NotFound, Unauthorized, ValidationFailed
from ...core.logging import get_logger

log = get_logger()

RESET_SALT = "casa-do-lanche-reset-senha"

def user_to_dict(u: User) -> dict:
    return {
        "id": u.id,
        "nome": u.nome,
        "email": u.email,
        "telefone": u.telefone,
        "setor": u.setor,
        "tipo_usuario": u.tipo_usuario,
    }

def _check_password_rules(password: str, confirm: str | None = None) -> None:
    if confirm is not None and password != confirm:
        raise ValidationFailed("As senhas não coincidem.")
    minimo = di[Settings].min_password_length
    if len(password or "") < minimo:
        raise ValidationFailed(f"A senha deve ter pelo menos {minimo} caracteres.")

def create_user(nome: str, email: str, password: str, telefone: str = "", setor: str = "", tipo_usuario: str = ROLE_CLIENTE) -> dict:
    """Cria usuário com senha em hash; email é único (case-insensitive)."""
    if tipo_usuario not in (ROLE_ADMIN, ROLE_CLIENTE):
        raise ValidationFailed("Tipo de usuário inválido.")
    _check_password_rules(password)
    email = normalize_email(email)
    Session = di["session_factory"]
    with Session() as s, s.begin():
        if s.execute(select(User.id).where(User.email == email)).first():
            raise Conflict("Este email já está cadastrado.")
        u = User(
            nome=sanitize_text(nome),
            email=email,
            telefone=sanitize_text(telefone),
            setor=sanitize_text(setor),
            senha_hash=generate_password_hash(password),
            tipo_usuario=tipo_usuario,
        )
        s.add(u)
        s.flush()
        data = user_to_dict(u)
    log.info("user_created", user_id=data["id"], tipo_usuario=tipo_usuario)
    return data

def register(dto: RegistroDTO) -> dict:
    """Auto-cadastro: sempre cria 'cliente'."""
    return create_user(dto.name, dto.email, dto.password, telefone=dto.phone, setor=dto.sector)

def authenticate(email: str, password: str) -> dict:
    Session = di["session_factory"]
    with Session() as s:
        u = s.execute(select(User).where(User.email == normalize_email(email))).scalars().first()
        if not u or not check_password_hash(u.senha_hash, password or ""):
            log.info("login_failed", email=normalize_email(email))
            raise Unauthorized("Email ou senha inválidos.")
        return user_to_dict(u)

def get_user(user_id: str) -> dict | None:
    Session = di["session_factory"]
    with Session() as s:
        u = s.get(User, user_id)
        return user_to_dict(u) if u else None

def get_user_role(user_id: str | None) -> str | None:
    """'admin' | 'cliente' | None (sem sessão ou usuário removido)."""
    if not user_id:
        return None
    user = get_user(user_id)
    return user["tipo_usuario"] if user else None

def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(di[Settings].secret_key, salt=RESET_SALT)

def request_password_reset(email: str) -> str | None:
    """Gera token de redefinição; retorna None se o email não existir."""
    email = normalize_email(email)
    if not email:
        raise ValidationFailed("Por favor, digite seu email.")
    Session = di["session_factory"]
    with Session() as s:
        user_id = s.execute(select(User.id).where(User.email == email)).scalar()
    if not user_id:
        log.info("password_reset_unknown_email")
        return None
    token = _serializer().dumps({"uid": user_id})
    log.info("password_reset_link", user_id=user_id, link=f"/update-password?token={token}")
    return token

def user_id_from_reset_token(token: str) -> str:
    try:
        data = _serializer().loads(token, max_age=di[Settings].reset_token_max_age_s)
    except SignatureExpired:
        raise Unauthorized("Link de redefinição expirado.")
    except BadSignature:
        raise Unauthorized("Link de redefinição inválido.")
    return data["uid"]

def update_password(user_id: str, password: str, confirm_password: str) -> None:
    _check_password_rules(password, confirm_password)
    Session = di["session_factory"]
    with Session() as s, s.begin():
        u = s.get(User, user_id)
        if not u:
            raise NotFound("Usuário não encontrado.")
        u.senha_hash = generate_password_hash(password)
    log.info("password_updated", user_id=user_id)
