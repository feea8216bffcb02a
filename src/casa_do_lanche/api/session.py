"""Sessão/identidade: usuário logado (cookie assinado do Flask) e controle de acesso por papel."""
from __future__ import annotations
from functools import wraps
from flask import session, jsonify, g
from ..domain.services import auth_service
from ..repo.models import ROLE_ADMIN
from ..core.toast import show_error

SESSION_KEY = "usuario_id"

def login_user(user: dict) -> None:
    session.clear()
    session[SESSION_KEY] = user["id"]
    session.permanent = True

def logout_user() -> None:
    session.clear()

def current_user() -> dict | None:
    """Usuário da sessão (cacheado por request); sessão órfã é limpa."""
    if "current_user" in g:
        return g.current_user
    uid = session.get(SESSION_KEY)
    user = auth_service.get_user(uid) if uid else None
    if uid and not user:
        session.clear()
    g.current_user = user
    return user

def get_user_role() -> str | None:
    user = current_user()
    return user["tipo_usuario"] if user else None

def _denied(message: str, status: int, redirect: str):
    return jsonify({"error": message, "redirect": redirect, "toast": show_error(message)}), status

def login_required(view_func):
    """Sem sessão: 401 com redirect para /login."""
    @wraps(view_func)
    def wrapped(*args, **kwargs):
        if not current_user():
            return _denied("Faça login para continuar.", 401, "/login")
        return view_func(*args, **kwargs)
    return wrapped

def admin_required(view_func):
    """Sem sessão: 401 (/login); logado sem papel admin: 403 com redirect para /."""
    @wraps(view_func)
    def wrapped(*args, **kwargs):
        if not current_user():
            return _denied("Faça login para continuar.", 401, "/login")
        if get_user_role() != ROLE_ADMIN:
            return _denied("Acesso restrito a administradores.", 403, "/")
        return view_func(*args, **kwargs)
    return wrapped
