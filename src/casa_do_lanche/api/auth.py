"""Rotas de conta: cadastro, login/logout, sessão atual e redefinição de senha."""
from __future__ import annotations
from flask import Blueprint, request, jsonify
from ..domain.services import auth_service
from ..ports.interfaces import RegistroDTO, LoginDTO, EsqueciSenhaDTO, AtualizarSenhaDTO
from ..repo.models import ROLE_ADMIN
from ..core.toast import show_success
from ..core.errors import Unauthorized
from .session import login_user, logout_user, current_user, get_user_role

bp = Blueprint("auth", __name__)

@bp.post("/register")
def register():
    dto = RegistroDTO.model_validate(request.get_json(silent=True) or {})
    user = auth_service.register(dto)
    return jsonify({
        "usuario": user,
        "redirect": "/login",
        "toast": show_success("Conta criada com sucesso. Faça login para continuar."),
    }), 201

@bp.post("/login")
def login():
    dto = LoginDTO.model_validate(request.get_json(silent=True) or {})
    user = auth_service.authenticate(dto.email, dto.password)
    login_user(user)
    destino = "/admin" if user["tipo_usuario"] == ROLE_ADMIN else "/menu"
    return jsonify({"usuario": user, "redirect": destino, "toast": show_success("Login realizado com sucesso.", title="Sucesso!")})

@bp.post("/logout")
def logout():
    logout_user()
    return jsonify({"redirect": "/login", "toast": show_success("Você foi desconectado.")})

@bp.get("/session")
def session_info():
    """Equivalente ao hook de papel do usuário: quem está logado e com qual papel."""
    return jsonify({"usuario": current_user(), "role": get_user_role()})

@bp.post("/forgot-password")
def forgot_password():
    """Mesma resposta para emails existentes ou não."""
    dto = EsqueciSenhaDTO.model_validate(request.get_json(silent=True) or {})
    auth_service.request_password_reset(dto.email)
    return jsonify({"toast": show_success("Verifique seu email para o link de redefinição de senha.")})

@bp.post("/update-password")
def update_password():
    """Troca a senha do usuário logado ou de quem veio pelo link de redefinição."""
    dto = AtualizarSenhaDTO.model_validate(request.get_json(silent=True) or {})
    if dto.token:
        user_id = auth_service.user_id_from_reset_token(dto.token)
    else:
        user = current_user()
        if not user:
            raise Unauthorized("Faça login ou use o link de redefinição de senha.")
        user_id = user["id"]
    auth_service.update_password(user_id, dto.password, dto.confirm_password)
    user = auth_service.get_user(user_id)
    login_user(user)
    return jsonify({
        "redirect": "/menu",
        "toast": show_success("Sua senha foi atualizada com sucesso. Você já está logado."),
    })
