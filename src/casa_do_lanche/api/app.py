"""API Flask da Casa do Lanche: factory, tratamento de erros e rotas públicas."""
from __future__ import annotations
from flask import Flask, request, jsonify
from kink import di
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException
from ..core.di import bootstrap_di
from ..core.settings import Settings
from ..core.logging import set_trace_id, get_logger
from ..core.errors import AppError
from ..core.toast import show_error
from ..repo.models import Base, ROLE_ADMIN
from .session import current_user, get_user_role
from . import auth, menu, admin, reports
from ..cli import register_cli

log = get_logger()

def _validation_message(exc: ValidationError) -> str:
    """Primeira mensagem do pydantic em texto para o usuário."""
    err = exc.errors()[0]
    if err.get("type") == "missing":
        return "Por favor, preencha todos os campos obrigatórios."
    msg = err.get("msg", "Dados inválidos.")
    if msg.startswith("Value error, "):
        return msg[len("Value error, "):]
    campo = ".".join(str(p) for p in err.get("loc", ()))
    return f"{campo}: {msg}" if campo else msg

def _error(message: str, status: int):
    return jsonify({"error": message, "toast": show_error(message)}), status

def create_app(settings: Settings | None = None) -> Flask:
    bootstrap_di(settings)
    settings = di[Settings]
    app = Flask(__name__)
    app.config.update(SECRET_KEY=settings.secret_key)
    app.json.sort_keys = False
    app.json.ensure_ascii = False

    if settings.create_tables:
        Base.metadata.create_all(di["session_factory"].kw["bind"])

    @app.before_request
    def _trace():
        set_trace_id(request.headers.get("X-Trace-Id"))

    @app.errorhandler(AppError)
    def _app_error(exc: AppError):
        log.info("app_error", path=request.path, status=exc.status, error=exc.message)
        return _error(exc.message, exc.status)

    @app.errorhandler(ValidationError)
    def _validation_error(exc: ValidationError):
        message = _validation_message(exc)
        log.info("validation_error", path=request.path, error=message)
        return _error(message, 400)

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        if exc.code == 404:
            return _error("Página não encontrada.", 404)
        return _error(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(Exception)
    def _unexpected(exc: Exception):
        log.exception("unhandled_error", path=request.path)
        return _error("Ocorreu um erro inesperado.", 500)

    @app.get("/")
    def index():
        """Página inicial: atalhos conforme a sessão."""
        user = current_user()
        links = [{"titulo": "Entrar", "rota": "/login"}, {"titulo": "Criar Conta", "rota": "/register"}]
        if user:
            links = [{"titulo": "Cardápio", "rota": "/menu"}, {"titulo": "Meus Relatórios", "rota": "/my-reports"}]
            if get_user_role() == ROLE_ADMIN:
                links.append({"titulo": "Painel do Administrador", "rota": "/admin"})
        return jsonify({"loja": settings.store_name, "usuario": user, "links": links})

    @app.get("/healthz")
    def healthz():
        """Health check básico."""
        return {"ok": True}

    app.register_blueprint(auth.bp)
    app.register_blueprint(menu.bp)
    app.register_blueprint(admin.bp)
    app.register_blueprint(reports.bp)

    register_cli(app)
    return app

if __name__ == "__main__":
    application = create_app()
    s = di[Settings]
    application.run(host=s.host, port=s.port, debug=s.flask_debug)
