"""Erros de negócio: carregam a mensagem exibida ao usuário e o status HTTP."""


class AppError(Exception):
    status = 400

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class ValidationFailed(AppError):
    status = 400


class Unauthorized(AppError):
    status = 401


class Forbidden(AppError):
    status = 403


class NotFound(AppError):
    status = 404


class Conflict(AppError):
    status = 409


class OutOfStock(Conflict):
    """Estoque do dia insuficiente para o pedido."""


class ServiceUnavailable(AppError):
    status = 503
