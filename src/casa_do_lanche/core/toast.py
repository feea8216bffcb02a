"""Payloads de notificação (toast) devolvidos junto das respostas da API."""


def show_success(description: str, title: str = "Sucesso") -> dict:
    return {"variant": "success", "title": title, "description": description}


def show_error(description: str, title: str = "Erro") -> dict:
    return {"variant": "destructive", "title": title, "description": description}
