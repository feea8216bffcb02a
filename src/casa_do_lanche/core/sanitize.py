"""Sanitização simples de campos de formulário."""
import re

CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
NON_DIGITS = re.compile(r"\D")

def sanitize_text(text: str | None) -> str:
    """Normaliza espaços e remove caracteres de controle."""
    text = CONTROL_CHARS.sub("", text or "")
    return " ".join(text.split())

def normalize_email(email: str | None) -> str:
    return sanitize_text(email).lower()

def only_digits(phone: str | None) -> str:
    """'(11) 98888-7777' -> '11988887777'."""
    return NON_DIGITS.sub("", phone or "")
