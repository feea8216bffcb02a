"""Adapter do WhatsApp: deep link wa.me e envio via Cloud API."""
from __future__ import annotations
from urllib.parse import quote
import httpx
from kink import di
from ...core.settings import Settings
from ...core.sanitize import only_digits
from ...ports.interfaces import MensagemSaidaDTO, EntregaDTO

def build_whatsapp_link(phone: str | None, text: str) -> str:
    """Link que abre o WhatsApp com a mensagem pré-preenchida.

    Sem telefone, o wa.me deixa o usuário escolher o contato.
    """
    digits = only_digits(phone)
    base = f"https://wa.me/{digits}" if digits else "https://wa.me/"
    return f"{base}?text={quote(text, safe='')}"

class WhatsAppCloudAdapter:
    """Adapter para WhatsApp Cloud API."""
    def __init__(self, settings: Settings | None = None):
        self.s = settings or di[Settings]

    def configured(self) -> bool:
        return bool(self.s.whatsapp_token and self.s.whatsapp_phone_number_id and self.s.owner_phone)

    def send(self, msg: MensagemSaidaDTO) -> EntregaDTO:
        """Envia mensagem de texto simples via Graph API."""
        url = f"{self.s.whatsapp_api_base}/{self.s.whatsapp_phone_number_id}/messages"
        payload = {
            "messaging_product": "whatsapp",
            "to": only_digits(msg.wa_id),
            "type": "text",
            "text": {"body": msg.texto},
        }
        headers = {"Authorization": f"Bearer {self.s.whatsapp_token}"}
        try:
            with httpx.Client(timeout=10) as cli:
                r = cli.post(url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            return EntregaDTO(ok=False, error_code="network", error_detail=str(exc))
        if r.status_code // 100 == 2:
            j = r.json()
            provider_id = j.get("messages", [{}])[0].get("id")
            return EntregaDTO(ok=True, provider_message_id=provider_id)
        j = {}
        ctype = r.headers.get("content-type", "")
        if "application/json" in ctype:
            j = r.json()
        err = j.get("error", {})
        return EntregaDTO(ok=False, error_code=str(err.get("code", r.status_code)), error_detail=err.get("message"))
