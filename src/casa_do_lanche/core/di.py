"""Bootstrap do container de DI (kink)."""
from kink import di
from .settings import Settings
from .logging import get_logger
from .db import create_session_factory
from .messages import MessageBuilder
from ..connectors.whatsapp.cloud_api_adapter import WhatsAppCloudAdapter

def bootstrap_di(settings: Settings | None = None) -> None:
    settings = settings or Settings()
    di[Settings] = settings
    di["logger"] = get_logger()
    # kink chama valores "callable" como fábrica; o sessionmaker vai embrulhado
    session_factory = create_session_factory(settings.database_url)
    di["session_factory"] = lambda _di: session_factory
    di[MessageBuilder] = MessageBuilder(loja_nome=settings.store_name, dono=settings.owner_name)
    di["whatsapp"] = WhatsAppCloudAdapter(settings)
