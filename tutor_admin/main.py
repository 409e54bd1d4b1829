import logging
from typing import Optional

import httpx

from tutor_admin.api.client import ApiClient
from tutor_admin.auth.session_store import SessionStore
from tutor_admin.console import AdminConsole
from tutor_admin.core.config import Settings, settings as default_settings


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or default_settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_console(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> AdminConsole:
    settings = settings or default_settings
    configure_logging(settings.log_level)
    api = ApiClient(settings.api_url, client=http_client)
    session = SessionStore(settings.session_file)
    return AdminConsole(api, session)
