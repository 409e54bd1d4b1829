"""Text artifacts offered after a successful add: onboarding, lesson notice, referral link."""

from typing import Optional
from urllib.parse import quote

from tutor_admin.core.config import settings
from tutor_admin.core.schemas import AppConfig

REFERRAL_LINK_UNAVAILABLE = "(set WhatsApp number in Config sheet first)"

# Characters encodeURIComponent leaves alone, so links match the ones already shared.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def resolve_app_url(config: AppConfig) -> str:
    return config.app_url or settings.default_app_url


def onboarding_message(student_code: str, config: AppConfig) -> str:
    return (
        f"Your code is {student_code}\n\n"
        f"Go to {resolve_app_url(config)} and enter your code to access your lessons.\n\n"
        "Save this message! 🔥"
    )


def lesson_notification(student_name: str, subject: str, student_code: str, config: AppConfig) -> str:
    return (
        f"Hey {student_name}! Your {subject} lesson is ready 🔥\n\n"
        f"Go to {resolve_app_url(config)} → enter your code: {student_code}\n\n"
        "Enjoy!"
    )


def referral_link(code_name: str, config: AppConfig) -> Optional[str]:
    """Pre-filled chat link carrying the referrer's code. None until a number is configured."""
    if not config.whatsapp_number:
        return None
    return (
        f"wa.me/{config.whatsapp_number}"
        "?text=Hey!%20I%20need%20a%20lesson%20-%20ref%3A"
        f"{quote(code_name, safe=_URI_COMPONENT_SAFE)}"
    )
