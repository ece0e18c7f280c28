"""Named presets replacing the near-identical variants of the installer."""

from typing import Dict

from .errors import ManagerError
from .errors_catalog import actionable_error
from .models import Preset

EXAMPLE_DOMAIN = "chat.example.com"

PRESETS: Dict[str, Preset] = {
    "strict": Preset(
        name="strict",
        title="Chatwoot Management Menu",
        default_domain=None,
        domain_required=True,
        confirm_tokens=frozenset({"y", "Y"}),
        confirm_case_sensitive=True,
    ),
    "quick": Preset(
        name="quick",
        title="Chatwoot Quick Manager",
        default_domain=EXAMPLE_DOMAIN,
        domain_required=False,
        confirm_tokens=frozenset({"yes"}),
        confirm_case_sensitive=True,
        confirm_hint="(type 'yes' to confirm)",
    ),
    "full": Preset(
        name="full",
        title="Chatwoot Manager",
        default_domain=EXAMPLE_DOMAIN,
        domain_required=False,
        confirm_tokens=frozenset({"y", "yes"}),
        confirm_case_sensitive=False,
        include_mail_settings=True,
    ),
}


def get_preset(name: str) -> Preset:
    try:
        return PRESETS[name]
    except KeyError:
        raise ManagerError(
            actionable_error("unknown_preset", name=name, choices=", ".join(sorted(PRESETS)))
        ) from None
