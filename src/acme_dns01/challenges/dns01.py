"""DNS-01 challenge helpers."""

import base64
import hashlib

from acme_dns01.models import ChallengeInfo

CHALLENGE_LABEL = "_acme-challenge"


def compute_dns_txt_value(key_authorization: str) -> str:
    """Return base64url(sha256(key_authorization)) without padding."""
    digest = hashlib.sha256(key_authorization.encode()).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode()


def normalize_domain(domain: str) -> str:
    """Remove a single trailing dot from a domain name.

    Providers match zones and record names on the dotless form, while ACME
    engines may hand over fully qualified names ("example.com.").

    Args:
        domain: Raw domain as received from the ACME engine.

    Returns:
        The domain without its trailing dot.
    """
    return domain.removesuffix(".")


def challenge_fqdn(domain: str) -> str:
    """Return the fully qualified TXT record name for a domain.

    Wildcard domains share the record of their base domain.

    Args:
        domain: The domain being validated (with or without trailing dot).

    Returns:
        ``_acme-challenge.<domain>.``
    """
    base = normalize_domain(domain).removeprefix("*.")
    return f"{CHALLENGE_LABEL}.{base}."


def get_challenge_info(domain: str, key_authorization: str) -> ChallengeInfo:
    """Compute the record name and value expected by the CA."""
    return ChallengeInfo(
        fqdn=challenge_fqdn(domain),
        value=compute_dns_txt_value(key_authorization),
    )
