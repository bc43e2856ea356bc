"""ACME challenge interface and DNS-01 helpers."""

from acme_dns01.challenges.base import Challenger
from acme_dns01.challenges.dns01 import (
    challenge_fqdn,
    compute_dns_txt_value,
    get_challenge_info,
    normalize_domain,
)

__all__ = [
    "Challenger",
    "challenge_fqdn",
    "compute_dns_txt_value",
    "get_challenge_info",
    "normalize_domain",
]
