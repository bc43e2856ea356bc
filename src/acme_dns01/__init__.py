"""acme_dns01 - pluggable DNS-01 challenge providers for ACME certificate issuance."""

from acme_dns01.challenger import DEFAULT_REGION, Dns01Challenger, new_challenger
from acme_dns01.challenges.base import Challenger
from acme_dns01.models import ChallengerConfig
from acme_dns01.propagation import PropagationWaiter

__all__ = [
    "DEFAULT_REGION",
    "Challenger",
    "ChallengerConfig",
    "Dns01Challenger",
    "PropagationWaiter",
    "new_challenger",
]
__version__ = "0.1.0"
