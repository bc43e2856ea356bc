"""DNS providers for ACME challenge validation."""

from acme_dns01.providers.base import DnsProvider, TimeoutReporter
from acme_dns01.providers.huaweicloud import (
    HuaweiCloudConfig,
    HuaweiCloudDnsProvider,
    new_default_config,
    new_provider,
    new_provider_from_config,
)

__all__ = [
    "DnsProvider",
    "HuaweiCloudConfig",
    "HuaweiCloudDnsProvider",
    "TimeoutReporter",
    "new_default_config",
    "new_provider",
    "new_provider_from_config",
]
