"""DNS-01 challenger factory and provider wrapper."""

from collections.abc import Callable, Mapping
from datetime import timedelta
from typing import Any

from pydantic import ValidationError

from acme_dns01._logging import Timer, domain_context, get_logger
from acme_dns01.challenges.base import Challenger
from acme_dns01.challenges.dns01 import normalize_domain
from acme_dns01.exceptions import InvalidConfigError
from acme_dns01.models import ChallengerConfig
from acme_dns01.providers.base import DnsProvider
from acme_dns01.providers.huaweicloud import (
    HuaweiCloudConfig,
    new_default_config,
    new_provider_from_config,
)

logger = get_logger(__name__)

# The HuaweiCloud API client refuses to build without a region even though
# DNS zones are global and DNS-01 never needs one.
DEFAULT_REGION = "cn-north-1"

ProviderFactory = Callable[[HuaweiCloudConfig], DnsProvider]


class Dns01Challenger(Challenger):
    """Challenger delegating to a DNS provider with normalized domains.

    Domains lose their trailing dot before reaching the provider so that
    zone and record lookups match. Token and key authorization are passed
    through untouched, and provider errors propagate unmodified.

    Args:
        provider: The DNS provider creating and deleting records.
    """

    def __init__(self, provider: DnsProvider):
        self._provider = provider
        self._timeout_reporter = provider.timeout_reporter()

    @property
    def provider(self) -> DnsProvider:
        """The wrapped DNS provider."""
        return self._provider

    def _call(
        self,
        name: str,
        operation: Callable[[str, str, str], None],
        domain: str,
        token: str,
        key_authorization: str,
    ) -> None:
        normalized = normalize_domain(domain)
        with domain_context(normalized), Timer() as timer:
            operation(normalized, token, key_authorization)

        logger.debug(
            "Provider call completed",
            extra={
                "operation": name,
                "domain": normalized,
                "duration_ms": timer.elapsed_ms,
            },
        )

    def present(self, domain: str, token: str, key_authorization: str) -> None:
        self._call("present", self._provider.present, domain, token, key_authorization)

    def cleanup(self, domain: str, token: str, key_authorization: str) -> None:
        self._call("cleanup", self._provider.cleanup, domain, token, key_authorization)

    def timeout(self) -> tuple[timedelta, timedelta]:
        if self._timeout_reporter is None:
            return timedelta(0), timedelta(0)
        return self._timeout_reporter.timeout()

    def close(self) -> None:
        self._provider.close()


def _to_provider_config(config: ChallengerConfig) -> HuaweiCloudConfig:
    """Translate a challenger configuration into the provider's configuration.

    Zero timeout/TTL values keep the provider defaults.
    """
    provider_config = new_default_config()
    provider_config.access_key_id = config.access_key_id
    provider_config.secret_access_key = config.secret_access_key
    provider_config.region = config.region or DEFAULT_REGION
    if config.dns_propagation_timeout != 0:
        provider_config.propagation_timeout = timedelta(seconds=config.dns_propagation_timeout)
    if config.dns_ttl != 0:
        provider_config.ttl = config.dns_ttl
    return provider_config


def new_challenger(
    config: ChallengerConfig | Mapping[str, Any] | None,
    provider_factory: ProviderFactory = new_provider_from_config,
) -> Dns01Challenger:
    """Create a DNS-01 challenger.

    Args:
        config: Challenger configuration, or a mapping in its JSON shape.
        provider_factory: Builds the DNS provider from its configuration.

    Returns:
        A challenger wrapping the constructed provider.

    Raises:
        InvalidConfigError: If the configuration is missing or invalid.
        ProviderConfigError: If the provider rejects its configuration
            (raised by the provider, unmodified).
    """
    if config is None:
        raise InvalidConfigError("the configuration of the acme challenge provider is None")

    try:
        config = ChallengerConfig.model_validate(config)
    except ValidationError as err:
        raise InvalidConfigError(f"invalid acme challenge provider configuration: {err}") from err

    provider = provider_factory(_to_provider_config(config))
    logger.debug(
        "Challenger created",
        extra={"provider": type(provider).__name__, "region": config.region or DEFAULT_REGION},
    )
    return Dns01Challenger(provider)
