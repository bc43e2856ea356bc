"""HuaweiCloud DNS provider for ACME DNS-01 challenges."""

import os
import threading
import time
from datetime import timedelta
from typing import Any

from huaweicloudsdkcore.auth.credentials import BasicCredentials
from huaweicloudsdkcore.exceptions import exceptions as sdk_exceptions
from huaweicloudsdkcore.http.http_config import HttpConfig
from huaweicloudsdkdns.v2 import (
    CreateRecordSetRequest,
    CreateRecordSetRequestBody,
    DeleteRecordSetRequest,
    DnsClient,
    ListPublicZonesRequest,
    ListRecordSetsByZoneRequest,
    ShowRecordSetRequest,
    UpdateRecordSetReq,
    UpdateRecordSetRequest,
)
from huaweicloudsdkdns.v2.region.dns_region import DnsRegion
from pydantic import BaseModel, Field

from acme_dns01._logging import Timer, get_domain_extra, get_logger
from acme_dns01.challenges.dns01 import get_challenge_info, normalize_domain
from acme_dns01.exceptions import (
    HuaweiCloudError,
    ProviderConfigError,
    RecordNotFoundError,
    RecordSetError,
    ZoneNotFoundError,
)
from acme_dns01.models import ChallengeInfo, RecordSet, RecordSetStatus, RecordType, Zone
from acme_dns01.providers.base import DnsProvider, TimeoutReporter

logger = get_logger(__name__)

ENV_ACCESS_KEY_ID = "HUAWEICLOUD_ACCESS_KEY_ID"
ENV_SECRET_ACCESS_KEY = "HUAWEICLOUD_SECRET_ACCESS_KEY"
ENV_REGION = "HUAWEICLOUD_REGION"
ENV_TTL = "HUAWEICLOUD_TTL"
ENV_PROPAGATION_TIMEOUT = "HUAWEICLOUD_PROPAGATION_TIMEOUT"
ENV_POLLING_INTERVAL = "HUAWEICLOUD_POLLING_INTERVAL"
ENV_HTTP_TIMEOUT = "HUAWEICLOUD_HTTP_TIMEOUT"

DEFAULT_TTL = 300
DEFAULT_PROPAGATION_TIMEOUT = timedelta(seconds=60)
DEFAULT_POLLING_INTERVAL = timedelta(seconds=2)
DEFAULT_HTTP_TIMEOUT = timedelta(seconds=30)


class HuaweiCloudConfig(BaseModel):
    """Configuration of the HuaweiCloud DNS provider."""

    access_key_id: str = ""
    secret_access_key: str = Field(default="", repr=False)
    region: str = ""
    project_id: str | None = None
    ttl: int = DEFAULT_TTL
    propagation_timeout: timedelta = DEFAULT_PROPAGATION_TIMEOUT
    polling_interval: timedelta = DEFAULT_POLLING_INTERVAL
    http_timeout: timedelta = DEFAULT_HTTP_TIMEOUT


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ[name])
    except (KeyError, ValueError):
        return default


def _env_seconds(name: str, default: timedelta) -> timedelta:
    return timedelta(seconds=_env_int(name, int(default.total_seconds())))


def new_default_config() -> HuaweiCloudConfig:
    """Create a provider configuration holding the default settings.

    TTL and timings can be overridden with the HUAWEICLOUD_TTL,
    HUAWEICLOUD_PROPAGATION_TIMEOUT, HUAWEICLOUD_POLLING_INTERVAL and
    HUAWEICLOUD_HTTP_TIMEOUT environment variables (seconds). Values that
    are not integers are ignored.
    """
    return HuaweiCloudConfig(
        ttl=_env_int(ENV_TTL, DEFAULT_TTL),
        propagation_timeout=_env_seconds(ENV_PROPAGATION_TIMEOUT, DEFAULT_PROPAGATION_TIMEOUT),
        polling_interval=_env_seconds(ENV_POLLING_INTERVAL, DEFAULT_POLLING_INTERVAL),
        http_timeout=_env_seconds(ENV_HTTP_TIMEOUT, DEFAULT_HTTP_TIMEOUT),
    )


def new_provider_from_config(config: HuaweiCloudConfig | None) -> "HuaweiCloudDnsProvider":
    """Create a HuaweiCloud DNS provider from a configuration.

    Raises:
        ProviderConfigError: If the configuration is missing, lacks
            credentials or names an unsupported region.
    """
    return HuaweiCloudDnsProvider(config)


def new_provider() -> "HuaweiCloudDnsProvider":
    """Create a HuaweiCloud DNS provider from environment variables.

    Credentials come from HUAWEICLOUD_ACCESS_KEY_ID,
    HUAWEICLOUD_SECRET_ACCESS_KEY and HUAWEICLOUD_REGION.
    """
    required = (ENV_ACCESS_KEY_ID, ENV_SECRET_ACCESS_KEY, ENV_REGION)
    missing = [name for name in required if not os.environ.get(name)]
    if missing:
        raise ProviderConfigError(
            f"huaweicloud: some credentials information are missing: {','.join(missing)}"
        )

    config = new_default_config()
    config.access_key_id = os.environ[ENV_ACCESS_KEY_ID]
    config.secret_access_key = os.environ[ENV_SECRET_ACCESS_KEY]
    config.region = os.environ[ENV_REGION]
    return new_provider_from_config(config)


class HuaweiCloudDnsProvider(DnsProvider, TimeoutReporter):
    """DNS provider for HuaweiCloud DNS public zones.

    This provider manages TXT records for ACME DNS-01 challenges through
    the HuaweiCloud DNS v2 SDK. The SDK client is built on the first API
    call: without a configured project id the SDK looks it up in IAM at
    build time, so construction itself performs no network calls.

    Args:
        config: Provider configuration.
    """

    def __init__(self, config: HuaweiCloudConfig | None):
        if config is None:
            raise ProviderConfigError("huaweicloud: the configuration of the DNS provider is None")
        if not config.access_key_id or not config.secret_access_key or not config.region:
            raise ProviderConfigError("huaweicloud: credentials missing")
        try:
            self.region = DnsRegion.value_of(config.region)
        except KeyError as err:
            raise ProviderConfigError(f"huaweicloud: unsupported region '{config.region}'") from err

        self.config = config
        self._client: DnsClient | None = None
        self._client_lock = threading.Lock()
        # token -> (zone id, record set id)
        self._record_ids: dict[str, tuple[str, str]] = {}
        # record name -> lock serializing changes to its record set
        self._record_locks: dict[str, threading.Lock] = {}
        self._record_ids_lock = threading.Lock()

    def timeout_reporter(self) -> TimeoutReporter:
        return self

    def timeout(self) -> tuple[timedelta, timedelta]:
        return self.config.propagation_timeout, self.config.polling_interval

    def close(self) -> None:
        """Drop the SDK client; the next API call builds a new one."""
        with self._client_lock:
            self._client = None

    def _build_client(self) -> DnsClient:
        http_config = HttpConfig.get_default_config()
        http_config.timeout = self.config.http_timeout.total_seconds()
        credentials = BasicCredentials(
            self.config.access_key_id,
            self.config.secret_access_key,
            self.config.project_id,
        )
        return (
            DnsClient.new_builder()
            .with_http_config(http_config)
            .with_credentials(credentials)
            .with_region(self.region)
            .build()
        )

    def _dns_client(self) -> DnsClient:
        with self._client_lock:
            if self._client is None:
                self._client = self._build_client()
                logger.debug("DNS client created", extra={"region": self.region.id})
            return self._client

    def _invoke(self, operation: str, request: Any) -> Any:
        """Call a DnsClient operation, mapping API errors to HuaweiCloudError."""
        try:
            return getattr(self._dns_client(), operation)(request)
        except sdk_exceptions.ServiceResponseException as err:
            error = HuaweiCloudError.from_sdk_exception(err)
            logger.error(
                "HuaweiCloud API error",
                extra={
                    "operation": operation,
                    "status_code": error.status_code,
                    "error_code": error.code,
                    "request_id": error.request_id,
                },
            )
            raise error from err

    def _record_lock(self, fqdn: str) -> threading.Lock:
        with self._record_ids_lock:
            return self._record_locks.setdefault(fqdn.lower(), threading.Lock())

    def _find_zone(self, domain: str) -> Zone:
        """Find the public zone containing the given domain.

        Walks the domain from most to least specific label and asks the
        API for each candidate, keeping only exact name matches since the
        ``name`` filter is a fuzzy match.

        Raises:
            ZoneNotFoundError: If no candidate is a hosted zone.
        """
        parts = normalize_domain(domain).removeprefix("*.").lower().split(".")
        for i in range(len(parts)):
            candidate = ".".join(parts[i:]) + "."

            logger.debug(
                "Trying zone candidate",
                extra={"domain": domain, "candidate": candidate},
            )

            response = self._invoke(
                "list_public_zones",
                ListPublicZonesRequest(name=candidate.rstrip(".")),
            )
            for item in response.zones or []:
                zone = Zone.model_validate(item, from_attributes=True)
                if zone.name.lower() == candidate:
                    logger.debug("Zone found", extra={"domain": domain, "zone": zone.name})
                    return zone

        raise ZoneNotFoundError(domain)

    def _find_record_set(self, zone_id: str, fqdn: str) -> RecordSet | None:
        response = self._invoke(
            "list_record_sets_by_zone",
            ListRecordSetsByZoneRequest(zone_id=zone_id, type=RecordType.TXT.value, name=fqdn),
        )
        for item in response.recordsets or []:
            record_set = RecordSet.model_validate(item, from_attributes=True)
            if record_set.name.lower() == fqdn.lower() and record_set.type == RecordType.TXT:
                return record_set
        return None

    def _show_record_set(self, zone_id: str, record_set_id: str) -> RecordSet:
        response = self._invoke(
            "show_record_set",
            ShowRecordSetRequest(zone_id=zone_id, recordset_id=record_set_id),
        )
        return RecordSet.model_validate(response, from_attributes=True)

    def _update_record_set(self, zone_id: str, record_set: RecordSet, records: list[str]) -> RecordSet:
        response = self._invoke(
            "update_record_set",
            UpdateRecordSetRequest(
                zone_id=zone_id,
                recordset_id=record_set.id,
                body=UpdateRecordSetReq(
                    name=record_set.name,
                    type=RecordType.TXT.value,
                    ttl=record_set.ttl or self.config.ttl,
                    records=records,
                ),
            ),
        )
        return RecordSet.model_validate(response, from_attributes=True)

    def _upsert_record_set(self, zone_id: str, info: ChallengeInfo) -> RecordSet:
        """Add the challenge value to the TXT record set, creating it if needed.

        A wildcard and its base domain share one record name, so an existing
        record set keeps its other values. Callers hold the record lock.
        """
        value = f'"{info.value}"'
        existing = self._find_record_set(zone_id, info.fqdn)

        if existing is None:
            response = self._invoke(
                "create_record_set",
                CreateRecordSetRequest(
                    zone_id=zone_id,
                    body=CreateRecordSetRequestBody(
                        name=info.fqdn,
                        type=RecordType.TXT.value,
                        ttl=self.config.ttl,
                        records=[value],
                        description="ACME DNS-01 challenge",
                    ),
                ),
            )
            return RecordSet.model_validate(response, from_attributes=True)

        if value in existing.records:
            return existing
        return self._update_record_set(zone_id, existing, [*existing.records, value])

    def _wait_for_active(self, zone_id: str, record_set_id: str) -> None:
        """Poll a record set until the provider reports it ACTIVE.

        Raises:
            RecordSetError: On status ERROR, or if the record set is not
                active within the propagation timeout.
        """
        deadline = time.monotonic() + self.config.propagation_timeout.total_seconds()

        while True:
            record_set = self._show_record_set(zone_id, record_set_id)
            status = record_set.status or "unknown"

            if status == RecordSetStatus.ACTIVE:
                return
            if status == RecordSetStatus.ERROR:
                raise RecordSetError(record_set_id, status, "provider reported an error")
            if time.monotonic() >= deadline:
                raise RecordSetError(record_set_id, status, "timed out waiting for ACTIVE status")

            logger.debug(
                "Waiting for record set",
                extra={"record_set_id": record_set_id, "status": status},
            )
            time.sleep(self.config.polling_interval.total_seconds())

    def present(self, domain: str, token: str, key_authorization: str) -> None:
        """Create (or extend) the challenge TXT record set.

        Raises:
            ZoneNotFoundError: If no hosted zone contains the domain.
            HuaweiCloudError: For API errors.
            RecordSetError: If the record set does not become active.
        """
        info = get_challenge_info(domain, key_authorization)

        with Timer() as timer:
            zone = self._find_zone(domain)
            with self._record_lock(info.fqdn):
                record_set = self._upsert_record_set(zone.id, info)
            self._wait_for_active(zone.id, record_set.id)

        with self._record_ids_lock:
            self._record_ids[token] = (zone.id, record_set.id)

        logger.info(
            "TXT record created",
            extra={
                **get_domain_extra(),
                "record_name": info.fqdn,
                "zone": zone.name,
                "duration_ms": timer.elapsed_ms,
            },
        )

    def cleanup(self, domain: str, token: str, key_authorization: str) -> None:
        """Remove the challenge value from its TXT record set.

        The record set is deleted when no other value remains.

        Raises:
            RecordNotFoundError: If the record set or the value is gone.
            HuaweiCloudError: For other API errors.
        """
        info = get_challenge_info(domain, key_authorization)
        value = f'"{info.value}"'

        with self._record_ids_lock:
            ids = self._record_ids.get(token)

        if ids is None:
            zone_id = self._find_zone(domain).id
            record_set_id = None
        else:
            zone_id, record_set_id = ids

        with self._record_lock(info.fqdn):
            if record_set_id is None:
                record_set = self._find_record_set(zone_id, info.fqdn)
                if record_set is None:
                    raise RecordNotFoundError.for_record(info.fqdn)
            else:
                record_set = self._show_record_set(zone_id, record_set_id)

            if value not in record_set.records:
                raise RecordNotFoundError.for_record(info.fqdn)

            remaining = [record for record in record_set.records if record != value]
            if remaining:
                self._update_record_set(zone_id, record_set, remaining)
            else:
                self._invoke(
                    "delete_record_set",
                    DeleteRecordSetRequest(zone_id=zone_id, recordset_id=record_set.id),
                )

        with self._record_ids_lock:
            self._record_ids.pop(token, None)

        logger.info(
            "TXT record deleted",
            extra={**get_domain_extra(), "record_name": info.fqdn, "remaining": len(remaining)},
        )
