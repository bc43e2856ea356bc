"""Pytest fixtures for the acme_dns01 test suite."""

import logging
import os
from collections.abc import Generator
from datetime import timedelta

import pytest

from acme_dns01.providers.base import DnsProvider, TimeoutReporter
from acme_dns01.providers.huaweicloud import HuaweiCloudConfig

# Credentials for the optional HuaweiCloud integration tests
HUAWEICLOUD_ACCESS_KEY_ID = os.environ.get("HUAWEICLOUD_ACCESS_KEY_ID")
HUAWEICLOUD_SECRET_ACCESS_KEY = os.environ.get("HUAWEICLOUD_SECRET_ACCESS_KEY")
HUAWEICLOUD_REGION = os.environ.get("HUAWEICLOUD_REGION", "cn-north-1")
HUAWEICLOUD_TEST_DOMAIN = os.environ.get("HUAWEICLOUD_TEST_DOMAIN")


class RecordingProvider(DnsProvider):
    """DNS provider stub recording the calls it receives."""

    def __init__(self, config: HuaweiCloudConfig | None = None):
        self.config = config
        self.presented: list[tuple[str, str, str]] = []
        self.cleaned: list[tuple[str, str, str]] = []
        self.closed = False

    def present(self, domain: str, token: str, key_authorization: str) -> None:
        self.presented.append((domain, token, key_authorization))

    def cleanup(self, domain: str, token: str, key_authorization: str) -> None:
        self.cleaned.append((domain, token, key_authorization))

    def close(self) -> None:
        self.closed = True


class TimedRecordingProvider(RecordingProvider, TimeoutReporter):
    """Recording provider that also reports its propagation timing."""

    def timeout_reporter(self) -> TimeoutReporter:
        return self

    def timeout(self) -> tuple[timedelta, timedelta]:
        return timedelta(minutes=5), timedelta(seconds=10)


class ProviderFactoryRecorder:
    """Provider factory remembering every configuration it is given."""

    def __init__(self, provider_class: type[RecordingProvider] = RecordingProvider):
        self.provider_class = provider_class
        self.configs: list[HuaweiCloudConfig] = []
        self.providers: list[RecordingProvider] = []

    def __call__(self, config: HuaweiCloudConfig) -> RecordingProvider:
        self.configs.append(config)
        provider = self.provider_class(config)
        self.providers.append(provider)
        return provider


@pytest.fixture
def provider_factory() -> ProviderFactoryRecorder:
    """Factory building RecordingProvider instances."""
    return ProviderFactoryRecorder()


@pytest.fixture
def timed_provider_factory() -> ProviderFactoryRecorder:
    """Factory building providers that report their own timeout."""
    return ProviderFactoryRecorder(TimedRecordingProvider)


@pytest.fixture
def huaweicloud_config() -> HuaweiCloudConfig:
    """Provider configuration with a fixed project id (no IAM lookup)."""
    return HuaweiCloudConfig(
        access_key_id="AK",
        secret_access_key="SK",
        region="cn-north-4",
        project_id="project-123",
        propagation_timeout=timedelta(seconds=5),
        polling_interval=timedelta(0),
    )


@pytest.fixture(scope="session")
def huaweicloud_credentials() -> dict[str, str]:
    """Return HuaweiCloud credentials, skipping when none are configured."""
    if not (HUAWEICLOUD_ACCESS_KEY_ID and HUAWEICLOUD_SECRET_ACCESS_KEY and HUAWEICLOUD_TEST_DOMAIN):
        pytest.skip("HuaweiCloud credentials not configured")
    return {
        "accessKeyId": HUAWEICLOUD_ACCESS_KEY_ID,
        "secretAccessKey": HUAWEICLOUD_SECRET_ACCESS_KEY,
        "region": HUAWEICLOUD_REGION,
    }


@pytest.fixture(scope="session")
def huaweicloud_test_domain(huaweicloud_credentials: dict[str, str]) -> str:
    """Return the domain (hosted in the test account) used for integration tests."""
    return HUAWEICLOUD_TEST_DOMAIN


class LogCapture(logging.Handler):
    """Handler keeping every record emitted by the library."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def get_records(
        self, level: int | None = None, name: str | None = None
    ) -> list[logging.LogRecord]:
        """Records at exactly ``level`` from loggers under ``name``."""
        return [
            r
            for r in self.records
            if (level is None or r.levelno == level) and (name is None or r.name.startswith(name))
        ]

    def get_messages(self, level: int | None = None, name: str | None = None) -> list[str]:
        return [r.getMessage() for r in self.get_records(level, name)]


@pytest.fixture
def log_capture() -> Generator[LogCapture]:
    """Capture DEBUG and above from the acme_dns01 loggers."""
    capture = LogCapture()
    library_logger = logging.getLogger("acme_dns01")
    original_level = library_logger.level
    library_logger.setLevel(logging.DEBUG)
    library_logger.addHandler(capture)

    try:
        yield capture
    finally:
        library_logger.removeHandler(capture)
        library_logger.setLevel(original_level)
