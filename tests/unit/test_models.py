"""Unit tests for models and exceptions."""

from types import SimpleNamespace

import pytest
from huaweicloudsdkcore.exceptions.exceptions import (
    ClientRequestException,
    SdkError,
    ServerResponseException,
)
from pydantic import ValidationError

from acme_dns01.exceptions import (
    AuthenticationError,
    ChallengerError,
    HuaweiCloudError,
    InvalidConfigError,
    ProviderConfigError,
    ProviderError,
    RateLimitError,
    RecordNotFoundError,
    ServerError,
)
from acme_dns01.models import ChallengerConfig, RecordSet, RecordSetStatus, Zone


class TestChallengerConfig:
    """Tests for ChallengerConfig model."""

    def test_config_from_json(self):
        """Parse config from its JSON shape."""
        config = ChallengerConfig.model_validate_json(
            '{"accessKeyId": "AK", "secretAccessKey": "SK", "region": "cn-north-4",'
            ' "dnsPropagationTimeout": 120, "dnsTTL": 600}'
        )

        assert config.access_key_id == "AK"
        assert config.secret_access_key == "SK"
        assert config.region == "cn-north-4"
        assert config.dns_propagation_timeout == 120
        assert config.dns_ttl == 600

    def test_optional_fields_default_to_zero(self):
        """Region, timeout and TTL are optional."""
        config = ChallengerConfig.model_validate({"accessKeyId": "AK", "secretAccessKey": "SK"})

        assert config.region == ""
        assert config.dns_propagation_timeout == 0
        assert config.dns_ttl == 0

    def test_config_by_field_name(self):
        """Snake_case field names are accepted too."""
        config = ChallengerConfig(access_key_id="AK", secret_access_key="SK", dns_ttl=60)

        assert config.dns_ttl == 60

    def test_config_is_frozen(self):
        """The configuration cannot be changed after construction."""
        config = ChallengerConfig(access_key_id="AK", secret_access_key="SK")

        with pytest.raises(ValidationError):
            config.region = "cn-north-4"

    def test_missing_credentials_default_to_empty(self):
        config = ChallengerConfig.model_validate({"region": "cn-north-4"})

        assert config.access_key_id == ""
        assert config.secret_access_key == ""

    def test_negative_timeout_rejected(self):
        with pytest.raises(ValidationError):
            ChallengerConfig(access_key_id="AK", secret_access_key="SK", dns_propagation_timeout=-5)

    def test_secret_hidden_from_repr(self):
        config = ChallengerConfig(access_key_id="AK", secret_access_key="top-secret")

        assert "top-secret" not in repr(config)

    def test_dump_by_alias(self):
        """Dumping by alias restores the JSON shape."""
        config = ChallengerConfig(access_key_id="AK", secret_access_key="SK")

        assert config.model_dump(by_alias=True) == {
            "accessKeyId": "AK",
            "secretAccessKey": "SK",
            "region": "",
            "dnsPropagationTimeout": 0,
            "dnsTTL": 0,
        }


class TestDnsResourceModels:
    """Tests for HuaweiCloud resource models."""

    def test_zone_from_json(self):
        zone = Zone.model_validate(
            {"id": "z1", "name": "example.com.", "zone_type": "public", "ttl": 300}
        )

        assert zone.id == "z1"
        assert zone.name == "example.com."

    def test_record_set_from_json(self):
        record_set = RecordSet.model_validate(
            {
                "id": "rs1",
                "name": "_acme-challenge.example.com.",
                "type": "TXT",
                "ttl": 300,
                "records": ['"value"'],
                "status": "PENDING_CREATE",
                "zone_id": "z1",
                "default": False,
            }
        )

        assert record_set.records == ['"value"']
        assert record_set.status == RecordSetStatus.PENDING_CREATE

    def test_record_set_defaults(self):
        record_set = RecordSet.model_validate({"id": "rs1", "name": "a.", "type": "TXT"})

        assert record_set.records == []
        assert record_set.status is None

    def test_record_set_from_sdk_object(self):
        """SDK response objects are read by attribute; unset lists are None."""
        response = SimpleNamespace(
            id="rs1",
            name="_acme-challenge.example.com.",
            type="TXT",
            ttl=None,
            records=None,
            status="ACTIVE",
            zone_id="z1",
            links=None,
        )

        record_set = RecordSet.model_validate(response, from_attributes=True)

        assert record_set.records == []
        assert record_set.ttl is None
        assert record_set.status == RecordSetStatus.ACTIVE


class TestExceptionHierarchy:
    """Tests for exception classes."""

    def test_hierarchy(self):
        assert issubclass(InvalidConfigError, ChallengerError)
        assert issubclass(ProviderConfigError, ProviderError)
        assert issubclass(HuaweiCloudError, ProviderError)
        assert issubclass(RecordNotFoundError, HuaweiCloudError)

    def test_error_message(self):
        error = HuaweiCloudError(status_code=400, code="DNS.0303", message="bad ttl")

        assert str(error) == "DNS.0303: bad ttl (HTTP 400)"

    @pytest.mark.parametrize(
        ("status_code", "error_class"),
        [
            (401, AuthenticationError),
            (403, AuthenticationError),
            (404, RecordNotFoundError),
            (429, RateLimitError),
            (500, ServerError),
            (503, ServerError),
            (400, HuaweiCloudError),
        ],
    )
    def test_from_sdk_exception_routes_by_status(self, status_code, error_class):
        sdk_error = SdkError(request_id="req-1", error_code="DNS.0001", error_msg="failed")
        exc = ClientRequestException(status_code, sdk_error)

        error = HuaweiCloudError.from_sdk_exception(exc)

        assert type(error) is error_class
        assert error.status_code == status_code
        assert error.code == "DNS.0001"
        assert error.message == "failed"

    def test_from_sdk_exception_keeps_request_id(self):
        sdk_error = SdkError(
            request_id="abc",
            error_code="APIGW.0308",
            error_msg="The throttling threshold has been reached",
        )
        exc = ClientRequestException(429, sdk_error)

        error = HuaweiCloudError.from_sdk_exception(exc)

        assert isinstance(error, RateLimitError)
        assert error.code == "APIGW.0308"
        assert error.request_id == "abc"

    def test_from_sdk_exception_without_error_body(self):
        """Missing code and message get placeholders."""
        exc = ServerResponseException(502, SdkError())

        error = HuaweiCloudError.from_sdk_exception(exc)

        assert isinstance(error, ServerError)
        assert error.code == "unknown"
        assert error.message == "Unknown error"

    def test_record_not_found_for_record(self):
        error = RecordNotFoundError.for_record("_acme-challenge.example.com.")

        assert error.status_code == 404
        assert "_acme-challenge.example.com." in str(error)
