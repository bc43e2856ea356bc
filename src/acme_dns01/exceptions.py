"""Exceptions raised by challengers and DNS providers."""

from typing import Any

from huaweicloudsdkcore.exceptions.exceptions import ServiceResponseException


class ChallengerError(Exception):
    """Base exception for the acme_dns01 library."""


class InvalidConfigError(ChallengerError):
    """The challenger configuration is missing or malformed."""


class ProviderError(ChallengerError):
    """Base exception for DNS provider (backend) failures."""


class ProviderConfigError(ProviderError):
    """The DNS provider rejected its configuration at construction time.

    Raised for missing credentials or an unsupported region. The factory
    lets it through unmodified so callers can tell it apart from an
    invalid challenger configuration.
    """


class ZoneNotFoundError(ProviderError):
    """No hosted zone matches the challenge domain."""

    def __init__(self, domain: str):
        self.domain = domain
        super().__init__(f"No hosted zone found for domain: {domain}")


class RecordSetError(ProviderError):
    """A TXT record set never became active at the provider."""

    def __init__(self, record_set_id: str, status: str, detail: str):
        self.record_set_id = record_set_id
        self.status = status
        super().__init__(f"Record set {record_set_id} ({status}): {detail}")


class HuaweiCloudError(ProviderError):
    """Error returned by a HuaweiCloud API."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        request_id: str | None = None,
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"{code}: {message} (HTTP {status_code})")

    @classmethod
    def from_sdk_exception(cls, exc: ServiceResponseException) -> "HuaweiCloudError":
        """Create a HuaweiCloudError from an SDK response exception.

        Routes to the appropriate subclass based on the status code.

        Args:
            exc: The ClientRequestException or ServerResponseException
                raised by the SDK client.

        Returns:
            HuaweiCloudError instance (or appropriate subclass).
        """
        kwargs: dict[str, Any] = {
            "status_code": exc.status_code,
            "code": exc.error_code or "unknown",
            "message": exc.error_msg or "Unknown error",
            "request_id": exc.request_id,
        }

        status = exc.status_code
        if status in (401, 403):
            return AuthenticationError(**kwargs)
        elif status == 404:
            return RecordNotFoundError(**kwargs)
        elif status == 429:
            return RateLimitError(**kwargs)
        elif status >= 500:
            return ServerError(**kwargs)

        return cls(**kwargs)


class AuthenticationError(HuaweiCloudError):
    """Credentials were rejected (HTTP 401/403)."""

    pass


class RecordNotFoundError(HuaweiCloudError):
    """The requested zone or record set does not exist (HTTP 404)."""

    @classmethod
    def for_record(cls, fqdn: str) -> "RecordNotFoundError":
        """Build the error raised when a challenge record cannot be located."""
        return cls(status_code=404, code="record_not_found", message=f"No TXT record for {fqdn}")


class RateLimitError(HuaweiCloudError):
    """API rate limit exceeded (HTTP 429)."""

    pass


class ServerError(HuaweiCloudError):
    """HuaweiCloud internal error (HTTP 5xx)."""

    pass
