"""Abstract base classes for DNS providers."""

from abc import ABC, abstractmethod
from datetime import timedelta


class TimeoutReporter(ABC):
    """Extended capability of providers that know their propagation timing.

    Propagation speed depends on the DNS service (and sometimes the region),
    so providers that can tell it report it here.
    """

    @abstractmethod
    def timeout(self) -> tuple[timedelta, timedelta]:
        """Return the recommended propagation timeout and poll interval."""
        ...


class DnsProvider(ABC):
    """Abstract interface for DNS providers.

    DNS providers are responsible for creating and deleting TXT records
    used for ACME DNS-01 challenge validation. The domain they receive is
    already normalized; token and key authorization are passed through
    exactly as the ACME engine supplied them.
    """

    @abstractmethod
    def present(self, domain: str, token: str, key_authorization: str) -> None:
        """Create the TXT record at _acme-challenge.{domain}.

        The record value is derived from the key authorization.

        Args:
            domain: The domain name (without _acme-challenge prefix).
            token: The challenge token.
            key_authorization: The key authorization for the token.

        Raises:
            ProviderError: If record creation fails.
        """
        ...

    @abstractmethod
    def cleanup(self, domain: str, token: str, key_authorization: str) -> None:
        """Delete the TXT record created by present().

        Args:
            domain: The domain name (without _acme-challenge prefix).
            token: The challenge token.
            key_authorization: The key authorization for the token.

        Raises:
            ProviderError: If record deletion fails, including when the
                record does not exist.
        """
        ...

    def timeout_reporter(self) -> TimeoutReporter | None:
        """Return this provider's timeout capability, if it has one.

        Providers that implement TimeoutReporter override this to return
        themselves.
        """
        return None

    def close(self) -> None:
        """Release resources. Override in providers that hold open connections."""
