"""Capability interface exposed to ACME engines."""

from abc import ABC, abstractmethod
from datetime import timedelta


class Challenger(ABC):
    """Abstract interface of a DNS-01 challenge solver.

    This is the contract an ACME engine relies on: publish the challenge
    record, remove it again, and report how long to wait for propagation.
    """

    @abstractmethod
    def present(self, domain: str, token: str, key_authorization: str) -> None:
        """Publish the TXT record for a DNS-01 challenge.

        Args:
            domain: The domain being validated.
            token: The challenge token from the ACME server.
            key_authorization: The key authorization for the token.
        """
        ...

    @abstractmethod
    def cleanup(self, domain: str, token: str, key_authorization: str) -> None:
        """Remove the TXT record created by the matching present() call.

        Args:
            domain: The domain being validated.
            token: The challenge token from the ACME server.
            key_authorization: The key authorization for the token.
        """
        ...

    @abstractmethod
    def timeout(self) -> tuple[timedelta, timedelta]:
        """Return the propagation timeout and poll interval.

        Returns:
            ``(timeout, interval)``; a zero pair asks the caller to apply
            its own defaults.
        """
        ...

    def close(self) -> None:
        """Release resources held by the challenger."""

    def __enter__(self) -> "Challenger":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
