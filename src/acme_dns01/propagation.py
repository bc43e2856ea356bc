"""Wait for challenge TXT records to become visible in DNS."""

import time
from datetime import timedelta

import dns.exception
import dns.rdatatype
import dns.resolver

from acme_dns01._logging import get_logger
from acme_dns01.challenges.base import Challenger
from acme_dns01.challenges.dns01 import get_challenge_info

logger = get_logger(__name__)

DEFAULT_PROPAGATION_TIMEOUT = timedelta(seconds=60)
DEFAULT_POLLING_INTERVAL = timedelta(seconds=2)


class PropagationWaiter:
    """Poll DNS until a challenge record carries its expected value.

    The waiter honours the challenger's timeout() values and falls back to
    its own defaults when the challenger reports a zero pair.

    Args:
        resolver: Resolver used for lookups; the system resolver by default.
        default_timeout: Timeout used when the challenger reports none.
        default_interval: Poll interval used when the challenger reports none.
    """

    def __init__(
        self,
        resolver: dns.resolver.Resolver | None = None,
        default_timeout: timedelta = DEFAULT_PROPAGATION_TIMEOUT,
        default_interval: timedelta = DEFAULT_POLLING_INTERVAL,
    ):
        self.resolver = resolver or dns.resolver.Resolver()
        self.default_timeout = default_timeout
        self.default_interval = default_interval

    def resolve_timeouts(self, challenger: Challenger) -> tuple[timedelta, timedelta]:
        """Return the (timeout, interval) to use for a challenger."""
        timeout, interval = challenger.timeout()
        return timeout or self.default_timeout, interval or self.default_interval

    def lookup_txt(self, fqdn: str) -> list[str]:
        """Return the TXT strings published at a name.

        Missing names and empty answers yield an empty list.
        """
        try:
            answer = self.resolver.resolve(fqdn, dns.rdatatype.TXT)
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer, dns.resolver.NoNameservers):
            return []
        return [b"".join(rdata.strings).decode(errors="replace") for rdata in answer]

    def wait(self, challenger: Challenger, domain: str, key_authorization: str) -> bool:
        """Wait until the challenge record for a domain is resolvable.

        Args:
            challenger: The challenger that presented the record.
            domain: The domain being validated.
            key_authorization: The key authorization passed to present().

        Returns:
            True if the record propagated, False if the timeout elapsed.
        """
        info = get_challenge_info(domain, key_authorization)
        timeout, interval = self.resolve_timeouts(challenger)
        deadline = time.monotonic() + timeout.total_seconds()

        while True:
            try:
                if info.value in self.lookup_txt(info.fqdn):
                    logger.info("TXT record propagated", extra={"record_name": info.fqdn})
                    return True
            except dns.exception.Timeout:
                logger.debug("DNS lookup timed out", extra={"record_name": info.fqdn})

            if time.monotonic() >= deadline:
                logger.warning(
                    "TXT record did not propagate in time",
                    extra={"record_name": info.fqdn, "timeout_s": timeout.total_seconds()},
                )
                return False
            time.sleep(interval.total_seconds())
