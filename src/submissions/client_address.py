from collections.abc import Mapping

LOOPBACK_ADDRESS = "127.0.0.1"


def get_client_address(headers: Mapping[str, str]) -> str:
    """Resolve the caller's address from proxy headers.

    ``x-forwarded-for`` may carry a chain of proxies; the first entry is the
    original client.
    """
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    return LOOPBACK_ADDRESS
