from fastapi import Request


def get_client_ip(request: Request, trust_proxy_headers: bool = False) -> str:
    """Extract client IP address from request."""
    # Forwarded headers are only honoured behind a trusted proxy
    if trust_proxy_headers:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

    # Fallback to direct client
    if request.client:
        return request.client.host

    return "unknown"
