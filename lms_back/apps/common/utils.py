def get_client_ip(request):
    """Client address; the left-most X-Forwarded-For hop when proxied"""
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR")
