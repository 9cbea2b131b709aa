"""
Attaches a SessionStore to every request
"""
from apps.accounts.session import SessionStore


class SessionStoreMiddleware:
    """Must run after AuthenticationMiddleware"""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.session_store = SessionStore(request)
        return self.get_response(request)
