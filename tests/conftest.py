import pytest
from django.contrib.auth import get_user_model
from django.contrib.sessions.backends.db import SessionStore as DjangoSession
from django.test import RequestFactory

from apps.accounts.models import Subscription
from apps.accounts.session import SessionStore

PASSWORD = "segredo123"


@pytest.fixture
def make_user(db):
    """Create a user with a subscription on the given plan"""
    def _make_user(email="ana@example.com", name="Ana", plan="free", password=PASSWORD):
        user = get_user_model().objects.create_user(
            username=email, email=email, password=password, first_name=name
        )
        Subscription.objects.create(user=user, plan=plan)
        return user
    return _make_user


@pytest.fixture
def make_store(db):
    """Build a SessionStore around a bare request for `user` (or anonymous)"""
    from django.contrib.auth.models import AnonymousUser

    def _make_store(user=None, repository=None):
        request = RequestFactory().get("/")
        request.session = DjangoSession()
        request.user = user or AnonymousUser()
        return SessionStore(request, repository=repository)
    return _make_store


@pytest.fixture
def logged_client(client, make_user):
    """Test client signed in as a user on the given plan"""
    def _logged_client(plan="free", **kwargs):
        user = make_user(plan=plan, **kwargs)
        client.force_login(user)
        return client, user
    return _logged_client
