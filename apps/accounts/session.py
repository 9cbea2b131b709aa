"""
Session Store - Current identity, sign in/up/out and usage count for one request
"""
import logging
from dataclasses import dataclass
from typing import Optional

from django.contrib.auth import authenticate, get_user_model, login, logout
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import DatabaseError, IntegrityError, transaction

from apps.accounts.models import Subscription
from apps.accounts.plans import PlanTier, can_create_contract, plan_limit_text
from core.exceptions import PersistenceError
from core.services.contract_repository import ContractRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
DEFAULT_NAME = "Usuário"


@dataclass
class SessionIdentity:
    """Signed-in user as seen by the rest of the app"""
    id: int
    name: str
    email: str
    plan: str
    contracts_used: Optional[int]

    @property
    def plan_name(self):
        return PlanTier.get_display_name(self.plan)

    @property
    def can_create_contract(self):
        return can_create_contract(self.plan, self.contracts_used)

    @property
    def plan_limit_text(self):
        return plan_limit_text(self.plan, self.contracts_used)


class SessionStore:
    """Per-request session store.

    Built by SessionStoreMiddleware and reached through `request.session_store`.
    The identity is resolved lazily from the authenticated Django user the first
    time it is read.
    """

    def __init__(self, request, repository=None):
        self.request = request
        self.repository = repository or ContractRepository()
        self._identity = None
        self._loaded = False

    @property
    def identity(self):
        if not self._loaded:
            self._identity = self._load_identity()
            self._loaded = True
        return self._identity

    @property
    def is_authenticated(self):
        return self.identity is not None

    def _load_identity(self):
        user = getattr(self.request, 'user', None)
        if user is None or not user.is_authenticated:
            return None

        plan = self._load_plan(user)
        try:
            contracts_used = self.repository.count_by_owner(user.pk)
        except PersistenceError:
            logger.warning(f"Usage count unavailable for user {user.pk}")
            contracts_used = None

        email = user.email or ''
        name = user.first_name or (email.split('@')[0] if email else '') or DEFAULT_NAME
        return SessionIdentity(
            id=user.pk,
            name=name,
            email=email,
            plan=plan,
            contracts_used=contracts_used,
        )

    def _load_plan(self, user):
        """Plan tier for `user`, creating a free subscription when none exists"""
        try:
            subscription, created = Subscription.objects.get_or_create(
                user=user, defaults={'plan': PlanTier.FREE.value}
            )
        except DatabaseError as e:
            logger.error(f"Error loading subscription for user {user.pk}: {e}")
            return PlanTier.FREE.value
        if created:
            logger.info(f"Created free subscription for user {user.pk}")
        if subscription.plan in (PlanTier.STANDARD.value, PlanTier.PROFESSIONAL.value):
            return subscription.plan
        return PlanTier.FREE.value

    def sign_in(self, email, password):
        """Authenticate and attach the user to the Django session"""
        email = (email or '').strip().lower()
        user = authenticate(self.request, username=email, password=password)
        if user is None:
            logger.warning(f"Sign in failed for {email}")
            return False
        login(self.request, user)
        self._loaded = False
        logger.info(f"User {user.pk} signed in")
        return True

    def sign_up(self, name, email, password):
        """Create an account on the free plan. Does not sign the user in."""
        email = (email or '').strip().lower()
        try:
            validate_email(email)
        except ValidationError:
            logger.warning(f"Sign up rejected, invalid email: {email}")
            return False
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            logger.warning(f"Sign up rejected, password too short for {email}")
            return False

        User = get_user_model()
        try:
            with transaction.atomic():
                if User.objects.filter(username=email).exists():
                    logger.warning(f"Sign up rejected, email already registered: {email}")
                    return False
                user = User.objects.create_user(
                    username=email,
                    email=email,
                    password=password,
                    first_name=(name or '').strip()[:150],
                )
                Subscription.objects.create(user=user, plan=PlanTier.FREE.value)
        except (IntegrityError, DatabaseError) as e:
            logger.error(f"Error registering {email}: {e}")
            return False

        logger.info(f"User {user.pk} registered")
        return True

    def sign_out(self):
        """Drop the identity and flush the Django session"""
        logout(self.request)
        self._identity = None
        self._loaded = True

    def refresh_usage(self):
        """Re-count the user's contracts; keeps the previous count on failure"""
        identity = self.identity
        if identity is None:
            return 0
        try:
            identity.contracts_used = self.repository.count_by_owner(identity.id)
        except PersistenceError:
            logger.warning(f"Keeping stale usage count for user {identity.id}")
        return identity.contracts_used
