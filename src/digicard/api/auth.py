"""Authentication and login sessions."""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from pathlib import Path

from passlib.context import CryptContext
from pydantic import ValidationError

from digicard.api.store import LocalStore, RestStore, Store
from digicard.exceptions import AuthError, CardValidationError, StoreError
from digicard.models import User
from digicard.utils.text import new_id

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

MIN_PASSWORD_LENGTH = 6

# Subscription length of plans billed monthly
MONTHLY_PERIOD = timedelta(days=30)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class Session:
    """
    Persisted login session: the signed-in user, stored as JSON.

    Nothing is read implicitly; callers load, save and clear explicitly.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> User | None:
        """
        Read the signed-in user.

        Returns:
            User, or None when nobody is signed in or the file is unreadable.
        """
        if not self.path.exists():
            return None
        try:
            with open(self.path, encoding="utf-8") as f:
                return User.model_validate(json.load(f))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return None

    def save(self, user: User) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(user.to_json_dict(), f, indent=2)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class AuthProvider(ABC):
    """
    Login, registration and plan upgrades over an injected Session.

    The session only remembers who is signed in. Role and subscription are
    always read back from the store.
    """

    def __init__(self, session: Session, store: Store) -> None:
        self.session = session
        self.store = store

    def login(self, email: str, password: str) -> User:
        """
        Sign in and remember the user in the session.

        Args:
            email: Account email (case-insensitive).
            password: Plain-text password.

        Returns:
            The signed-in user.

        Raises:
            AuthError: If the credentials are wrong.
        """
        user = self._authenticate(normalize_email(email), password)
        self.session.save(user)
        logger.info(f"Signed in as {user.email}")
        return user

    def register(self, email: str, password: str, name: str) -> User:
        """
        Create an account on the free tier and sign in.

        Args:
            email: Account email (case-insensitive).
            password: Plain-text password.
            name: Display name.

        Returns:
            The new user.

        Raises:
            AuthError: If the input is invalid or the email is taken.
        """
        email = normalize_email(email)
        if "@" not in email:
            raise AuthError(f"Invalid email address: {email}")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if not name.strip():
            raise AuthError("Name must not be empty")

        user = self._create_account(email, password, name.strip())
        self.session.save(user)
        logger.info(f"Registered {user.email}")
        return user

    def logout(self) -> None:
        self.session.clear()

    def current_user(self) -> User | None:
        """
        Get the signed-in user as currently stored.

        Returns:
            User, or None when nobody is signed in or the account is gone.
        """
        remembered = self.session.load()
        if remembered is None:
            return None
        user = self.store.get_user(remembered.id)
        if user is None:
            logger.warning(f"Signed-in account {remembered.id} no longer exists")
        return user

    def require_admin(self) -> User:
        """
        Get the signed-in user and check the admin role.

        Raises:
            AuthError: If nobody is signed in or the user is not an admin.
        """
        user = self.require_user()
        if not user.is_admin:
            raise AuthError(f"{user.email} is not an administrator")
        return user

    def require_user(self) -> User:
        """
        Get the signed-in user.

        Raises:
            AuthError: If nobody is signed in.
        """
        user = self.current_user()
        if user is None:
            raise AuthError("Not signed in. Run 'digicard login' first.")
        return user

    def upgrade(self, tier: str) -> User:
        """
        Record a new subscription tier for the signed-in user.

        No payment is taken.

        Args:
            tier: Plan id.

        Returns:
            The updated user.

        Raises:
            AuthError: If nobody is signed in or the plan is unknown.
        """
        user = self._apply_upgrade(self.require_user(), tier)
        self.session.save(user)
        logger.info(f"Upgraded {user.email} to {tier}")
        return user

    @abstractmethod
    def _authenticate(self, email: str, password: str) -> User:
        pass

    @abstractmethod
    def _create_account(self, email: str, password: str, name: str) -> User:
        pass

    @abstractmethod
    def _apply_upgrade(self, user: User, tier: str) -> User:
        pass


class LocalAuthProvider(AuthProvider):
    """Accounts kept in a LocalStore, passwords hashed with passlib."""

    def __init__(self, store: LocalStore, session: Session) -> None:
        super().__init__(session, store)

    def _authenticate(self, email: str, password: str) -> User:
        account = self.store.get_account(email)
        if account is None or not verify_password(password, account["passwordHash"]):
            raise AuthError("Invalid email or password")
        user = self.store.get_user(account["userId"])
        if user is None:
            raise AuthError(f"Account {email} has no user record")
        return user

    def _create_account(self, email: str, password: str, name: str) -> User:
        user = User(id=f"u{new_id()}", name=name, email=email)
        try:
            return self.store.create_account(email, hash_password(password), user)
        except CardValidationError as e:
            raise AuthError(f"An account for {email} already exists") from e

    def _apply_upgrade(self, user: User, tier: str) -> User:
        plans = {plan.id: plan for plan in self.store.get_plans()}
        plan = plans.get(tier)
        if plan is None:
            raise AuthError(f"Unknown plan: {tier}")
        expiry = None
        if plan.interval == "monthly" and plan.price > 0:
            expiry = datetime.now(timezone.utc) + MONTHLY_PERIOD
        upgraded = user.model_copy(update={"subscription": plan.id, "subscription_expiry": expiry})
        return self.store.save_user(upgraded)


class RestAuthProvider(AuthProvider):
    """Accounts managed by the REST backend (/auth/login, /auth/register, /user/upgrade)."""

    def __init__(self, store: RestStore, session: Session) -> None:
        super().__init__(session, store)

    def _post_user(self, path: str, payload: dict, failure: str) -> User:
        try:
            data = self.store.request("POST", path, json=payload)
        except StoreError as e:
            raise AuthError(f"{failure}: {e}") from e
        try:
            return User.model_validate(data)
        except ValidationError as e:
            raise AuthError(f"{failure}: backend returned an invalid user") from e

    def _authenticate(self, email: str, password: str) -> User:
        return self._post_user(
            "/auth/login", {"email": email, "password": password}, "Invalid email or password"
        )

    def _create_account(self, email: str, password: str, name: str) -> User:
        return self._post_user(
            "/auth/register",
            {"email": email, "password": password, "name": name},
            "Registration failed",
        )

    def _apply_upgrade(self, user: User, tier: str) -> User:
        return self._post_user("/user/upgrade", {"userId": user.id, "planId": tier}, "Upgrade failed")


def create_auth_provider(store: Store, session: Session) -> AuthProvider:
    """
    Build the auth provider matching a store backend.

    Raises:
        ValueError: If the store type has no auth provider.
    """
    if isinstance(store, LocalStore):
        return LocalAuthProvider(store, session)
    if isinstance(store, RestStore):
        return RestAuthProvider(store, session)
    raise ValueError(f"No auth provider for {type(store).__name__}")


def provision_admin(auth: AuthProvider, store: Store, email: str, password: str, name: str) -> User:
    """
    Create or promote the administrator account.

    The account goes through the normal registration path (or login, when
    it already exists) and is then given the admin role and a lifetime
    subscription. The session ends up signed in as the administrator.

    Args:
        auth: Auth provider.
        store: Store holding the user records.
        email: Admin email.
        password: Admin password.
        name: Display name used when the account is created.

    Returns:
        The administrator user.

    Raises:
        AuthError: If the account exists with a different password.
    """
    try:
        user = auth.register(email, password, name)
    except AuthError:
        user = auth.login(email, password)

    admin = user.model_copy(update={
        "role": "admin",
        "subscription": "pro_lifetime",
        "subscription_expiry": None,
    })
    admin = store.save_user(admin)
    auth.session.save(admin)
    logger.info(f"Provisioned administrator {admin.email}")
    return admin
