"""
User Service - dashboard logins and their credentials

Users and password hashes live in separate collections; the hash is
keyed by the user's email. The single Owner account is seeded from
configuration and cannot be deleted or have its password changed from
the dashboard.
"""
import hmac
from functools import lru_cache
from typing import List, Optional

from plotdesk.core.config import settings
from plotdesk.core.constants import Messages, UserRole, Views
from plotdesk.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    UserNotFoundError,
    ValidationError,
)
from plotdesk.core.logging_config import logger
from plotdesk.core.security import auth_service, get_password_hash, verify_password
from plotdesk.schemas import ActionState, AuthUser, User
from plotdesk.schemas.auth import NewPasswordForm, UserForm
from plotdesk.services.actions import action
from plotdesk.services.validation import validate_form
from plotdesk.services.view_cache import ViewCache, view_cache
from plotdesk.storage.base import DataStore


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    # Checked against when the email is unknown so both failures cost one bcrypt round
    return get_password_hash("plotdesk-dummy-password")


class UserService:
    """User and credential pipelines bound to a store"""

    def __init__(self, store: DataStore, cache: ViewCache = view_cache):
        self.store = store
        self.cache = cache

    # ========== Reads ==========

    async def get_users(self) -> List[User]:
        cached = self.cache.get(Views.USERS)
        if cached is not None:
            return cached

        users = await self.store.list(User)
        self.cache.set(Views.USERS, users)
        return users

    async def get_user(self, user_id: str) -> Optional[User]:
        return await self.store.get(User, user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        email = email.lower()
        for user in await self.store.list(User):
            if user.email.lower() == email:
                return user
        return None

    # ========== Authentication ==========

    async def authenticate_user(self, email: str, password: str) -> AuthUser:
        """
        Check an email/password pair.

        Unknown email, missing credential and wrong password all raise the
        same AuthenticationError so callers cannot tell them apart.
        """
        user = await self.find_by_email(email or "")
        credential = await self.store.get_password(user.email) if user else None

        hashed = credential.hashed_password if credential else _dummy_hash()
        password_ok = verify_password(password or "", hashed)

        if user is None or credential is None or not password_ok:
            reason = "unknown email" if user is None else "no credential" if credential is None else "wrong password"
            logger.log_auth_event("login", success=False, user_email=email, reason=reason)
            raise AuthenticationError(Messages.INVALID_CREDENTIALS)

        logger.log_auth_event("login", success=True, user_email=user.email)
        return AuthUser(id=user.id, email=user.email, role=user.role)

    # ========== Mutations ==========

    async def _create(self, email: str, password: str, role: UserRole = UserRole.USER) -> User:
        form, errors = validate_form(UserForm, {"email": email, "password": password})
        if form is None:
            raise ValidationError(Messages.USER_INVALID, errors)

        async with self.store.lock(User):
            if await self.find_by_email(form.email):
                raise ConflictError(Messages.USER_EXISTS)

            # Credential first: a user row without a credential cannot log in anyway
            await self.store.set_password(form.email, get_password_hash(form.password))
            user = await self.store.create(User, {"email": form.email, "role": role})

        logger.info(f"[Users] Created {role.value} {user.email} as {user.id}")
        self.cache.invalidate(Views.DASHBOARD, Views.USERS)
        return user

    @action("create_user")
    async def create_user(self, email: str, password: str) -> ActionState:
        user = await self._create(email, password)
        return ActionState.ok(Messages.USER_CREATED, status_code=201, id=user.id)

    @action("register_user")
    async def register_user(self, email: str, password: str) -> ActionState:
        """Public sign-up: create a User login and hand back a session token"""
        user = await self._create(email, password)
        token = auth_service.mint(AuthUser(id=user.id, email=user.email, role=user.role))
        logger.log_auth_event("register", success=True, user_email=user.email)
        return ActionState.ok(Messages.USER_CREATED, status_code=201, id=user.id, token=token)

    @action("delete_user")
    async def delete_user(self, user_id: str) -> ActionState:
        async with self.store.lock(User):
            user = await self.store.get(User, user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            if user.role == UserRole.OWNER:
                # Silently refused: no mutation and nothing to invalidate
                logger.warning(f"[Users] Refused to delete owner account {user.email}")
                return ActionState.ok(Messages.OWNER_PROTECTED)

            await self.store.delete(User, user_id)
            await self.store.delete_password(user.email)

        logger.info(f"[Users] Deleted user {user.email}")
        self.cache.invalidate(Views.DASHBOARD, Views.USERS)
        return ActionState.ok(Messages.USER_DELETED)

    @action("change_user_password")
    async def change_user_password(self, user_id: str, new_password: str) -> ActionState:
        """Owner sets another user's password"""
        form, errors = validate_form(NewPasswordForm, {"newPassword": new_password})
        if form is None:
            raise ValidationError(Messages.PASSWORD_INVALID, errors)

        user = await self.store.get(User, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        if user.role == UserRole.OWNER:
            logger.warning(f"[Users] Refused admin password change for owner {user.email}")
            raise AuthorizationError(Messages.OWNER_PROTECTED)

        await self.store.set_password(user.email, get_password_hash(form.new_password))
        logger.log_auth_event("admin_password_change", success=True, user_email=user.email)
        return ActionState.ok(Messages.PASSWORD_CHANGED)

    @action("change_password")
    async def change_password(self, user_id: str, current_password: str, new_password: str) -> ActionState:
        """Signed-in user changes their own password"""
        form, errors = validate_form(NewPasswordForm, {"newPassword": new_password})
        if form is None:
            raise ValidationError(Messages.PASSWORD_INVALID, errors)

        user = await self.store.get(User, user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        credential = await self.store.get_password(user.email)
        if credential is None or not verify_password(current_password or "", credential.hashed_password):
            logger.log_auth_event("password_change", success=False, user_email=user.email,
                                  reason="current password mismatch")
            raise AuthenticationError(Messages.CURRENT_PASSWORD_INCORRECT)

        await self.store.set_password(user.email, get_password_hash(form.new_password))
        logger.log_auth_event("password_change", success=True, user_email=user.email)
        return ActionState.ok(Messages.PASSWORD_CHANGED)

    @action("reset_password")
    async def reset_password(self, email: str, security_answer: str, new_password: str) -> ActionState:
        """
        Unauthenticated reset guarded by the configured security answer.

        Disabled unless PASSWORD_RESET_SECURITY_ANSWER is set.
        """
        expected = settings.PASSWORD_RESET_SECURITY_ANSWER
        if not expected:
            raise AuthorizationError(Messages.RESET_DISABLED)

        form, errors = validate_form(NewPasswordForm, {"newPassword": new_password})
        if form is None:
            raise ValidationError(Messages.PASSWORD_INVALID, errors)

        user = await self.find_by_email(email or "")
        if user is None:
            raise UserNotFoundError(email or "")

        if not hmac.compare_digest(
            (security_answer or "").strip().lower().encode("utf-8"),
            expected.strip().lower().encode("utf-8"),
        ):
            logger.log_auth_event("password_reset", success=False, user_email=user.email,
                                  reason="wrong security answer")
            raise AuthenticationError(Messages.RESET_ANSWER_INCORRECT)

        await self.store.set_password(user.email, get_password_hash(form.new_password))
        logger.log_auth_event("password_reset", success=True, user_email=user.email)
        return ActionState.ok(Messages.PASSWORD_CHANGED)

    # ========== Owner ==========

    async def ensure_owner(self, email: str, password: str) -> Optional[User]:
        """
        Make sure the configured Owner account exists.

        An existing user with the owner email is promoted; a missing
        credential is set when a password is configured. Returns None when
        no Owner exists and none could be created.
        """
        async with self.store.lock(User):
            users = await self.store.list(User)
            owner = next((u for u in users if u.role == UserRole.OWNER), None)

            if owner is None:
                if not password:
                    logger.warning("[Users] No owner account and OWNER_PASSWORD is not set - skipping owner seed")
                    return None

                match = next((u for u in users if u.email.lower() == email.lower()), None)
                if match is not None:
                    owner = await self.store.update(match.model_copy(update={"role": UserRole.OWNER}))
                    logger.info(f"[Users] Promoted {email} to owner")
                else:
                    owner = await self.store.create(User, {"email": email, "role": UserRole.OWNER})
                    logger.info(f"[Users] Created owner account {email}")

            if password and await self.store.get_password(owner.email) is None:
                await self.store.set_password(owner.email, get_password_hash(password))
                logger.info(f"[Users] Set owner credential for {owner.email}")

        self.cache.invalidate(Views.DASHBOARD, Views.USERS)
        return owner
