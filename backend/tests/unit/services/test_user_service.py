"""
Unit Tests for UserService: logins, credentials and the Owner account
"""
import pytest

from plotdesk.core.constants import Messages, UserRole, Views
from plotdesk.core.exceptions import AuthenticationError
from plotdesk.core.security import auth_service, verify_password
from plotdesk.schemas import User

from conftest import OWNER_EMAIL, OWNER_PASSWORD, USER_PASSWORD


class TestAuthenticate:

    async def test_valid_credentials(self, user_service, owner):
        identity = await user_service.authenticate_user(OWNER_EMAIL, OWNER_PASSWORD)

        assert identity.id == owner.id
        assert identity.role == UserRole.OWNER

    async def test_email_is_case_insensitive(self, user_service, owner):
        identity = await user_service.authenticate_user(OWNER_EMAIL.upper(), OWNER_PASSWORD)
        assert identity.email == OWNER_EMAIL

    async def test_unknown_email_and_wrong_password_look_the_same(self, user_service, owner):
        with pytest.raises(AuthenticationError) as unknown:
            await user_service.authenticate_user('nobody@example.com', OWNER_PASSWORD)
        with pytest.raises(AuthenticationError) as wrong:
            await user_service.authenticate_user(OWNER_EMAIL, 'not-the-password')

        assert type(unknown.value) is type(wrong.value)
        assert unknown.value.message == wrong.value.message == Messages.INVALID_CREDENTIALS
        assert unknown.value.code == wrong.value.code

    async def test_user_without_credential_cannot_log_in(self, user_service, store):
        await store.create(User, {'email': 'orphan@example.com', 'role': UserRole.USER})

        with pytest.raises(AuthenticationError) as exc_info:
            await user_service.authenticate_user('orphan@example.com', '')
        assert exc_info.value.message == Messages.INVALID_CREDENTIALS


class TestCreateAndRegister:

    async def test_create_user(self, user_service, store):
        state = await user_service.create_user('member@example.com', USER_PASSWORD)

        assert state.success is True
        assert state.status_code == 201
        user = await store.get(User, state.id)
        assert user.role == UserRole.USER
        credential = await store.get_password('member@example.com')
        assert verify_password(USER_PASSWORD, credential.hashed_password)

    async def test_duplicate_email(self, user_service, store):
        await user_service.create_user('member@example.com', USER_PASSWORD)

        state = await user_service.create_user('Member@Example.com', 'anotherpassword')

        assert state.success is False
        assert state.status_code == 409
        assert state.message == Messages.USER_EXISTS
        assert len(await store.list(User)) == 1

    async def test_invalid_user(self, user_service, store):
        state = await user_service.create_user('not-an-email', 'short')

        assert state.success is False
        assert state.message == Messages.USER_INVALID
        assert set(state.errors) == {'email', 'password'}
        assert await store.list(User) == []

    async def test_register_returns_session_token(self, user_service):
        state = await user_service.register_user('new@example.com', USER_PASSWORD)

        assert state.success is True
        identity = auth_service.verify(state.token)
        assert identity.id == state.id
        assert identity.role == UserRole.USER

    async def test_create_invalidates_user_list(self, user_service, cache):
        assert await user_service.get_users() == []
        await user_service.create_user('member@example.com', USER_PASSWORD)

        assert cache.get(Views.USERS) is None
        assert len(await user_service.get_users()) == 1


class TestDeleteUser:

    async def test_delete_user_removes_credential(self, user_service, store, regular_user):
        state = await user_service.delete_user(regular_user.id)

        assert state.success is True
        assert await store.get(User, regular_user.id) is None
        assert await store.get_password(regular_user.email) is None

    async def test_owner_delete_is_silently_refused(self, user_service, store, cache, owner):
        cache.set(Views.USERS, [owner])

        state = await user_service.delete_user(owner.id)

        assert state.success is True
        assert state.status_code == 200
        assert cache.get(Views.USERS) == [owner]
        assert state.message == Messages.OWNER_PROTECTED
        assert await store.get(User, owner.id) == owner
        assert await store.get_password(OWNER_EMAIL) is not None

    async def test_delete_unknown_user(self, user_service):
        state = await user_service.delete_user('777')
        assert state.success is False
        assert state.status_code == 404


class TestPasswords:

    async def test_owner_sets_user_password(self, user_service, regular_user):
        state = await user_service.change_user_password(regular_user.id, 'brandnewpassword')

        assert state.success is True
        identity = await user_service.authenticate_user(regular_user.email, 'brandnewpassword')
        assert identity.id == regular_user.id

    async def test_owner_password_is_not_changed_from_dashboard(self, user_service, owner):
        state = await user_service.change_user_password(owner.id, 'brandnewpassword')

        assert state.success is False
        assert state.status_code == 403
        await user_service.authenticate_user(OWNER_EMAIL, OWNER_PASSWORD)

    async def test_short_new_password(self, user_service, regular_user):
        state = await user_service.change_user_password(regular_user.id, 'short')

        assert state.success is False
        assert state.message == Messages.PASSWORD_INVALID
        assert list(state.errors) == ['newPassword']

    async def test_change_own_password(self, user_service, owner):
        state = await user_service.change_password(owner.id, OWNER_PASSWORD, 'ownerpassword456')

        assert state.success is True
        await user_service.authenticate_user(OWNER_EMAIL, 'ownerpassword456')

    async def test_change_own_password_needs_current(self, user_service, owner):
        state = await user_service.change_password(owner.id, 'wrong-current', 'ownerpassword456')

        assert state.success is False
        assert state.status_code == 401
        assert state.message == Messages.CURRENT_PASSWORD_INCORRECT
        await user_service.authenticate_user(OWNER_EMAIL, OWNER_PASSWORD)


class TestResetPassword:

    @pytest.fixture
    def security_answer(self, monkeypatch):
        from plotdesk.core.config import settings
        monkeypatch.setattr(settings, 'PASSWORD_RESET_SECURITY_ANSWER', 'Hyderabad')
        return 'Hyderabad'

    async def test_disabled_without_configured_answer(self, user_service, regular_user):
        state = await user_service.reset_password(regular_user.email, 'anything', 'brandnewpassword')

        assert state.success is False
        assert state.status_code == 403
        assert state.message == Messages.RESET_DISABLED

    async def test_reset_with_answer(self, user_service, regular_user, security_answer):
        state = await user_service.reset_password(regular_user.email, '  hyderabad ', 'brandnewpassword')

        assert state.success is True
        await user_service.authenticate_user(regular_user.email, 'brandnewpassword')

    async def test_wrong_answer(self, user_service, regular_user, security_answer):
        state = await user_service.reset_password(regular_user.email, 'Chennai', 'brandnewpassword')

        assert state.success is False
        assert state.message == Messages.RESET_ANSWER_INCORRECT
        await user_service.authenticate_user(regular_user.email, USER_PASSWORD)

    async def test_unknown_email(self, user_service, security_answer):
        state = await user_service.reset_password('nobody@example.com', security_answer, 'brandnewpassword')
        assert state.status_code == 404


class TestEnsureOwner:

    async def test_no_password_no_owner(self, user_service, store):
        assert await user_service.ensure_owner(OWNER_EMAIL, '') is None
        assert await store.list(User) == []

    async def test_creates_owner_once(self, user_service, store):
        first = await user_service.ensure_owner(OWNER_EMAIL, OWNER_PASSWORD)
        second = await user_service.ensure_owner(OWNER_EMAIL, OWNER_PASSWORD)

        assert first.role == UserRole.OWNER
        assert second.id == first.id
        assert len(await store.list(User)) == 1

    async def test_existing_credential_is_not_overwritten(self, user_service, owner):
        await user_service.ensure_owner(OWNER_EMAIL, 'some-other-password')
        await user_service.authenticate_user(OWNER_EMAIL, OWNER_PASSWORD)

    async def test_promotes_existing_user(self, user_service, store):
        state = await user_service.create_user(OWNER_EMAIL, USER_PASSWORD)

        owner = await user_service.ensure_owner(OWNER_EMAIL, OWNER_PASSWORD)

        assert owner.id == state.id
        assert (await store.get(User, state.id)).role == UserRole.OWNER
        # The user already had a credential, it is kept
        await user_service.authenticate_user(OWNER_EMAIL, USER_PASSWORD)
