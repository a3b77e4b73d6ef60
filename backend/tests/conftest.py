"""
PlotDesk - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator, Dict
import pytest
from httpx import AsyncClient, ASGITransport
from faker import Faker

# Set testing environment before the settings object is built
os.environ['ENVIRONMENT'] = 'test'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['LOG_FILE'] = ''
os.environ['LOG_LEVEL'] = 'WARNING'
os.environ['AI_FEATURES_ENABLED'] = 'false'
os.environ['ANTHROPIC_API_KEY'] = ''
os.environ['OWNER_PASSWORD'] = ''
os.environ['PASSWORD_RESET_SECURITY_ANSWER'] = ''

from plotdesk.main import app
from plotdesk.core.constants import UserRole
from plotdesk.core.security import auth_service
from plotdesk.schemas import AuthUser, User
from plotdesk.services import (
    ContactService,
    DashboardService,
    InquiryService,
    PlotService,
    RegistrationService,
    UserService,
    ViewCache,
    view_cache,
)
from plotdesk.services.validation import ImageUpload
from plotdesk.storage import DataStore, FileStore, SqlStore, get_store

fake = Faker()

OWNER_EMAIL = 'owner@example.com'
OWNER_PASSWORD = 'ownerpassword123'
USER_PASSWORD = 'userpassword123'

# Smallest valid PNG header is enough, content is never decoded
PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00' * 64


def sqlite_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'plotdesk.db'}"


@pytest.fixture(params=['file', 'database'])
async def store(request, tmp_path) -> AsyncGenerator[DataStore, None]:
    """Fresh store on each backend"""
    if request.param == 'file':
        data_store: DataStore = FileStore(tmp_path / 'data')
    else:
        data_store = SqlStore(sqlite_url(tmp_path))

    await data_store.init()
    yield data_store
    await data_store.close()


@pytest.fixture
def cache() -> ViewCache:
    return ViewCache(ttl_seconds=300)


@pytest.fixture
def plot_service(store: DataStore, cache: ViewCache) -> PlotService:
    return PlotService(store, cache)


@pytest.fixture
def user_service(store: DataStore, cache: ViewCache) -> UserService:
    return UserService(store, cache)


@pytest.fixture
def contact_service(store: DataStore, cache: ViewCache) -> ContactService:
    return ContactService(store, cache)


@pytest.fixture
def registration_service(store: DataStore, cache: ViewCache) -> RegistrationService:
    return RegistrationService(store, cache)


@pytest.fixture
def inquiry_service(store: DataStore, cache: ViewCache) -> InquiryService:
    return InquiryService(store, cache)


@pytest.fixture
def dashboard_service(store: DataStore, cache: ViewCache) -> DashboardService:
    return DashboardService(store, cache)


@pytest.fixture
def plot_fields() -> Dict[str, str]:
    """Text fields of a valid plot form, as a browser submits them"""
    return {
        'plotNumber': 'A-101',
        'villageName': 'Greenwood',
        'areaName': 'Sunrise Colony',
        'plotSize': '2400 sqft',
        'plotFacing': 'North',
        'description': 'Corner plot close to the main road.',
        'price': '2400000',
        'priceNegotiable': 'true',
        'status': 'Available',
    }


@pytest.fixture
def png_image() -> ImageUpload:
    return ImageUpload(content=PNG_BYTES, content_type='image/png', filename='plot.png')


@pytest.fixture
def contact_fields() -> Dict[str, str]:
    return {
        'name': fake.name(),
        'phone': '9876543210',
        'email': 'seller@example.com',
        'type': 'Seller',
        'notes': 'Wants to sell before the monsoon.',
    }


@pytest.fixture
def registration_fields() -> Dict[str, str]:
    return {
        'name': fake.name(),
        'phone': '9123456780',
        'email': 'lead@example.com',
        'notes': 'Looking for an east facing plot.',
    }


@pytest.fixture
async def owner(user_service: UserService) -> User:
    """Owner account with OWNER_PASSWORD"""
    return await user_service.ensure_owner(OWNER_EMAIL, OWNER_PASSWORD)


@pytest.fixture
async def regular_user(user_service: UserService, store: DataStore) -> User:
    state = await user_service.create_user('member@example.com', USER_PASSWORD)
    assert state.success
    return await store.get(User, state.id)


def bearer(user: User) -> Dict[str, str]:
    token = auth_service.mint(AuthUser(id=user.id, email=user.email, role=user.role))
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def owner_headers(owner: User) -> Dict[str, str]:
    """Authentication headers for the Owner"""
    assert owner.role == UserRole.OWNER
    return bearer(owner)


@pytest.fixture
def user_headers(regular_user: User) -> Dict[str, str]:
    """Authentication headers for a plain User"""
    return bearer(regular_user)


@pytest.fixture
async def client(store: DataStore) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with the store override"""
    app.dependency_overrides[get_store] = lambda: store
    view_cache.clear()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()
    view_cache.clear()
