import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault('APP_ENV', 'test')
os.environ.setdefault('AUTH_SECRET_KEY', 'test-signing-key-with-enough-bytes-for-hs256')
os.environ.setdefault('CURRENCY_SYMBOL', '₹')
os.environ.setdefault('LOG_JSON', 'false')

import pytest
from fastapi.testclient import TestClient

from subtrack.core.security import create_access_token
from subtrack.main import create_app
from subtrack.storage import MemoryStorage


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def client(storage):
    return TestClient(create_app(storage=storage))


@pytest.fixture
def auth_headers():
    def _headers(uid='user-1', email='user-1@example.com'):
        return {'Authorization': f'Bearer {create_access_token(uid, email)}'}

    return _headers


@pytest.fixture
def sample_payload():
    return {
        'name': 'Netflix',
        'category': 'Entertainment',
        'price': '15.00',
        'frequency': 'Monthly',
        'nextPayment': '2026-11-01',
    }
