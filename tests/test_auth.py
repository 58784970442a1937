from __future__ import annotations

import jwt
import pytest

from subtrack.config import get_settings
from subtrack.core.exceptions import AuthenticationError
from subtrack.core.security import TokenVerifier, create_access_token

PROTECTED = [
    ('get', '/api/subscriptions'),
    ('get', '/api/subscriptions/1'),
    ('post', '/api/subscriptions'),
    ('patch', '/api/subscriptions/1'),
    ('delete', '/api/subscriptions/1'),
    ('patch', '/api/subscriptions/1/pause'),
    ('get', '/api/user'),
    ('get', '/api/metrics'),
    ('get', '/api/metrics/categories'),
    ('get', '/api/metrics/trend'),
]


@pytest.mark.parametrize('method, path', PROTECTED)
def test_missing_token_is_401(client, method, path):
    response = getattr(client, method)(path)
    assert response.status_code == 401
    assert response.json() == {'detail': 'Unauthorized'}


@pytest.mark.parametrize(
    'header',
    [
        'Bearer not-a-jwt',
        'Basic dXNlcjpwYXNz',
        'Bearer ' + jwt.encode({'sub': 'x', 'exp': 4102444800}, 'some-other-signing-key-entirely-different', algorithm='HS256'),
    ],
)
def test_invalid_token_is_uniform_401(client, header):
    response = client.get('/api/subscriptions', headers={'Authorization': header})
    assert response.status_code == 401
    assert response.json() == {'detail': 'Unauthorized'}


def test_expired_token_is_401(client):
    token = create_access_token('user-1', ttl_minutes=-5)
    response = client.get('/api/user', headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 401
    assert response.json() == {'detail': 'Unauthorized'}


def test_user_created_lazily(client, storage, auth_headers):
    assert storage.users == {}
    response = client.get('/api/user', headers=auth_headers('uid-42', 'someone@example.com'))
    assert response.status_code == 200
    assert response.json() == {'id': 'uid-42', 'email': 'someone@example.com'}
    assert list(storage.users) == ['uid-42']

    client.get('/api/user', headers=auth_headers('uid-42', 'changed@example.com'))
    assert storage.users['uid-42'].email == 'someone@example.com'


def test_verifier_prefers_uid_claim():
    verifier = TokenVerifier.from_settings(get_settings())
    token = create_access_token('subject', 'a@example.com', extra={'uid': 'firebase-uid'})
    identity = verifier.verify(token)
    assert identity.uid == 'firebase-uid'
    assert identity.email == 'a@example.com'


def test_verifier_checks_audience():
    key = 'audience-test-signing-key-long-enough-for-hs256'
    verifier = TokenVerifier(key=key, audience='subtrack')
    good = jwt.encode({'sub': 'u', 'aud': 'subtrack', 'exp': 4102444800}, key, algorithm='HS256')
    bad = jwt.encode({'sub': 'u', 'aud': 'elsewhere', 'exp': 4102444800}, key, algorithm='HS256')
    assert verifier.verify(good).uid == 'u'
    with pytest.raises(AuthenticationError):
        verifier.verify(bad)


def test_verifier_requires_expiry():
    key = 'expiry-test-signing-key-long-enough-for-hs256'
    token = jwt.encode({'sub': 'u'}, key, algorithm='HS256')
    with pytest.raises(AuthenticationError):
        TokenVerifier(key=key).verify(token)
