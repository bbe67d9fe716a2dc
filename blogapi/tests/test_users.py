import pytest
from jose import jwt

TEST_SECRET = 'test-secret'


async def register(ac, username, password):
    return await ac.post('/register', json={'username': username, 'password': password})


async def login(ac, username, password):
    return await ac.post('/login', json={'username': username, 'password': password})


@pytest.mark.asyncio
async def test_register_login_profile_round_trip(client):
    r = await register(client, 'alice', 'secret')
    assert r.status_code == 200, r.text
    user = r.json()
    assert user['username'] == 'alice'
    assert 'id' in user

    l = await login(client, 'alice', 'secret')
    assert l.status_code == 200, l.text
    body = l.json()
    assert body['id'] == user['id']
    assert body['username'] == 'alice'
    token = body['token']

    p = await client.get('/profile', headers={'Authorization': f'Bearer {token}'})
    assert p.status_code == 200, p.text
    assert p.json() == {'username': 'alice', 'id': user['id']}


@pytest.mark.asyncio
async def test_register_never_returns_password_hash(client):
    r = await register(client, 'bob', 'hunter2')
    assert r.status_code == 200
    assert 'hashed_password' not in r.json()
    assert 'hunter2' not in r.text


@pytest.mark.asyncio
async def test_duplicate_username_is_rejected(client):
    assert (await register(client, 'carol', 'pw1')).status_code == 200
    dup = await register(client, 'carol', 'pw2')
    assert dup.status_code == 400
    # original credentials still work
    assert (await login(client, 'carol', 'pw1')).status_code == 200


@pytest.mark.asyncio
async def test_register_missing_fields_is_bad_request(client):
    r = await client.post('/register', json={'username': 'dan'})
    assert r.status_code == 400
    assert 'password' in r.json()['detail']
    r = await client.post('/register', json={'username': '', 'password': 'x'})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_login_failures_do_not_reveal_which_field(client):
    await register(client, 'erin', 'right')
    wrong_password = await login(client, 'erin', 'wrong')
    unknown_user = await login(client, 'nobody', 'right')
    assert wrong_password.status_code == 400
    assert unknown_user.status_code == 400
    assert wrong_password.json() == unknown_user.json()


@pytest.mark.asyncio
async def test_profile_requires_token(client):
    r = await client.get('/profile')
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_profile_rejects_bad_tokens(client):
    r = await client.get('/profile', headers={'Authorization': 'Bearer garbage'})
    assert r.status_code == 403
    forged = jwt.encode({'username': 'x', 'id': 'y'}, 'other-secret', algorithm='HS256')
    r = await client.get('/profile', headers={'Authorization': f'Bearer {forged}'})
    assert r.status_code == 403
    # server keeps serving after malformed tokens
    assert (await client.get('/healthz')).json() == {'status': 'ok'}


@pytest.mark.asyncio
async def test_token_is_accepted_from_cookie_in_header_mode(client):
    await register(client, 'frank', 'pw')
    token = (await login(client, 'frank', 'pw')).json()['token']
    r = await client.get('/profile', cookies={'token': token})
    assert r.status_code == 200
    assert r.json()['username'] == 'frank'


@pytest.mark.asyncio
async def test_token_claims_match_user(client):
    user = (await register(client, 'gina', 'pw')).json()
    token = (await login(client, 'gina', 'pw')).json()['token']
    claims = jwt.decode(token, TEST_SECRET, algorithms=['HS256'])
    assert claims == {'username': 'gina', 'id': user['id']}


@pytest.mark.asyncio
async def test_logout_clears_cookie(client):
    r = await client.post('/logout')
    assert r.status_code == 200
    assert r.json() == 'ok'
    assert 'token=' in r.headers['set-cookie']


@pytest.mark.asyncio
async def test_cookie_transport_login_and_logout(cookie_client):
    await register(cookie_client, 'hank', 'pw')
    l = await login(cookie_client, 'hank', 'pw')
    assert l.status_code == 200
    assert 'token' not in l.json()
    assert 'token' in l.cookies

    p = await cookie_client.get('/profile')
    assert p.status_code == 200
    assert p.json()['username'] == 'hank'

    await cookie_client.post('/logout')
    cookie_client.cookies.clear()
    assert (await cookie_client.get('/profile')).status_code == 401


@pytest.mark.asyncio
async def test_non_bearer_authorization_header_is_invalid(client):
    await register(client, 'ivan', 'pw')
    token = (await login(client, 'ivan', 'pw')).json()['token']
    r = await client.get('/profile', headers={'Authorization': f'Token {token}'})
    assert r.status_code == 403
    # a malformed header is not rescued by a valid cookie
    r = await client.get('/profile', headers={'Authorization': 'Bearer'}, cookies={'token': token})
    assert r.status_code == 403
