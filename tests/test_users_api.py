"""API tests for user administration (/users)."""
import asyncio
from unittest.mock import AsyncMock, patch

import asyncpg
import pytest

from auth import security
from conftest import FakeTable
from users import service as users_service


@pytest.fixture
def users():
    table = FakeTable()
    table.insert(username='admin', display_name='Administrator', role='admin', password_hash='x')

    async def username_exists(username, *, exclude_id=None):
        return any(r['username'] == username and r['id'] != exclude_id for r in table.where())

    async def create_user(**columns):
        return table.insert(**columns)

    with patch('users.repository.list_users', new=AsyncMock(side_effect=lambda: table.where())), \
            patch('users.repository.get_user', new=AsyncMock(side_effect=table.get)), \
            patch('users.repository.username_exists', new=username_exists), \
            patch('users.repository.create_user', new=create_user), \
            patch('users.repository.update_user', new=AsyncMock(side_effect=table.update)), \
            patch('users.repository.delete_user', new=AsyncMock(side_effect=table.delete)):
        yield table


class TestCreateUser:
    """Tests for POST /users."""

    def test_password_is_hashed(self, as_admin, users):
        resp = as_admin.post('/users', json={'username': 'bob', 'password': 'hunter2', 'displayName': 'Bob'})
        assert resp.status_code == 200

        stored = users.get(resp.json()['id'])
        assert stored['password_hash'] != 'hunter2'
        assert security.verify_password('hunter2', stored['password_hash'])
        assert stored['display_name'] == 'Bob'
        assert stored['role'] == 'user'

    def test_display_name_defaults_to_username(self, as_admin, users):
        resp = as_admin.post('/users', json={'username': 'carol', 'password': 'pw'})
        assert users.get(resp.json()['id'])['display_name'] == 'carol'

    def test_duplicate_username(self, as_admin, users):
        resp = as_admin.post('/users', json={'username': ' admin ', 'password': 'pw'})
        assert resp.status_code == 409
        assert resp.json() == {'success': False, 'error': 'Username already exists.'}
        assert len(users.rows) == 1

    def test_unique_violation_race(self, as_admin):
        with patch('users.repository.username_exists', new=AsyncMock(return_value=False)), \
                patch('users.repository.create_user',
                      new=AsyncMock(side_effect=asyncpg.UniqueViolationError('duplicate key'))):
            resp = as_admin.post('/users', json={'username': 'dave', 'password': 'pw'})
        assert resp.status_code == 409

    def test_invalid_role(self, as_admin, users):
        resp = as_admin.post('/users', json={'username': 'eve', 'password': 'pw', 'role': 'root'})
        assert resp.status_code == 422


class TestUpdateUser:
    """Tests for PUT /users/{id}."""

    def test_password_change_is_hashed(self, as_admin, users):
        users.insert(username='bob', display_name='Bob', role='user', password_hash='old')
        resp = as_admin.put('/users/2', json={'password': 'new-pass'})
        assert resp.status_code == 200
        assert security.verify_password('new-pass', users.get(2)['password_hash'])
        assert users.get(2)['display_name'] == 'Bob'

    def test_rename_to_taken_username(self, as_admin, users):
        users.insert(username='bob', display_name='Bob', role='user', password_hash='old')
        assert as_admin.put('/users/2', json={'username': 'admin'}).status_code == 409

    def test_unknown_user(self, as_admin, users):
        assert as_admin.put('/users/42', json={'display_name': 'x'}).status_code == 404

    def test_admin_account_cannot_be_renamed_or_demoted(self, as_admin, users):
        resp = as_admin.put('/users/1', json={'username': 'old-admin', 'role': 'user'})
        assert resp.status_code == 400
        assert users.get(1)['username'] == 'admin'
        assert users.get(1)['role'] == 'admin'
        # Still protected afterwards.
        assert as_admin.delete('/users/1').status_code == 400

    @pytest.mark.parametrize('change', [{'username': 'root'}, {'role': 'user'}])
    def test_each_protected_field(self, as_admin, users, change):
        assert as_admin.put('/users/1', json=change).status_code == 400

    def test_admin_account_can_change_password_and_display_name(self, as_admin, users):
        resp = as_admin.put('/users/1', json={'password': 'rotated', 'display_name': 'Root', 'role': 'admin'})
        assert resp.status_code == 200
        assert users.get(1)['display_name'] == 'Root'
        assert security.verify_password('rotated', users.get(1)['password_hash'])


class TestDeleteUser:
    """Tests for DELETE /users/{id}."""

    def test_admin_account_cannot_be_deleted(self, as_admin, users):
        resp = as_admin.delete('/users/1')
        assert resp.status_code == 400
        assert resp.json()['error'] == 'The admin account cannot be deleted.'
        assert users.get(1) is not None

    def test_delete_regular_user(self, as_admin, users):
        users.insert(username='bob', display_name='Bob', role='user', password_hash='old')
        assert as_admin.delete('/users/2').json() == {'success': True}
        assert users.get(2) is None

    def test_member_forbidden(self, as_member, users):
        assert as_member.delete('/users/1').status_code == 403
        assert as_member.post('/users', json={'username': 'x', 'password': 'y'}).status_code == 403


class TestDefaultAdmin:
    """Tests for users.service.ensure_default_admin()."""

    def test_seeds_when_missing(self, monkeypatch):
        monkeypatch.setenv('ADMIN_PASSWORD', 'first-run')
        with patch('users.repository.username_exists', new=AsyncMock(return_value=False)), \
                patch('users.repository.create_user', new=AsyncMock(return_value={'id': 1})) as create:
            asyncio.run(users_service.ensure_default_admin())

        kwargs = create.await_args.kwargs
        assert kwargs['username'] == 'admin'
        assert kwargs['role'] == 'admin'
        assert security.verify_password('first-run', kwargs['password_hash'])

    def test_skipped_without_password(self, monkeypatch):
        monkeypatch.delenv('ADMIN_PASSWORD', raising=False)
        with patch('users.repository.username_exists', new=AsyncMock(return_value=False)), \
                patch('users.repository.create_user', new=AsyncMock()) as create:
            asyncio.run(users_service.ensure_default_admin())
        create.assert_not_called()
