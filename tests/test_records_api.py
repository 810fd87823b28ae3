"""API tests for the generic records endpoints (/records, /getData)."""
from unittest.mock import AsyncMock, patch

import pytest

from records import schemas as records_schemas
from records import service as records_service


def test_every_allowed_table_has_a_handler():
    assert set(records_service.HANDLERS) == set(records_schemas.ALLOWED_TABLES)


class TestTableAllowlist:
    """Unknown tables are refused before anything touches the store."""

    @pytest.mark.parametrize('table', ['sessions', 'users; DROP TABLE users', 'pg_user', 'UPDATES'])
    def test_rejected(self, as_admin, table):
        with patch('core.db.fetch_one', new=AsyncMock()) as fetch_one, \
                patch('core.db.fetch_all', new=AsyncMock()) as fetch_all, \
                patch('core.db.execute', new=AsyncMock()) as execute:
            resp = as_admin.post('/records', json={'action': 'save', 'table': table, 'data': {'x': 1}})

        assert resp.status_code == 400
        assert resp.json() == {'success': False, 'error': 'Invalid table'}
        fetch_one.assert_not_called()
        fetch_all.assert_not_called()
        execute.assert_not_called()

    def test_member_cannot_write(self, as_member):
        resp = as_member.post('/records', json={'action': 'delete', 'table': 'updates', 'id': 1})
        assert resp.status_code == 403

    def test_unknown_action(self, as_admin):
        resp = as_admin.post('/records', json={'action': 'truncate', 'table': 'updates'})
        assert resp.status_code == 422


class TestSave:
    """save dispatches to insert or partial update on the presence of data.id."""

    def test_insert_without_id(self, as_admin):
        row = {'id': 9, 'topic': 'Hello', 'badge': 'general', 'message': '', 'author': 'Administrator'}
        with patch('updates.repository.create_update', new=AsyncMock(return_value=row)) as create, \
                patch('updates.repository.edit_update', new=AsyncMock()) as edit:
            resp = as_admin.post('/records', json={'action': 'save', 'table': 'updates', 'data': {'topic': 'Hello'}})

        assert resp.status_code == 200
        body = resp.json()
        assert body['success'] is True
        assert body['id'] == 9
        create.assert_awaited_once_with(topic='Hello', badge='general', message='', author='Administrator')
        edit.assert_not_called()

    def test_update_with_id(self, as_admin):
        row = {'id': 4, 'name': 'Tools', 'icon': 'fa-tools'}
        with patch('categories.repository.edit_category', new=AsyncMock(return_value=row)) as edit, \
                patch('categories.repository.create_category', new=AsyncMock()) as create:
            resp = as_admin.post(
                '/records',
                json={'action': 'save', 'table': 'categories', 'data': {'id': 4, 'icon': 'fa-tools'}},
            )

        assert resp.status_code == 200
        assert resp.json()['id'] == 4
        edit.assert_awaited_once_with(4, {'icon': 'fa-tools'})
        create.assert_not_called()

    def test_learning_item_defaults_to_pdf(self, as_admin):
        row = {'id': 3, 'name': 'Guide', 'type': 'pdf', 'link': 'https://x/guide.pdf',
               'content': None, 'folder_id': None, 'marked': False}
        with patch('files.repository.create_item', new=AsyncMock(return_value=row)) as create:
            resp = as_admin.post(
                '/records',
                json={'action': 'save', 'table': 'learning_items',
                      'data': {'name': 'Guide', 'link': 'https://x/guide.pdf'}},
            )

        assert resp.status_code == 200
        create.assert_awaited_once_with(
            name='Guide', item_type='pdf', link='https://x/guide.pdf', content=None, folder_id=None,
        )

    def test_invalid_data_rejected(self, as_admin):
        with patch('updates.repository.create_update', new=AsyncMock()) as create:
            resp = as_admin.post(
                '/records',
                json={'action': 'save', 'table': 'updates', 'data': {'topic': 'x', 'badge': 'urgent'}},
            )
        assert resp.status_code == 422
        create.assert_not_called()


class TestDelete:
    """delete requires an id and reuses each resource's delete rules."""

    def test_missing_id(self, as_admin):
        resp = as_admin.post('/records', json={'action': 'delete', 'table': 'updates'})
        assert resp.status_code == 400
        assert resp.json()['error'] == 'Missing id'

    def test_category_delete_cascades(self, as_admin):
        with patch('categories.repository.delete_category_cascade', new=AsyncMock(return_value=(True, 3))):
            resp = as_admin.post('/records', json={'action': 'delete', 'table': 'categories', 'id': 2})
        assert resp.json() == {'success': True, 'cards_deleted': 3}

    def test_admin_account_protected(self, as_admin):
        admin_row = {'id': 1, 'username': 'admin', 'display_name': 'Administrator', 'role': 'admin'}
        with patch('users.repository.get_user', new=AsyncMock(return_value=admin_row)), \
                patch('users.repository.delete_user', new=AsyncMock()) as delete:
            resp = as_admin.post('/records', json={'action': 'delete', 'table': 'users', 'id': 1})
        assert resp.status_code == 400
        delete.assert_not_called()


class TestSnapshot:
    """Tests for GET /getData."""

    @pytest.fixture
    def stores(self):
        users = [{'id': 1, 'username': 'admin', 'display_name': 'Administrator', 'role': 'admin'}]
        with patch('updates.repository.list_updates', new=AsyncMock(return_value=[{'id': 1, 'badge': 'info'}])), \
                patch('categories.repository.list_categories', new=AsyncMock(return_value=[])), \
                patch('info.repository.list_cards', new=AsyncMock(return_value=[])), \
                patch('files.repository.list_folders', new=AsyncMock(return_value=[])), \
                patch('files.repository.list_all_items', new=AsyncMock(return_value=[])), \
                patch('users.repository.list_users', new=AsyncMock(return_value=users)) as list_users:
            yield list_users

    def test_admin_sees_users(self, as_admin, stores):
        body = as_admin.get('/getData').json()
        assert set(body) == {'updates', 'categories', 'info_cards', 'learning_items', 'folders', 'users'}
        assert len(body['users']) == 1
        assert body['updates'][0]['badge_label'] == '🟢 Info'

    def test_member_gets_no_users(self, as_member, stores):
        body = as_member.get('/records').json()
        assert body['users'] == []
        stores.assert_not_called()
