"""API tests for categories and info cards.

Both repositories share one in-memory fake so the category -> card cascade
can be observed through the public endpoints.
"""
from contextlib import ExitStack
from unittest.mock import patch

import pytest

from conftest import FakeTable


class FakeDirectoryStore:
    def __init__(self):
        self.categories = FakeTable(icon='fa-folder')
        self.cards = FakeTable(image=None)

    # categories
    async def list_categories(self):
        return self.categories.where()

    async def get_category(self, category_id):
        return self.categories.get(category_id)

    async def get_category_by_name(self, name):
        wanted = (name or '').strip().lower()
        for row in self.categories.where():
            if row['name'].lower() == wanted:
                return row
        return None

    async def create_category(self, *, name, icon):
        return self.categories.insert(name=name, icon=icon)

    async def edit_category(self, category_id, fields):
        return self.categories.update(category_id, fields)

    async def delete_category_cascade(self, category_id):
        cards = self.cards.where(category_id=category_id)
        for card in cards:
            self.cards.delete(card['id'])
        return self.categories.delete(category_id), len(cards)

    # cards
    async def list_cards(self, *, category_id=None):
        if category_id is None:
            return self.cards.where()
        return self.cards.where(category_id=category_id)

    async def get_card(self, card_id):
        return self.cards.get(card_id)

    async def create_card(self, **columns):
        return self.cards.insert(**columns)

    async def edit_card(self, card_id, fields):
        return self.cards.update(card_id, fields)

    async def delete_card(self, card_id):
        return self.cards.delete(card_id)


_CATEGORY_FNS = ['list_categories', 'get_category', 'get_category_by_name', 'create_category',
                 'edit_category', 'delete_category_cascade']
_CARD_FNS = ['list_cards', 'get_card', 'create_card', 'edit_card', 'delete_card']


@pytest.fixture
def store():
    fake = FakeDirectoryStore()
    with ExitStack() as stack:
        for name in _CATEGORY_FNS:
            stack.enter_context(patch(f'categories.repository.{name}', new=getattr(fake, name)))
        for name in _CARD_FNS:
            stack.enter_context(patch(f'info.repository.{name}', new=getattr(fake, name)))
        yield fake


class TestCategoryCascade:
    """Deleting a category removes its info cards."""

    def test_create_list_delete_scenario(self, as_admin, store):
        category = as_admin.post('/categories', json={'name': 'Tools', 'icon': 'fa-wrench'}).json()
        assert category['success'] is True
        category_id = category['id']

        card = as_admin.post(
            '/info',
            json={'category_id': category_id, 'title': 'Wiki', 'link': 'https://wiki.example'},
        )
        assert card.status_code == 200
        assert card.json()['item']['display_type'] == 'icon'

        listing = as_admin.get('/info', params={'category_id': category_id}).json()
        assert listing['count'] == 1
        assert listing['items'][0]['title'] == 'Wiki'

        deleted = as_admin.delete(f'/categories/{category_id}').json()
        assert deleted == {'success': True, 'cards_deleted': 1}

        listing = as_admin.get('/info', params={'category_id': category_id}).json()
        assert listing == {'items': [], 'count': 0}

    def test_delete_unknown_category(self, as_admin, store):
        resp = as_admin.delete('/categories/404')
        assert resp.status_code == 404
        assert resp.json()['error'] == 'Category not found.'

    def test_member_cannot_delete(self, as_member, store):
        store.categories.insert(name='Tools')
        assert as_member.delete('/categories/1').status_code == 403
        assert store.categories.get(1) is not None


class TestInfoCards:
    """Tests for /info."""

    @pytest.fixture
    def seeded(self, store):
        store.categories.insert(name='Tools', icon='fa-wrench')
        store.categories.insert(name='HR', icon='fa-users')
        store.cards.insert(category_id=1, title='Wiki', display_type='icon', icon='fas fa-book', link='https://wiki.example')
        store.cards.insert(category_id=2, title='Payroll', display_type='icon', icon='fas fa-money', link='https://pay.example')
        return store

    def test_filter_by_category_name_is_case_insensitive(self, as_member, seeded):
        body = as_member.get('/info', params={'category': 'tools'}).json()
        assert [c['title'] for c in body['items']] == ['Wiki']

    def test_unknown_category_name_gives_empty_list(self, as_member, seeded):
        assert as_member.get('/info', params={'category': 'Nope'}).json() == {'items': [], 'count': 0}

    def test_unfiltered(self, as_member, seeded):
        assert as_member.get('/info').json()['count'] == 2

    def test_create_requires_existing_category(self, as_admin, seeded):
        resp = as_admin.post('/info', json={'category_id': 99, 'title': 'x'})
        assert resp.status_code == 404

    def test_image_card(self, as_admin, seeded):
        resp = as_admin.post(
            '/info',
            json={'categoryId': 1, 'title': 'Logo', 'image': 'data:image/png;base64,iVBORw0KGgo='},
        )
        assert resp.status_code == 200
        assert resp.json()['item']['display_type'] == 'image'

    def test_image_mode_without_image_rejected(self, as_admin, seeded):
        resp = as_admin.post('/info', json={'category_id': 1, 'title': 'x', 'display_type': 'image'})
        assert resp.status_code == 422

    def test_bad_image_reference_rejected(self, as_admin, seeded):
        resp = as_admin.post('/info', json={'category_id': 1, 'title': 'x', 'image': 'javascript:alert(1)'})
        assert resp.status_code == 422

    def test_partial_edit_keeps_other_fields(self, as_admin, seeded):
        before = seeded.cards.get(1)
        resp = as_admin.put('/info/1', json={'title': 'Team wiki'})
        after = resp.json()['item']
        assert after['title'] == 'Team wiki'
        assert after['link'] == before['link']
        assert after['icon'] == before['icon']

    def test_dropping_image_switches_back_to_icon(self, as_admin, seeded):
        seeded.cards.update(1, {'image': 'https://img.example/a.png', 'display_type': 'image'})
        after = as_admin.put('/info/1', json={'image': None}).json()['item']
        assert after['image'] is None
        assert after['display_type'] == 'icon'

    def test_delete_card(self, as_admin, seeded):
        assert as_admin.delete('/info/2').json() == {'success': True}
        assert as_admin.get('/info/2').status_code == 404

    @pytest.mark.parametrize('name', ['²', '١٢'])
    def test_non_ascii_digit_category_is_a_name(self, as_member, seeded, name):
        resp = as_member.get('/info', params={'category': name})
        assert resp.status_code == 200
        assert resp.json() == {'items': [], 'count': 0}

    def test_ascii_digit_category_is_an_id(self, as_member, seeded):
        body = as_member.get('/info', params={'category': '2'}).json()
        assert [c['title'] for c in body['items']] == ['Payroll']
