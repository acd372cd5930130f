import io
import json

import pytest

from conftest import create_user, orders_by_id, seed_sns, sign_in

from portfolio.extensions import db
from portfolio.models import Award, AwardStatus, Role, Skill, Sns


def _sns_form(**overrides):
    form = {'name': 'GitHub', 'icon': 'github', 'url': 'https://github.com/x', 'color': '#333'}
    form.update(overrides)
    return form


def _upload(payload, name='data.json'):
    return {'file': (io.BytesIO(json.dumps(payload).encode('utf-8')), name)}


def test_list_requires_sign_in(client):
    response = client.get('/dashboard/sns')
    assert response.status_code == 302
    assert '/dashboard/signin' in response.headers['Location']


def test_list_requires_admin(app, client):
    sign_in(client, app, create_user(app, Role.USER))
    assert client.get('/dashboard/sns').status_code == 403


def test_list_is_ordered(app, admin_client):
    ids = seed_sns(app, 3)
    with app.app_context():
        db.session.get(Sns, ids[0]).order = 2
        db.session.get(Sns, ids[2]).order = 0
        db.session.commit()

    response = admin_client.get('/dashboard/sns')
    assert response.status_code == 200
    assert [i['id'] for i in response.get_json()['items']] == [ids[2], ids[1], ids[0]]


def test_unknown_collection_is_404(admin_client):
    assert admin_client.get('/dashboard/widgets').status_code == 404


def test_create_appends_by_default(app, admin_client):
    seed_sns(app, 2)

    response = admin_client.post('/dashboard/sns/create', data=_sns_form())
    assert response.status_code == 201
    item = response.get_json()['item']
    assert item['order'] == 2
    assert sorted(orders_by_id(app, Sns).values()) == [0, 1, 2]


def test_create_at_position_shifts_siblings(app, admin_client):
    ids = seed_sns(app, 3)

    response = admin_client.post('/dashboard/sns/create', data=_sns_form(order='1'))
    assert response.status_code == 201
    new_id = response.get_json()['item']['id']

    orders = orders_by_id(app, Sns)
    assert orders[new_id] == 1
    assert [orders[i] for i in ids] == [0, 2, 3]


def test_create_blank_order_appends(app, admin_client):
    seed_sns(app, 1)
    response = admin_client.post('/dashboard/sns/create', data=_sns_form(order='', id=''))
    assert response.status_code == 201
    assert response.get_json()['item']['order'] == 1


def test_create_validation_error(app, admin_client):
    response = admin_client.post('/dashboard/sns/create', data={'name': 'x'})
    assert response.status_code == 400
    assert 'url' in response.get_json()['details']
    assert orders_by_id(app, Sns) == {}


def test_create_duplicate_id_rolls_back_shift(app, admin_client):
    ids = seed_sns(app, 2)

    response = admin_client.post('/dashboard/sns/create', data=_sns_form(id=ids[1], order='0'))
    assert response.status_code == 409
    orders = orders_by_id(app, Sns)
    assert [orders[i] for i in ids] == [0, 1]


def test_skill_confidence_range(admin_client):
    response = admin_client.post('/dashboard/skills/create',
                                 data={'name': 'Python', 'icon': 'py', 'confidence': '9'})
    assert response.status_code == 400
    assert 'confidence' in response.get_json()['details']


def test_award_status_is_validated(app, admin_client):
    bad = admin_client.post('/dashboard/awards/create', data={'name': 'Prize', 'status': 'Platinum'})
    assert bad.status_code == 400

    good = admin_client.post('/dashboard/awards/create', data={'name': 'Prize', 'status': 'Gold'})
    assert good.status_code == 201
    assert good.get_json()['item']['status'] == 'Gold'
    with app.app_context():
        assert Award.query.one().status is AwardStatus.GOLD


@pytest.mark.parametrize('start,target,expected', [
    (4, 1, [0, 2, 3, 4, 1]),
    (0, 3, [3, 0, 1, 2, 4]),
    (2, 2, [0, 1, 2, 3, 4]),
])
def test_update_moves_row(app, admin_client, start, target, expected):
    ids = seed_sns(app, 5)

    response = admin_client.post('/dashboard/sns/update',
                                 data=_sns_form(id=ids[start], order=str(target), name='moved'))
    assert response.status_code == 200
    assert response.get_json()['item']['name'] == 'moved'

    orders = orders_by_id(app, Sns)
    assert [orders[i] for i in ids] == expected


def test_update_without_order_keeps_position(app, admin_client):
    ids = seed_sns(app, 3)
    response = admin_client.post('/dashboard/sns/update', data=_sns_form(id=ids[1], color='#f00'))
    assert response.status_code == 200
    assert orders_by_id(app, Sns)[ids[1]] == 1


def test_update_requires_id(admin_client):
    response = admin_client.post('/dashboard/sns/update', data=_sns_form())
    assert response.status_code == 400


def test_update_missing_row(admin_client):
    response = admin_client.post('/dashboard/sns/update', data=_sns_form(id='missing', order='0'))
    assert response.status_code == 404


def test_delete_compacts(app, admin_client):
    ids = seed_sns(app, 4)

    response = admin_client.post('/dashboard/sns/delete', data={'id': ids[1]})
    assert response.status_code == 200

    orders = orders_by_id(app, Sns)
    assert ids[1] not in orders
    assert [orders[ids[0]], orders[ids[2]], orders[ids[3]]] == [0, 1, 2]


def test_delete_requires_id(admin_client):
    assert admin_client.post('/dashboard/sns/delete', data={}).status_code == 400


def test_delete_missing_row(admin_client):
    assert admin_client.post('/dashboard/sns/delete', data={'id': 'missing'}).status_code == 404


def test_reorder_writes_orders_as_given(app, admin_client):
    ids = seed_sns(app, 3)
    items = [{'id': ids[0], 'order': 2}, {'id': ids[1], 'order': 0}, {'id': ids[2], 'order': 1}]

    response = admin_client.post('/dashboard/sns/reorder', data={'items': json.dumps(items)})
    assert response.status_code == 200
    assert response.get_json()['reordered'] == 3
    orders = orders_by_id(app, Sns)
    assert [orders[i] for i in ids] == [2, 0, 1]


def test_reorder_requires_items(admin_client):
    assert admin_client.post('/dashboard/sns/reorder', data={}).status_code == 400


def test_reorder_rejects_bad_json(admin_client):
    response = admin_client.post('/dashboard/sns/reorder', data={'items': '[{'})
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Invalid JSON data'


def test_reorder_rejects_malformed_items(admin_client):
    response = admin_client.post('/dashboard/sns/reorder', data={'items': json.dumps([{'id': 'x'}])})
    assert response.status_code == 400


def test_import_replaces_rows(app, admin_client):
    seed_sns(app, 2)
    payload = [
        {'name': f'skill{i}', 'icon': 'i', 'confidence': 3, 'order': i} for i in range(25)
    ]

    response = admin_client.post('/dashboard/skills/import', data=_upload(payload),
                                 content_type='multipart/form-data')
    assert response.status_code == 200
    assert response.get_json()['imported'] == 25
    assert sorted(orders_by_id(app, Skill).values()) == list(range(25))
    # other collections are untouched
    assert len(orders_by_id(app, Sns)) == 2


def test_import_invalid_payload_keeps_rows(app, admin_client):
    seed_sns(app, 2)
    payload = [{'name': 'x', 'order': 0}]

    response = admin_client.post('/dashboard/sns/import', data=_upload(payload),
                                 content_type='multipart/form-data')
    assert response.status_code == 400
    assert len(orders_by_id(app, Sns)) == 2


def test_import_requires_file(admin_client):
    response = admin_client.post('/dashboard/sns/import', data={}, content_type='multipart/form-data')
    assert response.status_code == 400
    assert response.get_json()['error'] == 'JSON file is required'


def test_import_rejects_non_json_file(admin_client):
    data = {'file': (io.BytesIO(b'not json'), 'data.json')}
    response = admin_client.post('/dashboard/sns/import', data=data, content_type='multipart/form-data')
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Invalid JSON file'
