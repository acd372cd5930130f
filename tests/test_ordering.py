import pytest

from portfolio.extensions import db
from portfolio.models import Skill, Sns
from portfolio.services import (
    ShiftOperation, delete_row, insert_row, move_row, next_order, reorder_rows, shift_order
)


def _seed(count, model=Sns):
    rows = []
    for i in range(count):
        if model is Sns:
            row = Sns(name=f'sns{i}', icon='i', url=f'https://example.com/{i}', color='#fff', order=i)
        else:
            row = Skill(name=f'skill{i}', icon='i', confidence=3, order=i)
        db.session.add(row)
        rows.append(row)
    db.session.commit()
    return [r.id for r in rows]


def _orders(model=Sns):
    db.session.expire_all()
    return {row.id: row.order for row in model.query.all()}


def _order_values(model=Sns):
    return sorted(_orders(model).values())


@pytest.mark.parametrize('position', [0, 2, 5])
def test_insert_keeps_orders_dense(ctx, position):
    ids = _seed(5)
    row = Sns(name='new', icon='i', url='https://example.com/new', color='#000')

    insert_row(row, position)
    db.session.commit()

    orders = _orders()
    assert sorted(orders.values()) == list(range(6))
    assert orders[row.id] == position
    for old_position, row_id in enumerate(ids):
        expected = old_position + 1 if old_position >= position else old_position
        assert orders[row_id] == expected


def test_insert_without_position_appends(ctx):
    _seed(3)
    row = Sns(name='new', icon='i', url='https://example.com/new', color='#000')

    insert_row(row)
    db.session.commit()

    assert _orders()[row.id] == 3
    assert next_order(Sns) == 4


def test_append_shift_touches_no_rows(ctx):
    ids = _seed(4)
    before = {r.id: r.updated_at for r in Sns.query.all()}

    shifted = shift_order(Sns, new_order=4, operation=ShiftOperation.INSERT)
    db.session.add(Sns(name='tail', icon='i', url='https://example.com/t', color='#000', order=4))
    db.session.commit()

    assert shifted == 0
    db.session.expire_all()
    for row_id in ids:
        assert db.session.get(Sns, row_id).updated_at == before[row_id]
    assert _order_values() == [0, 1, 2, 3, 4]


@pytest.mark.parametrize('position', [0, 2, 4])
def test_delete_compacts_orders(ctx, position):
    ids = _seed(5)

    delete_row(db.session.get(Sns, ids[position]))
    db.session.commit()

    orders = _orders()
    assert ids[position] not in orders
    assert sorted(orders.values()) == [0, 1, 2, 3]
    for old_position, row_id in enumerate(ids):
        if old_position < position:
            assert orders[row_id] == old_position
        elif old_position > position:
            assert orders[row_id] == old_position - 1


def test_delete_without_old_order_is_noop(ctx):
    _seed(3)
    assert shift_order(Sns, old_order=None, operation=ShiftOperation.DELETE) == 0
    assert _order_values() == [0, 1, 2]


def test_move_to_same_position_issues_nothing(ctx):
    ids = _seed(5)
    row = db.session.get(Sns, ids[2])

    assert shift_order(Sns, new_order=2, old_order=2, operation=ShiftOperation.UPDATE) == 0
    assert move_row(row, 2) == 0
    db.session.commit()

    assert _orders() == {row_id: i for i, row_id in enumerate(ids)}


def test_move_toward_front(ctx):
    ids = _seed(5)

    shifted = move_row(db.session.get(Sns, ids[4]), 1)
    db.session.commit()

    orders = _orders()
    assert shifted == 3
    assert orders[ids[4]] == 1
    assert [orders[ids[1]], orders[ids[2]], orders[ids[3]]] == [2, 3, 4]
    assert orders[ids[0]] == 0
    assert sorted(orders.values()) == [0, 1, 2, 3, 4]


def test_move_toward_back(ctx):
    ids = _seed(5)

    shifted = move_row(db.session.get(Sns, ids[0]), 3)
    db.session.commit()

    orders = _orders()
    assert shifted == 3
    assert orders[ids[0]] == 3
    assert [orders[ids[1]], orders[ids[2]], orders[ids[3]]] == [0, 1, 2]
    assert orders[ids[4]] == 4
    assert sorted(orders.values()) == [0, 1, 2, 3, 4]


def test_move_leaves_rows_outside_range_alone(ctx):
    ids = _seed(6)
    untouched = {row_id: db.session.get(Sns, row_id).updated_at for row_id in (ids[0], ids[5])}

    move_row(db.session.get(Sns, ids[3]), 1)
    db.session.commit()

    db.session.expire_all()
    for row_id, stamp in untouched.items():
        assert db.session.get(Sns, row_id).updated_at == stamp


def test_shift_only_affects_its_own_table(ctx):
    _seed(3, Sns)
    skill_ids = _seed(3, Skill)

    shift_order(Sns, new_order=0, operation=ShiftOperation.INSERT)
    db.session.commit()

    assert _order_values(Sns) == [1, 2, 3]
    assert _orders(Skill) == {row_id: i for i, row_id in enumerate(skill_ids)}


def test_shift_accepts_explicit_column_and_string_operation(ctx):
    _seed(3, Skill)

    shifted = shift_order(Skill, new_order=1, operation='insert', order_column=Skill.order)
    db.session.commit()

    assert shifted == 2
    assert _order_values(Skill) == [0, 2, 3]


def test_insert_requires_position(ctx):
    with pytest.raises(ValueError):
        shift_order(Sns, operation=ShiftOperation.INSERT)


def test_out_of_range_positions_are_not_validated(ctx):
    _seed(3)

    move_row(db.session.get(Sns, Sns.query.filter_by(order=0).one().id), 7)
    db.session.commit()

    # rows 1 and 2 slid down, the moved row sits past the end
    assert _order_values() == [0, 1, 7]


def test_reorder_rows_applies_permutation(ctx):
    ids = _seed(4)
    permutation = [2, 0, 3, 1]

    count = reorder_rows(Sns, [{'id': row_id, 'order': o} for row_id, o in zip(ids, permutation)])
    db.session.commit()

    assert count == 4
    ordered_ids = [row.id for row in Sns.query.order_by(Sns.order).all()]
    expected = [row_id for _, row_id in sorted(zip(permutation, ids))]
    assert ordered_ids == expected


def test_reorder_rows_accepts_non_permutation(ctx):
    ids = _seed(2)

    reorder_rows(Sns, [{'id': ids[0], 'order': 5}, {'id': ids[1], 'order': 5}])
    db.session.commit()

    assert _order_values() == [5, 5]
