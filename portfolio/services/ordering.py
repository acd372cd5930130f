"""
Order Maintenance

Keeps the `order` column of an orderable table dense (0..N-1) across
insert, delete and move. Each structural change issues at most one
range-predicate UPDATE that shifts the affected siblings by one; the row
being inserted or moved is written separately by the caller (or by the
insert_row / move_row / delete_row helpers below).

None of these functions commit. Run them inside
portfolio.services.batch.atomic() together with the row write so the shift
and the write land together or not at all.

Positions are not range-checked: out-of-range values leave the table
non-dense. Callers derive positions from a prior read of the table.
"""

import enum
import logging

from sqlalchemy import func, select, update

from portfolio.extensions import db

logger = logging.getLogger(__name__)


class ShiftOperation(str, enum.Enum):
    INSERT = 'insert'
    UPDATE = 'update'
    DELETE = 'delete'


def _shift(model, column, delta, *criteria):
    stmt = (
        update(model)
        .where(*criteria)
        .values({column: column + delta})
    )
    result = db.session.execute(stmt)
    return result.rowcount


def shift_order(model, new_order=None, old_order=None,
                operation=ShiftOperation.INSERT, order_column=None):
    """Shift sibling rows of `model` to make room for, or close, a position.

    insert: rows with order >= new_order move up by one.
    delete: rows with order > old_order move down by one.
    update: new < old shifts [new, old) up; new > old shifts (old, new] down;
            new == old issues nothing.

    Returns the number of rows shifted.
    """
    operation = ShiftOperation(operation)
    column = order_column if order_column is not None else model.order

    if operation is ShiftOperation.INSERT:
        if new_order is None:
            raise ValueError('insert requires new_order')
        return _shift(model, column, 1, column >= new_order)

    if operation is ShiftOperation.DELETE:
        if old_order is None:
            return 0
        return _shift(model, column, -1, column > old_order)

    if old_order is None or new_order is None or new_order == old_order:
        return 0
    if new_order < old_order:
        return _shift(model, column, 1, column >= new_order, column < old_order)
    return _shift(model, column, -1, column > old_order, column <= new_order)


def reorder_rows(model, items):
    """Write each `{'id', 'order'}` pair as given; no shifting, no density check."""
    count = 0
    for item in items:
        db.session.execute(
            update(model)
            .where(model.id == item['id'])
            .values(order=item['order'])
        )
        count += 1
    logger.info('Reordered %d %s rows', count, model.__tablename__)
    return count


def next_order(model):
    """Append position, i.e. the current row count."""
    return db.session.scalar(select(func.count()).select_from(model)) or 0


def insert_row(row, position=None):
    """Open `position` (default: append) and add `row` there."""
    model = type(row)
    if position is None:
        position = next_order(model)
    shifted = shift_order(model, new_order=position, operation=ShiftOperation.INSERT)
    row.order = position
    db.session.add(row)
    return shifted


def move_row(row, new_order):
    """Move a persisted row to `new_order`.

    `row.order` must still hold the stored position when this is called:
    setting it beforehand would let autoflush write it ahead of the shift.
    """
    old_order = row.order
    if new_order == old_order:
        return 0
    shifted = shift_order(type(row), new_order=new_order, old_order=old_order,
                          operation=ShiftOperation.UPDATE)
    row.order = new_order
    return shifted


def delete_row(row):
    """Delete `row` and close the gap it leaves."""
    model = type(row)
    old_order = row.order
    db.session.delete(row)
    db.session.flush()
    return shift_order(model, old_order=old_order, operation=ShiftOperation.DELETE)
