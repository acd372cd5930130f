"""
Atomic Batches

Composite writes (order shift + row write, image row + parent row,
delete-all + bulk insert) are grouped so they commit together or not at all.
"""

from contextlib import contextmanager

from portfolio.extensions import db


@contextmanager
def atomic():
    """Commit the session on success; roll back and re-raise on any error."""
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise


def chunked(items, size=20):
    """Yield successive `size`-long slices of `items`."""
    items = list(items)
    for start in range(0, len(items), size):
        yield items[start:start + size]
