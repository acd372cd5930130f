"""
Thumbnail Uploads

Stores an uploaded thumbnail in the blob store and returns the ids the caller
needs for the `image` row it inserts in the same batch as the parent record.
"""

import logging

from portfolio.extensions import blob_store
from portfolio.models.base import new_uuid

logger = logging.getLogger(__name__)


def upload_thumbnail(file, store=None):
    """Return `(thumbnail_id, kv_id)`, or `(None, None)` when there is no file."""
    if file is None or not getattr(file, 'filename', None):
        return None, None

    data = file.read()
    if not data:
        return None, None

    store = store or blob_store
    kv_id = new_uuid()
    store.put(kv_id, data, file.mimetype)
    logger.info('Uploaded thumbnail %s (%s, %d bytes)', kv_id, file.mimetype, len(data))
    return new_uuid(), kv_id
