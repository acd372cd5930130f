"""
Blob Storage

Key-value store for uploaded image bytes. The database only keeps the key
(`Image.kv_id`); the bytes and their content type live here.
"""

import json
import logging
import os
from collections import namedtuple

from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)

StoredBlob = namedtuple('StoredBlob', ['key', 'data', 'content_type'])


class BlobStoreError(Exception):
    """Raised when the blob store is unavailable or a key is unusable."""


def normalize_key(key):
    """Return a filesystem-safe version of `key`, rejecting empty results."""
    safe = secure_filename(key or '')
    if not safe:
        raise BlobStoreError(f'Invalid blob key: {key!r}')
    return safe


class BlobStore:
    """Interface: put/get by key."""

    def put(self, key, data, content_type=None):
        raise NotImplementedError

    def get(self, key):
        raise NotImplementedError

    def exists(self, key):
        return self.get(key) is not None


class MemoryBlobStore(BlobStore):
    """Dict-backed store, used in tests."""

    def __init__(self):
        self._blobs = {}

    def put(self, key, data, content_type=None):
        key = normalize_key(key)
        self._blobs[key] = StoredBlob(key, bytes(data), content_type)
        return key

    def get(self, key):
        return self._blobs.get(normalize_key(key))

    def exists(self, key):
        return normalize_key(key) in self._blobs


class FilesystemBlobStore(BlobStore):
    """One file per key under `root`; content types live in `root/.meta/<key>.json`.

    normalize_key strips leading dots, so no key can resolve to the `.meta`
    directory or to anything inside it.
    """

    META_DIR = '.meta'

    def __init__(self, root):
        self.root = root
        os.makedirs(os.path.join(root, self.META_DIR), exist_ok=True)

    def _path(self, key):
        return os.path.join(self.root, key)

    def _meta_path(self, key):
        return os.path.join(self.root, self.META_DIR, key + '.json')

    def put(self, key, data, content_type=None):
        key = normalize_key(key)
        with open(self._path(key), 'wb') as fh:
            fh.write(data)
        with open(self._meta_path(key), 'w', encoding='utf-8') as fh:
            json.dump({'contentType': content_type}, fh)
        logger.info('Stored blob %s (%d bytes)', key, len(data))
        return key

    def get(self, key):
        key = normalize_key(key)
        path = self._path(key)
        if not os.path.isfile(path):
            return None
        with open(path, 'rb') as fh:
            data = fh.read()
        content_type = None
        meta_path = self._meta_path(key)
        if os.path.isfile(meta_path):
            with open(meta_path, encoding='utf-8') as fh:
                content_type = json.load(fh).get('contentType')
        return StoredBlob(key, data, content_type)

    def exists(self, key):
        return os.path.isfile(self._path(normalize_key(key)))


class BlobStoreExtension:
    """Flask extension wrapper so the store is configured per app."""

    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        backend = app.config.get('BLOB_STORE_BACKEND', 'filesystem')
        if backend == 'memory':
            store = MemoryBlobStore()
        elif backend == 'filesystem':
            store = FilesystemBlobStore(app.config['BLOB_STORE_PATH'])
        else:
            raise BlobStoreError(f'Unknown blob store backend: {backend}')
        app.extensions['blob_store'] = store

    @property
    def store(self):
        from flask import current_app
        store = current_app.extensions.get('blob_store')
        if store is None:
            raise BlobStoreError('Blob storage unavailable')
        return store

    def put(self, key, data, content_type=None):
        return self.store.put(key, data, content_type)

    def get(self, key):
        return self.store.get(key)

    def exists(self, key):
        return self.store.exists(key)
