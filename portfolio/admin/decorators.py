"""
Admin Decorators and Helpers
"""

import json

from flask import jsonify, request

from portfolio.auth.roles import role_required
from portfolio.extensions import db
from portfolio.models import Image
from portfolio.models.enums import Role
from portfolio.services import upload_thumbnail

admin_required = role_required(Role.ADMIN)


def json_error(message, status=400, **extra):
    body = {'error': message}
    body.update(extra)
    return jsonify(body), status


def read_json_upload(field='file'):
    """Parse the uploaded JSON file in `field`.

    Returns (data, None) on success or (None, error_response).
    """
    upload = request.files.get(field)
    if upload is None or not upload.filename:
        return None, json_error('JSON file is required')
    try:
        return json.loads(upload.read().decode('utf-8')), None
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None, json_error('Invalid JSON file')


def parse_json_field(raw):
    """Parse a JSON string form field; returns (data, error_message)."""
    if not raw:
        return None, None
    try:
        return json.loads(raw), None
    except json.JSONDecodeError:
        return None, 'Invalid JSON data'


def stage_thumbnail():
    """Upload the `thumbnail` file and stage its image row; returns the image id or None."""
    thumbnail_id, kv_id = upload_thumbnail(request.files.get('thumbnail'))
    if thumbnail_id:
        db.session.add(Image(id=thumbnail_id, kv_id=kv_id))
        db.session.flush()
    return thumbnail_id
