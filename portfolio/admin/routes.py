"""
Admin Routes

Overview, personal settings, user roles, image uploads and the backup export.
"""

import hmac
import logging

from flask import current_app, jsonify, request
from flask_login import current_user, login_required

from portfolio.admin import admin_bp
from portfolio.admin.decorators import admin_required, json_error
from portfolio.admin.menu import menu_for
from portfolio.auth.roles import can_assign_role, role_is_over
from portfolio.extensions import blob_store, db
from portfolio.models import Blog, Image, Role, User, Work, ORDERABLE_MODELS
from portfolio.models.base import isoformat
from portfolio.schemas import RoleUpdateSchema, UserSettingsSchema, validate_request_data
from portfolio.services import atomic, build_export, export_filename
from portfolio.storage import BlobStoreError, normalize_key

logger = logging.getLogger(__name__)


@admin_bp.route('/dashboard')
@login_required
def overview():
    """Dashboard overview with the menu visible to the current role."""
    counts = {
        'works': Work.query.count(),
        'blogs': Blog.query.count(),
        'images': Image.query.count(),
        'users': User.query.count(),
    }
    for model in ORDERABLE_MODELS:
        counts[model.__tablename__] = model.query.count()

    return jsonify({
        'user': current_user.to_dict(),
        'menu': menu_for(current_user.role),
        'counts': counts,
    })


@admin_bp.route('/dashboard/settings', methods=['GET', 'POST'])
@login_required
def settings():
    """Let any signed-in user change their display name."""
    if request.method == 'POST':
        is_valid, data = validate_request_data(UserSettingsSchema, request.form)
        if not is_valid:
            return json_error('Validation failed', details=data)
        with atomic():
            current_user.display_name = data['display_name'] or None
        return jsonify({'success': True, 'user': current_user.to_dict()})

    return jsonify({'displayName': current_user.display_name or ''})


# -----------------------------------------------------------------------------
# Users
# -----------------------------------------------------------------------------

@admin_bp.route('/dashboard/users')
@admin_required
def list_users():
    users = User.query.order_by(User.username).all()
    return jsonify({'users': [u.to_dict() for u in users]})


@admin_bp.route('/dashboard/users/role', methods=['POST'])
@admin_required
def update_role():
    """Change a user's role, subject to the owner/admin rules."""
    is_valid, data = validate_request_data(RoleUpdateSchema, request.form)
    if not is_valid:
        return json_error('Missing userId or role', details=data)

    target = db.session.get(User, data['user_id'])
    if target is None:
        return json_error('User not found', 404)

    allowed, message = can_assign_role(current_user.role, target.role, data['role'])
    if not allowed:
        return json_error(message, 403)

    with atomic():
        target.role = Role(data['role'])

    logger.info('User %s changed role of %s to %s', current_user.username, target.username, data['role'])
    return jsonify({'success': True, 'user': target.to_dict()})


# -----------------------------------------------------------------------------
# Images
# -----------------------------------------------------------------------------

@admin_bp.route('/dashboard/images')
@admin_required
def list_images():
    """Uploaded images, newest first."""
    images = Image.query.order_by(Image.created_at.desc()).all()
    return jsonify({'images': [{'id': i.id, 'createdAt': isoformat(i.created_at)} for i in images]})


@admin_bp.route('/dashboard/images', methods=['POST'])
@admin_required
def upload_image():
    """Store an image under its file name; existing names are rejected."""
    upload = request.files.get('image')
    if upload is None or not upload.filename:
        return json_error('No file uploaded')

    data = upload.read()
    if not data:
        return json_error('No file uploaded')

    try:
        key = normalize_key(upload.filename)
    except BlobStoreError as e:
        return json_error(str(e))
    if blob_store.exists(key):
        return json_error('File already exists')

    blob_store.put(key, data, upload.mimetype)
    image = Image(kv_id=key)
    with atomic():
        db.session.add(image)

    logger.info('Uploaded image %s as %s', key, image.id)
    return jsonify({'success': True, 'image': image.to_dict()}), 201


# -----------------------------------------------------------------------------
# Backup export
# -----------------------------------------------------------------------------

def _has_backup_key():
    expected = current_app.config.get('BACKUP_API_KEY')
    supplied = request.headers.get('Authorization', '')
    return bool(expected) and hmac.compare_digest(supplied, f'Bearer {expected}')


@admin_bp.route('/dashboard/api/admin/export')
def export_backup():
    """Full JSON backup; accepts the backup API key or an admin session."""
    if not _has_backup_key():
        if not current_user.is_authenticated or not role_is_over(Role.ADMIN, current_user.role):
            return json_error('Unauthorized', 401)

    response = jsonify(build_export())
    response.headers['Content-Disposition'] = f'attachment; filename="{export_filename()}"'
    return response
