"""
Blog Admin Routes
"""

import logging

from flask import current_app, jsonify, request
from sqlalchemy.exc import IntegrityError

from portfolio.admin import admin_bp
from portfolio.admin.decorators import admin_required, json_error, read_json_upload, stage_thumbnail
from portfolio.extensions import db
from portfolio.models import Blog
from portfolio.models.base import new_uuid, to_naive_utc, utcnow
from portfolio.schemas import BlogDataSchema, BlogFormSchema, DeleteFormSchema, validate_request_data
from portfolio.services import atomic, chunked

logger = logging.getLogger(__name__)


def _blog_from_data(item):
    published = item['published']
    return Blog(
        id=new_uuid(),
        title=item['title'],
        description=item['description'],
        content=item['content'],
        published=published,
        published_at=to_naive_utc(item['published_at']),
    )


@admin_bp.route('/dashboard/blog')
@admin_required
def list_blogs():
    """All posts, drafts included, newest first."""
    blogs = Blog.query.order_by(Blog.created_at.desc()).all()
    return jsonify({'blogs': [b.to_dict() for b in blogs]})


@admin_bp.route('/dashboard/blog/new', methods=['POST'])
@admin_required
def create_blog():
    is_valid, data = validate_request_data(BlogFormSchema, request.form)
    if not is_valid:
        return json_error('Validation failed', details=data)

    blog_id = data['id'] or new_uuid()
    try:
        with atomic():
            thumbnail_id = stage_thumbnail()
            db.session.add(Blog(
                id=blog_id,
                title=data['title'],
                description=data['description'],
                content=data['content'] or None,
                thumbnail=thumbnail_id,
                published=data['published'],
                published_at=utcnow() if data['published'] else None,
            ))
    except IntegrityError:
        return json_error('ID already exists', 409)

    logger.info('Created blog post %s (published=%s)', blog_id, data['published'])
    return jsonify({'success': True, 'blog': db.session.get(Blog, blog_id).to_dict()}), 201


@admin_bp.route('/dashboard/blog/<blog_id>')
@admin_required
def get_blog(blog_id):
    blog = db.get_or_404(Blog, blog_id)
    return jsonify({'blog': blog.to_dict()})


@admin_bp.route('/dashboard/blog/<blog_id>/edit', methods=['POST'])
@admin_required
def edit_blog(blog_id):
    """Update a post; `published_at` is stamped the first time it is published."""
    blog = db.get_or_404(Blog, blog_id)

    is_valid, data = validate_request_data(BlogFormSchema, request.form)
    if not is_valid:
        return json_error('Validation failed', details=data)

    new_id = data['id']
    if new_id and new_id != blog_id and db.session.get(Blog, new_id) is not None:
        return json_error('ID already exists')
    final_id = new_id or blog_id

    with atomic():
        thumbnail_id = stage_thumbnail()
        blog.title = data['title']
        blog.description = data['description'] or None
        blog.content = data['content'] or None
        blog.published = data['published']
        if data['published'] and blog.published_at is None:
            blog.published_at = utcnow()
        if thumbnail_id:
            blog.thumbnail = thumbnail_id
        if final_id != blog_id:
            blog.id = final_id

    return jsonify({'success': True, 'blog': db.session.get(Blog, final_id).to_dict()})


@admin_bp.route('/dashboard/blog/delete', methods=['POST'])
@admin_required
def delete_blog():
    is_valid, data = validate_request_data(DeleteFormSchema, request.form)
    if not is_valid:
        return json_error('ID is required', details=data)

    with atomic():
        deleted = Blog.query.filter_by(id=data['id']).delete()
    if not deleted:
        return json_error('Not found', 404)
    return jsonify({'success': True, 'id': data['id']})


@admin_bp.route('/dashboard/blog/import', methods=['POST'])
@admin_required
def import_blogs():
    """Replace all posts with an uploaded JSON list."""
    payload, error = read_json_upload()
    if error:
        return error
    is_valid, items = validate_request_data(BlogDataSchema, payload, many=True)
    if not is_valid:
        logger.warning('Rejected blog import: %s', items)
        return json_error('Invalid JSON format', details=items)

    size = current_app.config['IMPORT_CHUNK_SIZE']
    with atomic():
        Blog.query.delete()
        for chunk in chunked(items, size):
            db.session.add_all(_blog_from_data(item) for item in chunk)
            db.session.flush()

    logger.info('Imported %d blog posts', len(items))
    return jsonify({'success': True, 'imported': len(items)})


@admin_bp.route('/dashboard/blog/import-item', methods=['POST'])
@admin_required
def import_blog_item():
    payload, error = read_json_upload()
    if error:
        return error
    is_valid, item = validate_request_data(BlogDataSchema, payload)
    if not is_valid:
        return json_error('Invalid JSON format', details=item)

    blog = _blog_from_data(item)
    with atomic():
        db.session.add(blog)
    return jsonify({'success': True, 'imported': 1, 'id': blog.id})
