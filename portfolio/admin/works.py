"""
Works Admin Routes

Each write is one atomic batch: the thumbnail image row, the work row and its
URL rows commit together.
"""

import logging

from flask import current_app, jsonify, request
from sqlalchemy.exc import IntegrityError

from portfolio.admin import admin_bp
from portfolio.admin.decorators import (
    admin_required, json_error, parse_json_field, read_json_upload, stage_thumbnail
)
from portfolio.extensions import db
from portfolio.models import Work, WorkType, WorkUrl
from portfolio.models.base import new_uuid
from portfolio.schemas import (
    DeleteFormSchema, UrlDataSchema, WorkDataSchema, WorkFormSchema, validate_request_data
)
from portfolio.services import atomic, chunked

logger = logging.getLogger(__name__)


def _parse_urls(raw):
    """Validated list of {title, url} from the `urls` form field."""
    urls, error = parse_json_field(raw)
    if error:
        return None, {'urls': [error]}
    if urls is None:
        return [], None
    is_valid, result = validate_request_data(UrlDataSchema, urls, many=True)
    if not is_valid:
        return None, {'urls': result}
    return result, None


def _add_urls(work_id, urls):
    db.session.add_all(WorkUrl(work_id=work_id, title=u['title'], url=u['url']) for u in urls)


@admin_bp.route('/dashboard/works')
@admin_required
def list_works():
    """All works, newest first, with their URLs."""
    works = Work.query.order_by(Work.created_at.desc()).all()
    return jsonify({'works': [w.to_dict(include_urls=True) for w in works]})


@admin_bp.route('/dashboard/works/new', methods=['POST'])
@admin_required
def create_work():
    is_valid, data = validate_request_data(WorkFormSchema, request.form)
    if not is_valid:
        return json_error('Validation failed', details=data)
    urls, errors = _parse_urls(data['urls'])
    if errors:
        return json_error('Validation failed', details=errors)

    work_id = data['id'] or new_uuid()
    try:
        with atomic():
            thumbnail_id = stage_thumbnail()
            work = Work(
                id=work_id,
                title=data['title'],
                description=data['description'],
                type=WorkType(data['type']),
                creation_period=data['creation_period'],
                article=data['article'] or None,
                thumbnail=thumbnail_id,
            )
            db.session.add(work)
            db.session.flush()
            _add_urls(work_id, urls)
    except IntegrityError:
        return json_error('ID already exists', 409)

    logger.info('Created work %s', work_id)
    return jsonify({'success': True, 'work': db.session.get(Work, work_id).to_dict(include_urls=True)}), 201


@admin_bp.route('/dashboard/works/<work_id>')
@admin_required
def get_work(work_id):
    work = db.get_or_404(Work, work_id)
    return jsonify({'work': work.to_dict(include_urls=True)})


@admin_bp.route('/dashboard/works/<work_id>/edit', methods=['POST'])
@admin_required
def edit_work(work_id):
    """Update a work, optionally renaming its id; URLs are replaced wholesale."""
    work = db.get_or_404(Work, work_id)

    is_valid, data = validate_request_data(WorkFormSchema, request.form)
    if not is_valid:
        return json_error('Validation failed', details=data)
    urls, errors = _parse_urls(data['urls'])
    if errors:
        return json_error('Validation failed', details=errors)

    new_id = data['id']
    if new_id and new_id != work_id and db.session.get(Work, new_id) is not None:
        return json_error('ID already exists')
    final_id = new_id or work_id

    with atomic():
        thumbnail_id = stage_thumbnail()
        WorkUrl.query.filter_by(work_id=work_id).delete()
        work.title = data['title']
        work.description = data['description'] or None
        work.type = WorkType(data['type'])
        work.creation_period = data['creation_period'] or None
        work.article = data['article'] or None
        if thumbnail_id:
            work.thumbnail = thumbnail_id
        if final_id != work_id:
            work.id = final_id
        db.session.flush()
        _add_urls(final_id, urls)

    logger.info('Updated work %s', final_id)
    return jsonify({'success': True, 'work': db.session.get(Work, final_id).to_dict(include_urls=True)})


@admin_bp.route('/dashboard/works/delete', methods=['POST'])
@admin_required
def delete_work():
    """Delete a work together with its URLs."""
    is_valid, data = validate_request_data(DeleteFormSchema, request.form)
    if not is_valid:
        return json_error('ID is required', details=data)

    with atomic():
        WorkUrl.query.filter_by(work_id=data['id']).delete()
        deleted = Work.query.filter_by(id=data['id']).delete()
    if not deleted:
        return json_error('Not found', 404)

    logger.info('Deleted work %s', data['id'])
    return jsonify({'success': True, 'id': data['id']})


def _stage_work(item):
    work_id = new_uuid()
    work = Work(
        id=work_id,
        title=item['title'],
        description=item['description'],
        type=WorkType(item['type']),
        creation_period=item['creation_period'],
        article=item['article'],
    )
    urls = [WorkUrl(work_id=work_id, title=u['title'], url=u['url']) for u in item['urls']]
    return work, urls


@admin_bp.route('/dashboard/works/import', methods=['POST'])
@admin_required
def import_works():
    """Replace all works and URLs with an uploaded JSON list."""
    payload, error = read_json_upload()
    if error:
        return error
    is_valid, items = validate_request_data(WorkDataSchema, payload, many=True)
    if not is_valid:
        logger.warning('Rejected works import: %s', items)
        return json_error('Invalid JSON format', details=items)

    works, urls = [], []
    for item in items:
        work, work_urls = _stage_work(item)
        works.append(work)
        urls.extend(work_urls)

    size = current_app.config['IMPORT_CHUNK_SIZE']
    with atomic():
        WorkUrl.query.delete()
        Work.query.delete()
        for chunk in chunked(works, size):
            db.session.add_all(chunk)
            db.session.flush()
        for chunk in chunked(urls, size):
            db.session.add_all(chunk)
            db.session.flush()

    logger.info('Imported %d works', len(works))
    return jsonify({'success': True, 'imported': len(works)})


@admin_bp.route('/dashboard/works/import-item', methods=['POST'])
@admin_required
def import_work_item():
    """Add one work from an uploaded JSON object."""
    payload, error = read_json_upload()
    if error:
        return error
    is_valid, item = validate_request_data(WorkDataSchema, payload)
    if not is_valid:
        return json_error('Invalid JSON format', details=item)

    work, urls = _stage_work(item)
    with atomic():
        db.session.add(work)
        db.session.flush()
        db.session.add_all(urls)

    return jsonify({'success': True, 'imported': 1, 'id': work.id})
