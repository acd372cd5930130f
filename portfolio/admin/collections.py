"""
Orderable Collection Routes

CRUD, drag-and-drop reorder and JSON import for social links, skills,
certifications and awards. Create, move and delete keep the `order` column
dense through portfolio.services.ordering; each request is one atomic batch.
"""

import logging
from collections import namedtuple

from flask import current_app, jsonify, request
from sqlalchemy.exc import IntegrityError

from portfolio.admin import admin_bp
from portfolio.admin.decorators import admin_required, json_error, parse_json_field, read_json_upload
from portfolio.extensions import db
from portfolio.models import Award, AwardStatus, Certification, Skill, Sns
from portfolio.models.base import new_uuid
from portfolio.schemas import (
    AwardDataSchema, AwardFormSchema, CertificationDataSchema, CertificationFormSchema,
    DeleteFormSchema, ReorderItemSchema, SkillDataSchema, SkillFormSchema,
    SnsDataSchema, SnsFormSchema, validate_request_data
)
from portfolio.services import atomic, chunked, delete_row, insert_row, move_row, reorder_rows

logger = logging.getLogger(__name__)

Collection = namedtuple('Collection', ['model', 'form_schema', 'data_schema', 'fields', 'converters'])

COLLECTIONS = {
    'sns': Collection(Sns, SnsFormSchema, SnsDataSchema, ('name', 'icon', 'url', 'color'), {}),
    'skills': Collection(Skill, SkillFormSchema, SkillDataSchema, ('name', 'icon', 'confidence'), {}),
    'certifications': Collection(Certification, CertificationFormSchema, CertificationDataSchema,
                                 ('name', 'date', 'status'), {}),
    'awards': Collection(Award, AwardFormSchema, AwardDataSchema, ('name', 'date', 'status'),
                         {'status': AwardStatus}),
}

COLLECTION_RULE = '/dashboard/<any(sns, skills, certifications, awards):collection>'


def _field_values(entry, data):
    values = {}
    for name in entry.fields:
        value = data.get(name)
        convert = entry.converters.get(name)
        values[name] = convert(value) if convert and value is not None else value
    return values


@admin_bp.route(COLLECTION_RULE)
@admin_required
def list_collection(collection):
    """Rows ascending by order."""
    entry = COLLECTIONS[collection]
    rows = entry.model.query.order_by(entry.model.order).all()
    return jsonify({'items': [row.to_dict() for row in rows]})


@admin_bp.route(COLLECTION_RULE + '/create', methods=['POST'])
@admin_required
def create_item(collection):
    """Insert at the requested position (append when omitted)."""
    entry = COLLECTIONS[collection]
    is_valid, data = validate_request_data(entry.form_schema, request.form)
    if not is_valid:
        return json_error('Validation failed', details=data)

    row = entry.model(id=data.get('id') or new_uuid(), **_field_values(entry, data))
    try:
        with atomic():
            insert_row(row, data.get('order'))
    except IntegrityError:
        return json_error('ID already exists', 409)

    logger.info('Created %s %s at order %s', collection, row.id, row.order)
    return jsonify({'success': True, 'item': row.to_dict()}), 201


@admin_bp.route(COLLECTION_RULE + '/update', methods=['POST'])
@admin_required
def update_item(collection):
    """Update fields and move the row when its order changed."""
    entry = COLLECTIONS[collection]
    is_valid, data = validate_request_data(entry.form_schema, request.form)
    if not is_valid:
        return json_error('Validation failed', details=data)
    if not data.get('id'):
        return json_error('Validation failed', details={'id': ['ID is required']})

    row = db.session.get(entry.model, data['id'])
    if row is None:
        return json_error('Not found', 404)

    with atomic():
        if data.get('order') is not None:
            move_row(row, data['order'])
        for name, value in _field_values(entry, data).items():
            setattr(row, name, value)

    return jsonify({'success': True, 'item': row.to_dict()})


@admin_bp.route(COLLECTION_RULE + '/delete', methods=['POST'])
@admin_required
def delete_item(collection):
    """Delete the row and compact the orders behind it."""
    entry = COLLECTIONS[collection]
    is_valid, data = validate_request_data(DeleteFormSchema, request.form)
    if not is_valid:
        return json_error('ID is required', details=data)

    row = db.session.get(entry.model, data['id'])
    if row is None:
        return json_error('Not found', 404)

    with atomic():
        delete_row(row)

    logger.info('Deleted %s %s', collection, data['id'])
    return jsonify({'success': True, 'id': data['id']})


@admin_bp.route(COLLECTION_RULE + '/reorder', methods=['POST'])
@admin_required
def reorder_collection(collection):
    """Apply a full `[{id, order}, ...]` list as given."""
    entry = COLLECTIONS[collection]
    raw = request.form.get('items')
    if not raw:
        return json_error('Items JSON is required')

    items, error = parse_json_field(raw)
    if error:
        return json_error(error)
    is_valid, items = validate_request_data(ReorderItemSchema, items, many=True)
    if not is_valid:
        logger.warning('Rejected %s reorder payload: %s', collection, items)
        return json_error('Invalid JSON format', details=items)

    with atomic():
        count = reorder_rows(entry.model, items)

    return jsonify({'success': True, 'reordered': count})


@admin_bp.route(COLLECTION_RULE + '/import', methods=['POST'])
@admin_required
def import_collection(collection):
    """Replace every row with the contents of an uploaded JSON list."""
    entry = COLLECTIONS[collection]
    payload, error = read_json_upload()
    if error:
        return error

    is_valid, items = validate_request_data(entry.data_schema, payload, many=True)
    if not is_valid:
        logger.warning('Rejected %s import: %s', collection, items)
        return json_error('Invalid JSON format', details=items)

    size = current_app.config['IMPORT_CHUNK_SIZE']
    with atomic():
        entry.model.query.delete()
        for chunk in chunked(items, size):
            db.session.add_all(
                entry.model(id=new_uuid(), order=item['order'], **_field_values(entry, item))
                for item in chunk
            )
            db.session.flush()

    logger.info('Imported %d %s rows', len(items), collection)
    return jsonify({'success': True, 'imported': len(items)})
