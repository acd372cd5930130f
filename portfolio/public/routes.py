"""
Public Routes
"""

from flask import Response, abort, current_app, jsonify

from portfolio.extensions import blob_store, db
from portfolio.models import Award, Blog, Certification, Image, Skill, Sns, Work, WorkType
from portfolio.models.enums import values
from portfolio.public import public_bp

IMAGE_CACHE_CONTROL = 'public, max-age=31536000'


def _ordered(model):
    return [row.to_dict() for row in model.query.order_by(model.order).all()]


@public_bp.route('/')
def index():
    """Site metadata for the home page."""
    return jsonify({
        'title': current_app.config['SITE_TITLE'],
        'description': current_app.config['SITE_DESCRIPTION'],
    })


@public_bp.route('/works')
def works():
    items = Work.query.order_by(Work.created_at.desc()).all()
    return jsonify({
        'works': [w.to_dict(include_urls=True) for w in items],
        'workTypes': values(WorkType),
    })


@public_bp.route('/works/<work_id>')
def work_detail(work_id):
    work = db.get_or_404(Work, work_id, description='Work not found')
    return jsonify({'work': work.to_dict(include_urls=True)})


@public_bp.route('/blog')
def blog():
    """Published posts only, newest first."""
    posts = Blog.query.filter_by(published=True).order_by(Blog.created_at.desc()).all()
    return jsonify({'blogs': [p.to_dict() for p in posts]})


@public_bp.route('/blog/<blog_id>')
def blog_detail(blog_id):
    post = Blog.query.filter_by(id=blog_id, published=True).first()
    if post is None:
        abort(404, description='Post not found')
    return jsonify({'blog': post.to_dict()})


@public_bp.route('/about')
def about():
    """Every orderable collection, each in display order."""
    return jsonify({
        'sns': _ordered(Sns),
        'skills': _ordered(Skill),
        'certifications': _ordered(Certification),
        'awards': _ordered(Award),
    })


@public_bp.route('/contact')
def contact():
    return jsonify({'sns': _ordered(Sns)})


@public_bp.route('/api/image/<image_id>')
def image(image_id):
    """Serve image bytes from the blob store."""
    record = db.session.get(Image, image_id)
    if record is None:
        abort(404, description='Image not found')
    blob = blob_store.get(record.kv_id)
    if blob is None:
        abort(404, description='Image not found')

    return Response(
        blob.data,
        mimetype=blob.content_type or 'image/jpeg',
        headers={'Cache-Control': IMAGE_CACHE_CONTROL},
    )
