"""
Work (portfolio item) Models
"""

from portfolio.extensions import db
from portfolio.models.base import TimestampMixin, new_uuid, isoformat, enum_column
from portfolio.models.enums import WorkType


class Work(TimestampMixin, db.Model):
    """A portfolio work with optional thumbnail and external links"""
    __tablename__ = 'work'

    id = db.Column(db.String(100), primary_key=True, default=new_uuid)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    thumbnail = db.Column(db.String(36), db.ForeignKey('image.id'))
    type = enum_column(WorkType, nullable=False)
    creation_period = db.Column(db.String(100))
    article = db.Column(db.Text)

    urls = db.relationship('WorkUrl', backref='work', lazy=True,
                           order_by='WorkUrl.title')

    __table_args__ = (
        db.Index('work_type_idx', 'type'),
        db.Index('work_created_at_idx', 'created_at'),
    )

    def to_dict(self, include_urls=False):
        data = {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'thumbnail': self.thumbnail,
            'type': self.type.value if self.type else None,
            'creationPeriod': self.creation_period,
            'article': self.article,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
        if include_urls:
            data['urls'] = [u.to_dict() for u in self.urls]
        return data

    def __repr__(self):
        return f'<Work {self.title}>'


class WorkUrl(db.Model):
    """External link attached to a work"""
    __tablename__ = 'work_urls'

    id = db.Column(db.String(36), primary_key=True, default=new_uuid)
    work_id = db.Column(db.String(100), db.ForeignKey('work.id'), nullable=False, index=True)
    url = db.Column(db.String(500), nullable=False)
    title = db.Column(db.String(255), nullable=False)

    def to_dict(self):
        return {'id': self.id, 'workId': self.work_id, 'url': self.url, 'title': self.title}

    def __repr__(self):
        return f'<WorkUrl {self.title} -> {self.url}>'
