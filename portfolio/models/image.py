"""
Image Model
"""

from portfolio.extensions import db
from portfolio.models.base import TimestampMixin, new_uuid, isoformat


class Image(TimestampMixin, db.Model):
    """Reference to image bytes held in the blob store under `kv_id`"""
    __tablename__ = 'image'

    id = db.Column(db.String(36), primary_key=True, default=new_uuid)
    kv_id = db.Column(db.String(255), nullable=False, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'kv_id': self.kv_id,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<Image {self.id} kv:{self.kv_id}>'
