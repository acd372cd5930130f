"""
Blog Post Model
"""

from portfolio.extensions import db
from portfolio.models.base import TimestampMixin, new_uuid, isoformat


class Blog(TimestampMixin, db.Model):
    """Blog post; only published posts are visible on the public site"""
    __tablename__ = 'blog'

    id = db.Column(db.String(100), primary_key=True, default=new_uuid)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    content = db.Column(db.Text)
    thumbnail = db.Column(db.String(36), db.ForeignKey('image.id'))
    published = db.Column(db.Boolean, default=False, nullable=False)
    published_at = db.Column(db.DateTime)

    __table_args__ = (
        db.Index('blog_published_idx', 'published'),
        db.Index('blog_created_at_idx', 'created_at'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'content': self.content,
            'thumbnail': self.thumbnail,
            'published': bool(self.published),
            'publishedAt': isoformat(self.published_at),
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<Blog {self.title} published:{self.published}>'
