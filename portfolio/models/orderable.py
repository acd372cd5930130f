"""
Orderable Models

Social links, skills, certifications and awards are shown in a user-chosen
sequence. Each table keeps a dense, zero-based `order` column; see
portfolio.services.ordering for how it stays dense.
"""

from portfolio.extensions import db
from portfolio.models.base import TimestampMixin, new_uuid, isoformat, enum_column
from portfolio.models.enums import AwardStatus


class OrderableMixin(TimestampMixin):
    """`order` is indexed but not unique: range shifts pass through duplicates mid-statement."""
    id = db.Column(db.String(36), primary_key=True, default=new_uuid)
    order = db.Column(db.Integer, nullable=False, default=0, index=True)

    def _base_dict(self):
        return {
            'id': self.id,
            'order': self.order,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }


class Sns(OrderableMixin, db.Model):
    """Social network link"""
    __tablename__ = 'sns'

    name = db.Column(db.String(100), nullable=False)
    icon = db.Column(db.String(100), nullable=False)
    url = db.Column(db.String(500), nullable=False)
    color = db.Column(db.String(50), nullable=False)

    def to_dict(self):
        data = self._base_dict()
        data.update(name=self.name, icon=self.icon, url=self.url, color=self.color)
        return data

    def __repr__(self):
        return f'<Sns {self.order}:{self.name}>'


class Skill(OrderableMixin, db.Model):
    """Skill with a 1-5 confidence rating"""
    __tablename__ = 'skill'

    name = db.Column(db.String(100), nullable=False)
    icon = db.Column(db.String(100), nullable=False)
    confidence = db.Column(db.Integer, nullable=False)

    def to_dict(self):
        data = self._base_dict()
        data.update(name=self.name, icon=self.icon, confidence=self.confidence)
        return data

    def __repr__(self):
        return f'<Skill {self.order}:{self.name}>'


class Certification(OrderableMixin, db.Model):
    __tablename__ = 'certification'

    name = db.Column(db.String(255), nullable=False)
    date = db.Column(db.String(50))
    status = db.Column(db.String(50))

    def to_dict(self):
        data = self._base_dict()
        data.update(name=self.name, date=self.date, status=self.status)
        return data

    def __repr__(self):
        return f'<Certification {self.order}:{self.name}>'


class Award(OrderableMixin, db.Model):
    __tablename__ = 'award'

    name = db.Column(db.String(255), nullable=False)
    date = db.Column(db.String(50))
    status = enum_column(AwardStatus)

    def to_dict(self):
        data = self._base_dict()
        data.update(name=self.name, date=self.date,
                    status=self.status.value if self.status else None)
        return data

    def __repr__(self):
        return f'<Award {self.order}:{self.name}>'
