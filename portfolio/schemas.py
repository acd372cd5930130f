"""
Input Validation Schemas (marshmallow)

*FormSchema classes validate dashboard form posts; *DataSchema classes
validate JSON import files, whose shape mirrors the backup export.
"""

from collections.abc import Mapping

from marshmallow import EXCLUDE, Schema, ValidationError, fields, pre_load, validate

from portfolio.models.enums import AwardStatus, Role, WorkType, values

NON_EMPTY = validate.Length(min=1)


class BaseSchema(Schema):
    """Ignores unknown keys; turns '' into None for the fields in BLANK_TO_NONE."""
    BLANK_TO_NONE = ()

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def blank_to_none(self, data, **kwargs):
        if not self.BLANK_TO_NONE or not isinstance(data, Mapping):
            return data
        data = dict(data.items())
        for key in self.BLANK_TO_NONE:
            if data.get(key) == '':
                data[key] = None
        return data


def optional_str():
    return fields.Str(load_default=None, allow_none=True)


def position(required=False):
    if required:
        return fields.Int(required=True, validate=validate.Range(min=0))
    return fields.Int(load_default=None, allow_none=True, validate=validate.Range(min=0))


# ============================================
# Orderable collections
# ============================================

class SnsFormSchema(BaseSchema):
    BLANK_TO_NONE = ('id', 'order')
    id = optional_str()
    name = fields.Str(required=True, validate=NON_EMPTY)
    icon = fields.Str(required=True, validate=NON_EMPTY)
    url = fields.Str(required=True, validate=NON_EMPTY)
    color = fields.Str(required=True, validate=NON_EMPTY)
    order = position()


class SkillFormSchema(BaseSchema):
    BLANK_TO_NONE = ('id', 'order')
    id = optional_str()
    name = fields.Str(required=True, validate=NON_EMPTY)
    icon = fields.Str(required=True, validate=NON_EMPTY)
    confidence = fields.Int(required=True, validate=validate.Range(min=1, max=5))
    order = position()


class CertificationFormSchema(BaseSchema):
    BLANK_TO_NONE = ('id', 'order', 'date', 'status')
    id = optional_str()
    name = fields.Str(required=True, validate=NON_EMPTY)
    date = optional_str()
    status = optional_str()
    order = position()


class AwardFormSchema(BaseSchema):
    BLANK_TO_NONE = ('id', 'order', 'date', 'status')
    id = optional_str()
    name = fields.Str(required=True, validate=NON_EMPTY)
    date = optional_str()
    status = fields.Str(load_default=None, allow_none=True,
                        validate=validate.OneOf(values(AwardStatus)))
    order = position()


class DeleteFormSchema(BaseSchema):
    id = fields.Str(required=True, validate=NON_EMPTY)


class SnsDataSchema(BaseSchema):
    name = fields.Str(required=True, validate=NON_EMPTY)
    icon = fields.Str(required=True, validate=NON_EMPTY)
    url = fields.Str(required=True, validate=NON_EMPTY)
    color = fields.Str(required=True, validate=NON_EMPTY)
    order = position(required=True)


class SkillDataSchema(BaseSchema):
    name = fields.Str(required=True, validate=NON_EMPTY)
    icon = fields.Str(required=True, validate=NON_EMPTY)
    confidence = fields.Int(required=True, validate=validate.Range(min=1, max=5))
    order = position(required=True)


class CertificationDataSchema(BaseSchema):
    name = fields.Str(required=True, validate=NON_EMPTY)
    date = optional_str()
    status = optional_str()
    order = position(required=True)


class AwardDataSchema(BaseSchema):
    name = fields.Str(required=True, validate=NON_EMPTY)
    date = optional_str()
    status = fields.Str(required=True, allow_none=True,
                        validate=validate.OneOf(values(AwardStatus)))
    order = position(required=True)


class ReorderItemSchema(BaseSchema):
    id = fields.Str(required=True)
    order = fields.Int(required=True)


# ============================================
# Works / Blog
# ============================================

class WorkFormSchema(BaseSchema):
    BLANK_TO_NONE = ('id', 'description', 'creationPeriod', 'urls')
    id = optional_str()
    title = fields.Str(required=True, validate=NON_EMPTY)
    description = optional_str()
    creation_period = fields.Str(data_key='creationPeriod', load_default=None, allow_none=True)
    article = fields.Str(required=True)
    type = fields.Str(required=True, validate=validate.OneOf(values(WorkType)))
    urls = optional_str()


class UrlDataSchema(BaseSchema):
    title = fields.Str(required=True, validate=NON_EMPTY)
    url = fields.Str(required=True, validate=NON_EMPTY)


class WorkDataSchema(BaseSchema):
    title = fields.Str(required=True, validate=NON_EMPTY)
    description = optional_str()
    type = fields.Str(required=True, validate=validate.OneOf(values(WorkType)))
    creation_period = fields.Str(data_key='creationPeriod', load_default=None, allow_none=True)
    article = optional_str()
    urls = fields.List(fields.Nested(UrlDataSchema), required=True)


class BlogFormSchema(BaseSchema):
    BLANK_TO_NONE = ('id', 'description')
    id = optional_str()
    title = fields.Str(required=True, validate=NON_EMPTY)
    description = optional_str()
    content = fields.Str(required=True)
    published = fields.Bool(load_default=False)


class BlogDataSchema(BaseSchema):
    title = fields.Str(required=True, validate=NON_EMPTY)
    description = optional_str()
    content = optional_str()
    published = fields.Bool(load_default=False)
    published_at = fields.DateTime(data_key='publishedAt', load_default=None, allow_none=True)


# ============================================
# Users
# ============================================

class UserSettingsSchema(BaseSchema):
    BLANK_TO_NONE = ('displayName',)
    display_name = fields.Str(data_key='displayName', load_default=None, allow_none=True,
                              validate=validate.Length(max=100))


class RoleUpdateSchema(BaseSchema):
    user_id = fields.Str(data_key='userId', required=True, validate=NON_EMPTY)
    role = fields.Str(required=True, validate=validate.OneOf(values(Role)))


def validate_request_data(schema_class, data, many=False):
    """
    Shared validation entry point

    Returns:
        tuple: (is_valid, data_or_errors)
    """
    schema = schema_class(many=many)
    try:
        return True, schema.load(data)
    except ValidationError as err:
        return False, err.messages
