from marshmallow import Schema, fields, validate, post_load, ValidationError, EXCLUDE

from placement_service.utils.exceptions import RequestValidationError


class NotBlank(validate.Validator):
    """Reject strings that are empty once surrounding whitespace is removed"""

    def __init__(self, error):
        self.error = error

    def __call__(self, value):
        if not value.strip():
            raise ValidationError(self.error)
        return value


# Upper bound of the INT columns behind kolvo and id
MAX_INT = 2147483647


class WholeNumber(fields.Int):
    """Integer that accepts numeric strings but never truncates a fraction"""

    def __init__(self, **kwargs):
        super().__init__(strict=False, **kwargs)

    def _validated(self, value):
        if isinstance(value, float) and not value.is_integer():
            raise self.make_error('invalid')
        if isinstance(value, str):
            try:
                int(value.strip())
            except ValueError:
                raise self.make_error('invalid')
        return super()._validated(value)


def required_string(data_key):
    message = f'{data_key} is required and must be a non-empty string'
    return fields.Str(
        required=True,
        data_key=data_key,
        validate=NotBlank(message),
        error_messages={'required': message, 'null': message, 'invalid': message}
    )


def optional_string(data_key):
    message = f'{data_key} must be a non-empty string if provided'
    return fields.Str(
        allow_none=True,
        data_key=data_key,
        validate=NotBlank(message),
        error_messages={'invalid': message}
    )


def quantity_field(minimum):
    if minimum >= 1:
        message = 'kolvo is required and must be a positive number'
    else:
        message = 'kolvo is required and must be a non-negative number'
    # "5" is accepted, 2.7 and "2.5" are not
    return WholeNumber(
        required=True,
        data_key='kolvo',
        validate=[
            validate.Range(min=minimum, error=message),
            validate.Range(max=MAX_INT, error=f'kolvo must not exceed {MAX_INT}')
        ],
        error_messages={'required': message, 'null': message, 'invalid': message}
    )


class RequestSchema(Schema):
    """Base schema: ignore unknown keys"""

    class Meta:
        unknown = EXCLUDE


class AddRecordSchema(RequestSchema):
    """Schema for placing a product into a cell"""
    product_barcode = required_string('shk')
    product_name = required_string('name')
    cell_barcode = required_string('wr_shk')
    quantity = quantity_field(1)
    condition = required_string('condition')
    reason = fields.Str(allow_none=True, load_default=None, data_key='reason')
    executor = required_string('ispolnitel')

    @post_load
    def normalize_reason(self, data, **kwargs):
        if not data.get('reason'):
            data['reason'] = None
        return data


class MinimalRecordSchema(RequestSchema):
    """Schema for registering a product that is not placed yet"""
    product_barcode = required_string('shk')
    product_name = required_string('name')


class RemovalRequestSchema(RequestSchema):
    """Schema for taking stock out of a cell"""
    product_barcode = required_string('shk')
    cell_barcode = required_string('wr_shk')
    condition = required_string('condition')
    quantity = quantity_field(1)


class InventoryRequestSchema(RequestSchema):
    """Schema for an inventory count correction"""
    product_barcode = required_string('shk')
    cell_barcode = required_string('wr_shk')
    condition = required_string('condition')
    quantity = quantity_field(0)
    reason = fields.Str(allow_none=True, load_default=None, data_key='reason')

    @post_load
    def normalize_reason(self, data, **kwargs):
        if not data.get('reason'):
            data['reason'] = None
        return data


class UpdateRecordSchema(RequestSchema):
    """Schema for assigning a record to a cell"""
    id = WholeNumber(
        required=True,
        validate=[
            validate.Range(min=1, error='id is required and must be a positive number'),
            validate.Range(max=MAX_INT, error=f'id must not exceed {MAX_INT}')
        ],
        error_messages={
            'required': 'id is required and must be a positive number',
            'null': 'id is required and must be a positive number',
            'invalid': 'id is required and must be a positive number'
        }
    )
    cell_barcode = required_string('wr_shk')
    quantity = quantity_field(0)
    executor = optional_string('ispolnitel')
    condition = optional_string('condition')
    reason = optional_string('reason')

    @post_load
    def drop_empty_optionals(self, data, **kwargs):
        # Explicit nulls leave the stored value untouched
        for key in ('executor', 'condition', 'reason'):
            if key in data and data[key] is None:
                del data[key]
        return data


class CellSearchSchema(RequestSchema):
    """Schema for the exact cell search query string"""
    cell_barcode = fields.Str(data_key='wr_shk', load_default='')

    @post_load
    def strip_value(self, data, **kwargs):
        data['cell_barcode'] = data['cell_barcode'].strip()
        return data


class LikeSearchSchema(RequestSchema):
    """Schema for the multi-field substring search query string"""
    cell_name = fields.Str(data_key='wr_name')
    cell_barcode = fields.Str(data_key='wr_shk')
    product_barcode = fields.Str(data_key='shk')
    product_name = fields.Str(data_key='name')

    @post_load
    def drop_blank_terms(self, data, **kwargs):
        return {key: value.strip() for key, value in data.items() if value and value.strip()}


def flatten_errors(schema, messages):
    """Flatten marshmallow error messages into a list in field declaration order"""
    errors = []
    for name, field in schema.fields.items():
        key = field.data_key or name
        for message in messages.get(key, []):
            if message not in errors:
                errors.append(message)
    for message in messages.get('_schema', []):
        errors.append(message)
    return errors


def load_request(schema, payload):
    """Deserialize a request payload or raise RequestValidationError with every problem found"""
    if not isinstance(payload, dict):
        payload = {}
    try:
        return schema.load(payload)
    except ValidationError as e:
        raise RequestValidationError(flatten_errors(schema, e.messages))
