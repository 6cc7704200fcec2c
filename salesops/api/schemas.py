"""Request schemas for the quote and order endpoints."""
from typing import Any, Dict
from marshmallow import Schema, fields, validate, pre_load, EXCLUDE
from marshmallow import ValidationError as SchemaValidationError

from salesops.models.order import ORDER_STATUSES
from salesops.models.quote import QUOTE_STATUSES
from salesops.utils.errors import ValidationError


class BlankToNoneSchema(Schema):
    """Treats empty strings as missing values for optional fields, as HTML forms send them."""

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def blank_to_none(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        return {
            key: (None if value == "" and key in self.fields and not self.fields[key].required else value)
            for key, value in data.items()
        }


class QuoteItemSchema(Schema):
    """One product line of a quote."""

    class Meta:
        unknown = EXCLUDE

    product_id = fields.Int(required=True, strict=True, validate=validate.Range(min=1))
    product_name = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    product_sku = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    unit_price = fields.Float(required=True, validate=validate.Range(min=0))
    quantity = fields.Int(required=True, strict=True, validate=validate.Range(min=1))


class QuoteUpdateSchema(BlankToNoneSchema):
    """Partial quote update; only keys present in the payload are loaded."""
    customer_name = fields.Str(validate=validate.Length(min=1, max=255))
    customer_email = fields.Str(allow_none=True, validate=validate.Length(max=255))
    customer_phone = fields.Str(allow_none=True, validate=validate.Length(max=50))
    customer_address = fields.Str(allow_none=True)
    discount_percent = fields.Float(allow_none=True, validate=validate.Range(min=0, max=100))
    notes = fields.Str(allow_none=True)
    valid_until = fields.Date(allow_none=True)
    status = fields.Str(validate=validate.OneOf(QUOTE_STATUSES))
    items = fields.List(fields.Nested(QuoteItemSchema))


class QuoteCreateSchema(QuoteUpdateSchema):
    """New quote: customer name and at least one item are required."""

    class Meta:
        unknown = EXCLUDE
        exclude = ("status",)

    customer_name = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    items = fields.List(fields.Nested(QuoteItemSchema), required=True, validate=validate.Length(min=1))


class OrderUpdateSchema(BlankToNoneSchema):
    """Only status and notes of an order may change."""
    status = fields.Str(allow_none=True, validate=validate.OneOf(ORDER_STATUSES))
    notes = fields.Str(allow_none=True)


def load_payload(schema: Schema, payload: Any) -> Dict:
    """
    Validate a request payload against a schema.

    Raises:
        ValidationError: If the body is missing or not a JSON object, or with
            per-field messages if the payload is invalid
    """
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    try:
        return schema.load(payload)
    except SchemaValidationError as e:
        raise ValidationError("Invalid request data", details={"fields": e.messages})
