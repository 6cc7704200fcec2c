"""Quote API endpoints."""
import csv
import io
from flask import Blueprint, request, Response

from salesops.api.schemas import QuoteCreateSchema, QuoteUpdateSchema, load_payload
from salesops.database import SessionLocal
from salesops.middleware.auth_middleware import require_auth
from salesops.services.conversion_service import ConversionService
from salesops.services.quote_service import QuoteService
from salesops.utils.errors import NotFoundError, InternalError, success_response
from salesops.utils.session_helpers import get_owner_id_from_request

quote_bp = Blueprint('quote', __name__)


@quote_bp.route('/quotes', methods=['GET'])
@require_auth
def list_quotes():
    """
    List the caller's quotes, newest first.
    Query params: status (filter), stats=true (per-status counts instead of rows).
    """
    owner_id = get_owner_id_from_request()

    db = SessionLocal()
    try:
        if request.args.get('stats') == 'true':
            return success_response(QuoteService.get_stats(db, owner_id))

        status = request.args.get('status') or None
        quotes = QuoteService.list_quotes(db, owner_id, status)
        return success_response(
            [quote.to_dict(include_items=False) for quote in quotes],
            metadata={"count": len(quotes), "status": status}
        )
    finally:
        db.close()


@quote_bp.route('/quotes', methods=['POST'])
@require_auth
def create_quote():
    """
    Create a new draft quote.
    Requires customer_name and at least one item.
    """
    owner_id = get_owner_id_from_request()
    data = load_payload(QuoteCreateSchema(), request.get_json(silent=True))

    db = SessionLocal()
    try:
        quote = QuoteService.create_quote(db, owner_id, data)
        return success_response(quote.to_dict(), 201)
    finally:
        db.close()


@quote_bp.route('/quotes/<quote_id>', methods=['GET'])
@require_auth
def get_quote(quote_id):
    """Get a quote with its items."""
    owner_id = get_owner_id_from_request()

    db = SessionLocal()
    try:
        quote = QuoteService.get_quote(db, owner_id, quote_id)
        if not quote:
            raise NotFoundError("Quote not found")
        return success_response(quote.to_dict())
    finally:
        db.close()


@quote_bp.route('/quotes/<quote_id>', methods=['PUT'])
@require_auth
def update_quote(quote_id):
    """
    Partially update a quote.
    Supplying items replaces the whole item set.
    """
    owner_id = get_owner_id_from_request()
    data = load_payload(QuoteUpdateSchema(), request.get_json(silent=True))

    db = SessionLocal()
    try:
        quote = QuoteService.update_quote(db, owner_id, quote_id, data)
        if not quote:
            raise NotFoundError("Quote not found")
        return success_response(quote.to_dict())
    finally:
        db.close()


@quote_bp.route('/quotes/<quote_id>', methods=['DELETE'])
@require_auth
def delete_quote(quote_id):
    """Delete a quote and its items."""
    owner_id = get_owner_id_from_request()

    db = SessionLocal()
    try:
        if not QuoteService.delete_quote(db, owner_id, quote_id):
            raise NotFoundError("Quote not found")
        return success_response({"message": "Quote deleted"})
    finally:
        db.close()


@quote_bp.route('/quotes/<quote_id>/convert', methods=['POST'])
@require_auth
def convert_quote(quote_id):
    """
    Convert an approved quote into a pending order.
    404 if the quote is not found, 400 if it is not approved.
    """
    owner_id = get_owner_id_from_request()

    db = SessionLocal()
    try:
        ConversionService.ensure_convertible(QuoteService.get_quote(db, owner_id, quote_id))

        order = ConversionService.convert_quote_to_order(db, owner_id, quote_id)
        if not order:
            raise InternalError("Failed to convert quote to order")
        return success_response(order.to_dict(), 201)
    finally:
        db.close()


@quote_bp.route('/quotes/<quote_id>/export/csv', methods=['GET'])
@require_auth
def export_quote_csv(quote_id):
    """Export a quote with its lines and totals as CSV."""
    owner_id = get_owner_id_from_request()

    db = SessionLocal()
    try:
        quote = QuoteService.get_quote(db, owner_id, quote_id)
        if not quote:
            raise NotFoundError("Quote not found")

        output = io.StringIO()
        writer = csv.writer(output)

        # Header
        writer.writerow(['Quote', quote.quote_number])
        writer.writerow(['Status:', quote.status])
        writer.writerow(['Created:', quote.created_at.isoformat() if quote.created_at else ''])
        writer.writerow(['Valid Until:', quote.valid_until.isoformat() if quote.valid_until else ''])
        writer.writerow([])

        # Customer
        writer.writerow(['Customer'])
        writer.writerow(['Name:', quote.customer_name])
        writer.writerow(['Email:', quote.customer_email or ''])
        writer.writerow(['Phone:', quote.customer_phone or ''])
        writer.writerow(['Address:', quote.customer_address or ''])
        writer.writerow([])

        # Items (amounts rounded for presentation only)
        writer.writerow(['SKU', 'Product', 'Quantity', 'Unit Price', 'Line Total'])
        for item in quote.items:
            writer.writerow([
                item.product_sku, item.product_name, item.quantity,
                f"{item.unit_price:.2f}", f"{item.line_total:.2f}"
            ])
        writer.writerow([])

        # Summary
        writer.writerow(['Summary'])
        writer.writerow(['Subtotal:', f"{quote.subtotal:.2f}"])
        writer.writerow([f'Discount ({quote.discount_percent:g}%):', f"{quote.discount_amount:.2f}"])
        writer.writerow(['Total:', f"{quote.total:.2f}"])

        if quote.notes:
            writer.writerow([])
            writer.writerow(['Notes:', quote.notes])

        output.seek(0)
        filename = f"{quote.quote_number}.csv"

        return Response(
            output.getvalue(),
            mimetype='text/csv',
            headers={'Content-Disposition': f'attachment; filename="{filename}"'}
        )
    finally:
        db.close()
