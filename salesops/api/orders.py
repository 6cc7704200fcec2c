"""Order API endpoints."""
from flask import Blueprint, request

from salesops.api.schemas import OrderUpdateSchema, load_payload
from salesops.database import SessionLocal
from salesops.middleware.auth_middleware import require_auth
from salesops.services.order_service import OrderService
from salesops.utils.errors import NotFoundError, success_response
from salesops.utils.session_helpers import get_owner_id_from_request

order_bp = Blueprint('order', __name__)


@order_bp.route('/orders', methods=['GET'])
@require_auth
def list_orders():
    """List the caller's orders, or per-status counts with stats=true."""
    owner_id = get_owner_id_from_request()

    db = SessionLocal()
    try:
        if request.args.get('stats') == 'true':
            return success_response(OrderService.get_stats(db, owner_id))

        status = request.args.get('status') or None
        orders = OrderService.list_orders(db, owner_id, status)
        return success_response(
            [order.to_dict(include_items=False) for order in orders],
            metadata={"count": len(orders), "status": status}
        )
    finally:
        db.close()


@order_bp.route('/orders/<order_id>', methods=['GET'])
@require_auth
def get_order(order_id):
    owner_id = get_owner_id_from_request()

    db = SessionLocal()
    try:
        order = OrderService.get_order(db, owner_id, order_id)
        if not order:
            raise NotFoundError("Order not found")
        return success_response(order.to_dict())
    finally:
        db.close()


@order_bp.route('/orders/<order_id>', methods=['PUT'])
@require_auth
def update_order(order_id):
    """Update an order's status and/or notes."""
    owner_id = get_owner_id_from_request()
    data = load_payload(OrderUpdateSchema(), request.get_json(silent=True))

    db = SessionLocal()
    try:
        order = OrderService.update_order(db, owner_id, order_id, data)
        if not order:
            raise NotFoundError("Order not found")
        return success_response(order.to_dict())
    finally:
        db.close()


@order_bp.route('/orders/<order_id>', methods=['DELETE'])
@require_auth
def delete_order(order_id):
    owner_id = get_owner_id_from_request()

    db = SessionLocal()
    try:
        if not OrderService.delete_order(db, owner_id, order_id):
            raise NotFoundError("Order not found")
        return success_response({"message": "Order deleted"})
    finally:
        db.close()
