"""
Order Transformation
====================

Pure functions turning raw backend rows into the shapes the dashboard uses.
"""

import json
import logging
from collections import namedtuple

from .status import derive_status, CARD_GATEWAY

logger = logging.getLogger(__name__)

PAYMENT_LABELS = {
    CARD_GATEWAY: 'Razorpay',
}
DEFAULT_PAYMENT_LABEL = 'Cash on Delivery'

# ids: list of composite product ids (empty when there are none)
# error: description of why product_ids could not be read, else None
ProductIdsResult = namedtuple('ProductIdsResult', ['ids', 'error'])


def parse_product_ids(raw):
    """
    Read the product_ids column, stored as a JSON array string or a list.

    Returns ProductIdsResult. An absent value is "no items"; anything that
    cannot be read as a list is a parse failure with an empty id list.
    """
    if raw is None or raw == '':
        return ProductIdsResult([], None)

    if isinstance(raw, list):
        return ProductIdsResult(raw, None)

    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except ValueError as e:
            return ProductIdsResult([], f'invalid JSON: {e}')
        if isinstance(parsed, list):
            return ProductIdsResult(parsed, None)
        return ProductIdsResult([], f'expected a JSON array, got {type(parsed).__name__}')

    return ProductIdsResult([], f'unsupported type {type(raw).__name__}')


def item_count(order):
    """Number of products on an order; parse failures count as zero and are logged."""
    result = parse_product_ids(order.get('product_ids'))
    if result.error:
        logger.warning("Could not read product_ids for order %s: %s",
                       order.get('order_id'), result.error)
    return len(result.ids)


def payment_label(payment_method):
    return PAYMENT_LABELS.get(payment_method, DEFAULT_PAYMENT_LABEL)


def format_shipping_address(order):
    def part(key):
        value = order.get(key)
        return '' if value is None else str(value)

    return (f"{part('shipping_address_line1')}, {part('shipping_city')}, "
            f"{part('shipping_state')} {part('shipping_postal_code')}")


def transform_order(order):
    """Raw orders row -> dashboard view model"""
    return {
        'id': order.get('order_id'),
        'orderNumber': order.get('order_number'),
        'customerName': order.get('customer_name'),
        'email': order.get('customer_email'),
        'phone': order.get('customer_phone'),
        'total': order.get('total_amount'),
        'status': derive_status(order).value,
        'paymentMethod': payment_label(order.get('payment_method')),
        'orderDate': order.get('created_at'),
        'shippingAddress': format_shipping_address(order),
        'items': [],
        'itemCount': item_count(order),
        'productIds': order.get('product_ids'),
        'shippingMethod': order.get('shipping_method'),
    }


def split_product_id(composite):
    """
    Split "16-fullSize" into (16, "fullSize").

    Splits on the first "-". Without a separator the size is None. A numeric
    part that is not a base 10 integer gives None for the id.
    """
    text = str(composite)
    if '-' in text:
        id_part, size = text.split('-', 1)
    else:
        id_part, size = text, None

    try:
        product_id = int(id_part.strip(), 10)
    except ValueError:
        logger.warning("Product id %r has a non-numeric id part", composite)
        product_id = None

    return product_id, size or None


def transform_product(row):
    """order_products row -> line item for the order detail view"""
    product_id, size = split_product_id(row.get('product_id', ''))
    return {
        'id': product_id,
        'product_name': row.get('product_name'),
        'quantity': row.get('quantity'),
        'unit_price': row.get('unit_price'),
        'total_price': row.get('total_price'),
        'size': size,
    }
