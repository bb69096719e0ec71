"""
Order Store
===========

Query layer over the hosted orders and order_products tables.
"""

import logging

from orderdesk.core.supabase import quote_value
from .status import OrderStatus, parse_status, status_filter, derive_status
from .transform import transform_order, transform_product

logger = logging.getLogger(__name__)

ORDER_COLUMNS = (
    'order_id, order_number, customer_name, customer_email, customer_phone, '
    'total_amount, payment_method, payment_status, order_status, created_at, '
    'shipping_address_line1, shipping_city, shipping_state, shipping_postal_code, '
    'product_ids, transaction_id, shipping_method'
)
PRODUCT_COLUMNS = 'product_id, product_name, quantity, unit_price, total_price'

SEARCH_COLUMNS = ('customer_name', 'customer_email', 'order_number')

# int4 order_id
MAX_ORDER_ID = 2**31 - 1


def search_filter(term, max_order_id=MAX_ORDER_ID):
    """
    PostgREST logic tree for a free-text search.

    Case-insensitive substring match on name, email and order number, plus an
    exact order_id match when the term is an integer no larger than
    max_order_id. Larger numbers (phone numbers, say) only match as text.
    Returns None for an empty term.
    """
    term = (term or '').strip()
    if not term:
        return None

    pattern = quote_value(f'*{term}*')
    predicates = [f'{column}.ilike.{pattern}' for column in SEARCH_COLUMNS]

    if term.isascii() and term.isdigit() and int(term) <= max_order_id:
        predicates.append(f'order_id.eq.{int(term)}')

    return '(' + ','.join(predicates) + ')'


def build_order_filters(status=None, search=None, max_order_id=MAX_ORDER_ID):
    """Combine the search and status logic trees into select() filters"""
    trees = []
    search_tree = search_filter(search, max_order_id)
    if search_tree:
        trees.append(search_tree)
    if status is not None:
        trees.append(status_filter(status))

    if not trees:
        return {}
    if len(trees) == 1:
        return {'or': trees[0]}
    return {'and': '(' + ','.join(f'or{tree}' for tree in trees) + ')'}


class OrderStore:
    """Reads orders and line items, and writes order status"""

    def __init__(self, client, orders_table='orders', products_table='order_products',
                 max_page_size=500, max_order_id=MAX_ORDER_ID):
        self.client = client
        self.orders_table = orders_table
        self.products_table = products_table
        self.max_page_size = max_page_size
        self.max_order_id = max_order_id

    def list_orders(self, status=None, search=None, limit=50, offset=0):
        """
        Most recent orders first, as dashboard view models.

        Args:
            status: OrderStatus (or canonical string) to filter by, None for all
            search: Free-text search term
            limit: Page size, capped at max_page_size
            offset: Rows to skip

        Raises:
            InvalidStatusError: status is not canonical
            BackendError: the backend query failed
        """
        if status is not None:
            status = parse_status(status)
        limit = min(limit, self.max_page_size)

        rows = self.client.select(
            self.orders_table,
            columns=ORDER_COLUMNS,
            filters=build_order_filters(status, search, self.max_order_id),
            order='created_at.desc',
            limit=limit,
            offset=offset,
        )
        orders = [transform_order(row) for row in rows]

        if status is not None:
            mismatched = [o['id'] for o in orders if o['status'] != status.value]
            if mismatched:
                logger.warning("Backend returned orders %s for status=%s with a different derived status",
                               mismatched, status.value)

        return orders

    def order_stats(self, search=None):
        """Counts per status and completed revenue over the most recent matching orders"""
        rows = self.client.select(
            self.orders_table,
            columns=ORDER_COLUMNS,
            filters=build_order_filters(None, search, self.max_order_id),
            order='created_at.desc',
            limit=self.max_page_size,
        )

        stats = {s.value: 0 for s in OrderStatus}
        revenue = 0.0
        for row in rows:
            status = derive_status(row)
            stats[status.value] += 1
            if status == OrderStatus.COMPLETED:
                try:
                    revenue += float(row.get('total_amount') or 0)
                except (TypeError, ValueError):
                    logger.warning("Order %s has a non-numeric total_amount %r",
                                   row.get('order_id'), row.get('total_amount'))

        stats['total'] = len(rows)
        stats['revenue'] = round(revenue, 2)
        return stats

    def get_products(self, order_id):
        """Line items of one order with composite product ids split into id and size"""
        rows = self.client.select(
            self.products_table,
            columns=PRODUCT_COLUMNS,
            filters={'order_id': f'eq.{order_id}'},
        )
        return [transform_product(row) for row in rows]

    def update_status(self, order_id, status):
        """
        Write a canonical status to order_status. Last write wins.

        Raises:
            InvalidStatusError: status is not canonical
            BackendError: the backend update failed
        """
        status = parse_status(status)
        self.client.update(
            self.orders_table,
            {'order_status': status.value},
            {'order_id': f'eq.{order_id}'},
        )
        return status
