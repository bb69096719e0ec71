"""
Order Status
============

Canonical order states and the rules that derive one from a raw order row.

derive_status() works on a fetched row; status_filter() expresses the same
rules as a PostgREST logic tree so the listing query can filter by status
before pagination is applied.
"""

import logging
from enum import Enum

from orderdesk.core.exceptions import InvalidStatusError
from orderdesk.core.supabase import in_list, quote_value

logger = logging.getLogger(__name__)

CARD_GATEWAY = 'razorpay'
CASH_ON_DELIVERY = 'cod'


class OrderStatus(str, Enum):
    PENDING = 'pending'
    PROCESSING = 'processing'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


CANONICAL_STATUSES = tuple(s.value for s in OrderStatus)


def parse_status(value):
    """Strictly parse a canonical status, raising InvalidStatusError otherwise."""
    if isinstance(value, OrderStatus):
        return value
    if isinstance(value, str):
        try:
            return OrderStatus(value)
        except ValueError:
            pass
    raise InvalidStatusError(value)


def _has_transaction(order):
    transaction_id = order.get('transaction_id')
    return transaction_id is not None and str(transaction_id).strip() != ''


def derive_status(order):
    """
    Map a raw order row to a canonical OrderStatus.

    An explicit order_status wins when it is canonical. Anything else stored
    there is logged and ignored, and the status is derived from payment data:
    card gateway orders are completed once paid (or carrying a transaction
    id), cash on delivery orders are processing, everything else is pending.
    """
    explicit = order.get('order_status')
    if explicit:
        try:
            return parse_status(explicit)
        except InvalidStatusError:
            logger.warning("Order %s has unknown order_status %r, deriving from payment data",
                           order.get('order_id'), explicit)

    payment_method = order.get('payment_method')
    if payment_method == CARD_GATEWAY:
        if order.get('payment_status') == 'completed' or _has_transaction(order):
            return OrderStatus.COMPLETED
        return OrderStatus.PENDING
    if payment_method == CASH_ON_DELIVERY:
        return OrderStatus.PROCESSING
    return OrderStatus.PENDING


# Rows whose order_status does not decide the outcome
_NO_EXPLICIT_STATUS = f'or(order_status.is.null,order_status.not.in.{in_list(CANONICAL_STATUSES)})'

# Same test as _has_transaction: at least one non-whitespace character
_TRANSACTION_PATTERN = quote_value('[^[:space:]]')

_DERIVED_PREDICATES = {
    OrderStatus.COMPLETED: (
        f'payment_method.eq.{CARD_GATEWAY},'
        f'or(payment_status.eq.completed,transaction_id.match.{_TRANSACTION_PATTERN})'
    ),
    OrderStatus.PENDING: (
        'or('
        f'and(payment_method.eq.{CARD_GATEWAY},'
        'or(payment_status.is.null,payment_status.neq.completed),'
        f'or(transaction_id.is.null,transaction_id.not.match.{_TRANSACTION_PATTERN})),'
        'payment_method.is.null,'
        f'payment_method.not.in.{in_list((CARD_GATEWAY, CASH_ON_DELIVERY))}'
        ')'
    ),
    OrderStatus.PROCESSING: f'payment_method.eq.{CASH_ON_DELIVERY}',
}


def status_filter(status):
    """
    PostgREST logic tree selecting rows whose derived status is `status`.

    Returns the body of an or=(...) filter, parentheses included.
    """
    status = parse_status(status)
    branches = [f'order_status.eq.{status.value}']
    derived = _DERIVED_PREDICATES.get(status)
    if derived:
        branches.append(f'and({_NO_EXPLICIT_STATUS},{derived})')
    return '(' + ','.join(branches) + ')'
