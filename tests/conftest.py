"""
Shared fixtures for the OrderDesk tests.

The hosted backend is replaced by FakeSupabase, an in-memory stand-in with
the same select/update/ping surface as SupabaseClient. Filters, logic trees
included, are evaluated against the stored rows the way PostgREST would.
"""

import copy
import re

import pytest

from orderdesk import create_app
from orderdesk.core.exceptions import BackendError


ORDERS = [
    {
        'order_id': 3, 'order_number': 'ORD-003', 'customer_name': 'Ana Silva',
        'customer_email': 'ana@example.com', 'customer_phone': '9000000003',
        'total_amount': 450.0, 'payment_method': 'razorpay', 'payment_status': 'completed',
        'order_status': None, 'created_at': '2025-06-03T10:00:00+00:00',
        'shipping_address_line1': '12 Baker St', 'shipping_city': 'Pune',
        'shipping_state': 'MH', 'shipping_postal_code': '411001',
        'product_ids': '["16-fullSize","17-halfSize"]', 'transaction_id': None,
        'shipping_method': 'standard',
    },
    {
        'order_id': 2, 'order_number': 'ORD-002', 'customer_name': 'Ravi Kumar',
        'customer_email': 'ravi@example.com', 'customer_phone': '9000000002',
        'total_amount': 200.0, 'payment_method': 'cod', 'payment_status': 'pending',
        'order_status': None, 'created_at': '2025-06-02T10:00:00+00:00',
        'shipping_address_line1': '5 MG Road', 'shipping_city': 'Bengaluru',
        'shipping_state': 'KA', 'shipping_postal_code': '560001',
        'product_ids': ['18-fullSize'], 'transaction_id': None,
        'shipping_method': 'express',
    },
    {
        'order_id': 1, 'order_number': 'ORD-001', 'customer_name': 'Meera Nair',
        'customer_email': 'meera@example.com', 'customer_phone': '9000000001',
        'total_amount': 120.0, 'payment_method': 'razorpay', 'payment_status': 'created',
        'order_status': 'cancelled', 'created_at': '2025-06-01T10:00:00+00:00',
        'shipping_address_line1': '1 Beach Rd', 'shipping_city': 'Kochi',
        'shipping_state': 'KL', 'shipping_postal_code': '682001',
        'product_ids': 'not json', 'transaction_id': '',
        'shipping_method': 'standard',
    },
]

ORDER_PRODUCTS = [
    {'order_id': 3, 'product_id': '16-fullSize', 'product_name': 'Chocolate Cake',
     'quantity': 1, 'unit_price': 300.0, 'total_price': 300.0},
    {'order_id': 3, 'product_id': '17', 'product_name': 'Brownie Box',
     'quantity': 2, 'unit_price': 75.0, 'total_price': 150.0},
    {'order_id': 2, 'product_id': '18-fullSize', 'product_name': 'Cheesecake',
     'quantity': 1, 'unit_price': 200.0, 'total_price': 200.0},
]


# ---------------------------------------------------------------------------
# PostgREST filter evaluation
# ---------------------------------------------------------------------------
#
# Enough of the PostgREST filter grammar to run the queries OrderStore
# builds: eq, neq, is, in, ilike, match, the not. prefix and nested
# or(...)/and(...) trees. Comparisons follow SQL three-valued logic, so a
# NULL column is neither equal nor unequal to anything; None stands for
# "unknown" and only True selects a row.

def _text(value):
    return value if isinstance(value, str) else str(value)


def _like_regex(pattern):
    parts = []
    for ch in pattern:
        if ch in '*%':
            parts.append('.*')
        elif ch == '_':
            parts.append('.')
        else:
            parts.append(re.escape(ch))
    return ''.join(parts)


def _compare(op, actual, expected):
    if op == 'is':
        return actual is {'null': None, 'true': True, 'false': False}[expected]
    if actual is None:
        return None
    actual = _text(actual)
    if op == 'eq':
        return actual == expected
    if op == 'neq':
        return actual != expected
    if op == 'in':
        return actual in expected
    if op == 'ilike':
        return re.fullmatch(_like_regex(expected), actual, re.IGNORECASE | re.DOTALL) is not None
    if op == 'match':
        return re.search(expected.replace('[:space:]', r'\s'), actual) is not None
    raise AssertionError(f'unsupported operator {op!r}')


def _negate(result):
    return None if result is None else not result


def _any(results):
    if True in results:
        return True
    return None if None in results else False


def _all(results):
    if False in results:
        return False
    return None if None in results else True


class _FilterParser:
    """Parses one filter expression into a callable row -> True/False/None"""

    def __init__(self, text):
        self.text = text
        self.pos = 0

    def parse(self):
        predicate = self._item()
        assert self.pos == len(self.text), f'trailing input in {self.text!r}'
        return predicate

    def _startswith(self, prefix):
        return self.text.startswith(prefix, self.pos)

    def _item(self):
        negated = self._startswith('not.')
        if negated:
            self.pos += len('not.')
        for name, combine in (('or(', _any), ('and(', _all)):
            if self._startswith(name):
                self.pos += len(name) - 1
                children = self._group()

                def tree(row, children=children, combine=combine, negated=negated):
                    result = combine([child(row) for child in children])
                    return _negate(result) if negated else result
                return tree
        assert not negated, f'not. before a column in {self.text!r}'
        return self._condition()

    def _group(self):
        assert self.text[self.pos] == '(', f'expected ( at {self.pos} in {self.text!r}'
        self.pos += 1
        items = [self._item()]
        while self.text[self.pos] == ',':
            self.pos += 1
            items.append(self._item())
        assert self.text[self.pos] == ')', f'expected ) at {self.pos} in {self.text!r}'
        self.pos += 1
        return items

    def _word(self):
        end = self.text.index('.', self.pos)
        word = self.text[self.pos:end]
        self.pos = end + 1
        return word

    def _value(self):
        if self.text[self.pos] == '"':
            self.pos += 1
            chars = []
            while self.text[self.pos] != '"':
                if self.text[self.pos] == '\\':
                    self.pos += 1
                chars.append(self.text[self.pos])
                self.pos += 1
            self.pos += 1
            return ''.join(chars)
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] not in ',)':
            self.pos += 1
        return self.text[start:self.pos]

    def _condition(self):
        column = self._word()
        op = self._word()
        negated = op == 'not'
        if negated:
            op = self._word()
        if op == 'in':
            assert self.text[self.pos] == '(', f'expected ( after in. in {self.text!r}'
            self.pos += 1
            expected = [self._value()]
            while self.text[self.pos] == ',':
                self.pos += 1
                expected.append(self._value())
            self.pos += 1
        else:
            expected = self._value()

        def condition(row):
            result = _compare(op, row.get(column), expected)
            return _negate(result) if negated else result
        return condition


def matches_filters(row, filters):
    """True when every select()/update() filter selects the row"""
    for key, value in (filters or {}).items():
        expression = f'{key}{value}' if key in ('or', 'and') else f'{key}.{value}'
        if _FilterParser(expression).parse()(row) is not True:
            return False
    return True


class FakeSupabase:
    """In-memory replacement for SupabaseClient"""

    def __init__(self, orders=None, products=None):
        self.tables = {
            'orders': copy.deepcopy(ORDERS if orders is None else orders),
            'order_products': copy.deepcopy(ORDER_PRODUCTS if products is None else products),
        }
        self.calls = []
        self.error = None

    def select(self, table, columns='*', filters=None, order=None, limit=None, offset=None):
        self.calls.append({
            'method': 'select', 'table': table, 'filters': dict(filters or {}),
            'order': order, 'limit': limit, 'offset': offset,
        })
        if self.error:
            raise self.error
        rows = [copy.deepcopy(r) for r in self.tables[table] if matches_filters(r, filters)]
        start = offset or 0
        end = start + limit if limit is not None else None
        return rows[start:end]

    def update(self, table, values, filters):
        self.calls.append({'method': 'update', 'table': table, 'values': values,
                           'filters': dict(filters)})
        if self.error:
            raise self.error
        for row in self.tables[table]:
            if matches_filters(row, filters):
                row.update(values)

    def ping(self, table):
        if self.error:
            raise self.error
        return True

    def fail_with(self, message='permission denied for table orders', status_code=401):
        self.error = BackendError(message, status_code=status_code)


TEST_CONFIG = {
    'TESTING': True,
    'SECRET_KEY': 'test-secret',
    'ADMIN_USERNAME': 'Admin',
    'ADMIN_PASSWORD': 's3cret!',
    'SUPABASE_URL': 'https://example.supabase.co',
    'SUPABASE_KEY': 'test-key',
    'ORDERDESK_REQUIRE_LOGIN': True,
}


@pytest.fixture
def fake_backend():
    return FakeSupabase()


@pytest.fixture
def app_config(tmp_path):
    config = dict(TEST_CONFIG)
    config['LOG_DB'] = str(tmp_path / 'app_logs.db')
    return config


@pytest.fixture
def app(app_config, fake_backend):
    return create_app(app_config, supabase_client=fake_backend)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    """Test client with an admin session already started"""
    with client.session_transaction() as sess:
        sess['admin_id'] = 1
        sess['admin_username'] = 'Admin'
    return client
