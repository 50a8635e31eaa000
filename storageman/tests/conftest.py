"""
Pytest fixtures for Storageman tests.
"""

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from storageman import inventory
from storageman.models import Country, Product


User = get_user_model()


@pytest.fixture
def user(db):
    """Create a test user (acts as the authenticated operator)."""
    return User.objects.create_user(
        username='operator',
        password='testpass123'
    )


@pytest.fixture
def supervisor(db):
    """Create a supervisor user."""
    return User.objects.create_user(
        username='supervisor',
        password='testpass123'
    )


@pytest.fixture
def product(db):
    """Create a test product."""
    return Product.objects.create(name='Apple')


@pytest.fixture
def germany(db):
    return Country.objects.create(code='DE', name='Germany')


@pytest.fixture
def france(db):
    return Country.objects.create(code='FR', name='France')


@pytest.fixture
def storage(db, product, supervisor, user):
    """A 2x2 storage (blocks A1, A2, B1, B2)."""
    return inventory.create_storage(
        'Cold Room',
        product_id=product.pk,
        supervisor_id=supervisor.pk,
        dimension='2x2',
        capacity='40 pallets',
        actor=user,
    )


@pytest.fixture
def a1(storage):
    """Block A1 of the test storage."""
    return storage.blocks.get(name='A1')


@pytest.fixture
def add_box(storage, a1, product, user, germany):
    """Factory adding a box to block A1."""
    def _add_box(total_boxes=5, block=None, countries=None, **kwargs):
        block = block or a1
        fields = {
            'product_id': product.pk,
            'user_id': user.pk,
            'grade': 'A',
            'weight': Decimal('12.500'),
            'price': Decimal('30.00'),
            'total_boxes': total_boxes,
            'countries': countries if countries is not None else [germany.pk],
            'actor': user,
        }
        fields.update(kwargs)
        return inventory.add_box(storage.pk, block.pk, **fields)
    return _add_box
