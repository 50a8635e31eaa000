"""
Catalog reference entities: products and countries.

Catalog management lives elsewhere; Storageman only needs rows to
point at and to check for existence.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from storageman.models.base import SoftDeleteModel


class Product(SoftDeleteModel):
    """A product stored in boxes."""

    name = models.CharField(max_length=100, verbose_name=_('Name'))

    class Meta:
        verbose_name = _('Product')
        verbose_name_plural = _('Products')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name


class Country(models.Model):
    """Destination country of a box."""

    code = models.CharField(max_length=2, unique=True, verbose_name=_('Code'))
    name = models.CharField(max_length=100, verbose_name=_('Name'))

    class Meta:
        verbose_name = _('Country')
        verbose_name_plural = _('Countries')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name
