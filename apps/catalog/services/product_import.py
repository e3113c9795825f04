"""
Spreadsheet import of catalog products.

The first row of the sheet is the header. Expected columns:
name, sku, description, short_description, weight, price, permalink,
category_name, qty
"""

import logging
import os
import re
import zipfile
from dataclasses import dataclass
from decimal import Decimal

import tablib
from xlrd import XLRDError
from django.core.exceptions import ValidationError
from django.db import transaction

from apps.catalog.exceptions import ImportFormatError, ProductImportError
from apps.catalog.models import Product, ProductCategory

logger = logging.getLogger(__name__)

IMPORT_DESCRIPTION = 'Importação'

SPREADSHEET_FORMATS = {
    '.csv': 'csv',
    '.xls': 'xls',
    '.xlsx': 'xlsx',
}

# Raised by the csv decoder, tablib and the xls/xlsx readers on corrupt files
UNREADABLE_SPREADSHEET_ERRORS = (
    UnicodeDecodeError,
    zipfile.BadZipFile,
    XLRDError,
    tablib.InvalidDimensions,
)


@dataclass
class ImportResult:
    created: int = 0
    restocked: int = 0
    skipped: int = 0


def _as_str(value):
    if value is None:
        return ''
    # Spreadsheet cells holding whole numbers come back as floats (123.0)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def _as_int(value):
    """Leading integer of ``value``; 0 when there is none."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    match = re.match(r'\s*([+-]?\d+)', str(value))
    return int(match.group(1)) if match else 0


def _number_or_zero(value):
    if _as_str(value) == '':
        return Decimal('0')
    # xls/xlsx cells come back as binary floats (19.9 -> 19.899999...)
    if isinstance(value, float):
        return Decimal(str(value))
    return value


class ProductImportService:
    """
    Creates products from spreadsheet rows.

    Rows naming an existing product only add stock. Unknown categories are
    created on the fly. The whole file is imported in a single transaction.
    """

    @staticmethod
    def open_spreadsheet(file) -> tablib.Dataset:
        filename = getattr(file, 'name', '') or ''
        extension = os.path.splitext(filename)[1].lower()
        file_format = SPREADSHEET_FORMATS.get(extension)
        if file_format is None:
            raise ImportFormatError(filename)

        content = file.read()
        try:
            if file_format == 'csv' and isinstance(content, bytes):
                content = content.decode('utf-8-sig')
            return tablib.Dataset().load(content, format=file_format)
        except UNREADABLE_SPREADSHEET_ERRORS as exc:
            logger.info("Unreadable spreadsheet %s: %s", filename, exc)
            raise ImportFormatError(filename, reason=str(exc)) from exc

    @staticmethod
    def read_rows(dataset: tablib.Dataset):
        """Yield ``(row_number, row_dict)``; row numbers match the sheet (header is 1)."""
        headers = [_as_str(header).lower() for header in (dataset.headers or [])]
        for row_number, values in enumerate(dataset, start=2):
            yield row_number, dict(zip(headers, values))

    @staticmethod
    def import_file(file) -> ImportResult:
        dataset = ProductImportService.open_spreadsheet(file)
        result = ProductImportService.import_rows(ProductImportService.read_rows(dataset))
        logger.info(
            "Imported %s: %s created, %s restocked, %s skipped",
            getattr(file, 'name', 'spreadsheet'),
            result.created, result.restocked, result.skipped,
        )
        return result

    @staticmethod
    @transaction.atomic
    def import_rows(rows) -> ImportResult:
        result = ImportResult()

        for row_number, row in rows:
            name = _as_str(row.get('name'))
            if not name:
                logger.info("Import row %s skipped: no product name", row_number)
                result.skipped += 1
                continue

            qty = _as_int(row.get('qty'))
            product = Product.objects.filter(name=name).order_by('pk').first()

            if product is not None:
                # Same name: keep the product, add the quantity as new stock
                if qty > 0:
                    product.adjust_stock(qty, IMPORT_DESCRIPTION)
                    result.restocked += 1
                else:
                    result.skipped += 1
                continue

            product = ProductImportService._create_product(row_number, name, row)
            if qty > 0:
                product.adjust_stock(qty, IMPORT_DESCRIPTION)
            result.created += 1

        return result

    @staticmethod
    def _create_product(row_number, name, row) -> Product:
        category_name = _as_str(row.get('category_name'))
        categories = []
        if category_name:
            categories.append(ProductCategory.get_or_create_by_name(category_name))

        try:
            return Product.objects.create_with_categories(
                categories,
                name=name,
                sku=_as_str(row.get('sku')),
                description=_as_str(row.get('description')),
                short_description=_as_str(row.get('short_description')),
                weight=_number_or_zero(row.get('weight')),
                price=_number_or_zero(row.get('price')),
                permalink=_as_str(row.get('permalink')),
            )
        except ValidationError as exc:
            raise ProductImportError(row_number, exc.messages) from exc
