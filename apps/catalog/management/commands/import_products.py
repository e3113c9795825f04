from pathlib import Path

from django.core.files import File
from django.core.management.base import BaseCommand, CommandError

from apps.catalog.exceptions import ImportFormatError, ProductImportError
from apps.catalog.services import ProductImportService


class Command(BaseCommand):
    help = "Import products from a .csv, .xls or .xlsx spreadsheet"

    def add_arguments(self, parser):
        parser.add_argument("path", help="Path to the spreadsheet")

    def handle(self, *args, **opts):
        path = Path(opts["path"])
        if not path.is_file():
            raise CommandError(f"File not found: {path}")

        try:
            with path.open("rb") as fh:
                result = ProductImportService.import_file(File(fh, name=path.name))
        except (ImportFormatError, ProductImportError) as e:
            raise CommandError(str(e)) from e

        self.stdout.write(self.style.SUCCESS(
            f"Import: products +{result.created}, restocked {result.restocked}, skipped {result.skipped}"
        ))
