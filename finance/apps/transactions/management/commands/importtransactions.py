from django.core.management.base import BaseCommand, CommandError

from finance.exceptions import NotFound
from transactions.constants import ImportJobStatus
from transactions.importer import BatchImportRunner, TransactionImportService
from users.services import UserService


class Command(BaseCommand):
    help = "Import transactions of a user from a CSV file"

    def add_arguments(self, parser):
        parser.add_argument("file_path", type=str)
        parser.add_argument("username", type=str)

    def handle(self, *args, **kwargs):
        try:
            user = UserService.find_by_username(kwargs["username"])
        except NotFound as e:
            raise CommandError(e.message)

        try:
            with open(kwargs["file_path"], "rb") as file:
                job = BatchImportRunner.create_job(file, user)
        except OSError as e:
            raise CommandError(f"Unable to read {kwargs['file_path']}: {e}")

        job = TransactionImportService().run(job.uuid)
        if job.status != ImportJobStatus.COMPLETED.value:
            raise CommandError(f"Import failed: {job.error}")

        self.stdout.write(
            self.style.SUCCESS(
                f"Imported {job.processed_count} transactions, "
                f"skipped {job.skipped_count}, balance change {job.balance_delta}"
            )
        )
