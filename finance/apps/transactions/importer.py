"""Batch import of transactions from CSV files.

The upload is staged to a temporary file and processed off the request thread
by ``BatchImportRunner``. ``TransactionImportService`` does the work inside one
atomic block: rows are validated and converted to the base currency, bad rows
are skipped up to a limit and the summed balance change is applied once when
the whole file went through. Imported rows are historical, so budgets and the
balance guard are not applied to them.
"""

import csv
import datetime
import shutil
import tempfile
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from pathlib import Path
from uuid import UUID

import pydantic
import structlog
from django.db import connection
from django.db import transaction as db_transaction
from django.utils import timezone

from finance.config import get_settings
from finance.exceptions import BadData
from notifications.services import Notifier, get_notifier, jobs_topic
from rates.services import CurrencyConverter
from rates.utils import CURRENCY_CODE_RE, round_amount
from transactions.constants import (
    DESCRIPTION_MAX_LENGTH,
    IMPORT_DATE_TIME_FORMAT,
    IMPORT_HEADER,
    ImportJobStatus,
    TransactionCategory,
    TransactionType,
)
from transactions.models import ImportJob, Transaction
from transactions.services import signed_amount
from users.services import UserService

logger = structlog.get_logger()

IMPORT_SUCCESS_MESSAGE = "Import finished successfully."
IMPORT_FAILED_MESSAGE = "Import failed."


class ImportRow(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="ignore", str_strip_whitespace=True)

    type: TransactionType
    category: TransactionCategory
    amount: Decimal = pydantic.Field(ge=0, max_digits=19, decimal_places=2)
    currency: str = pydantic.Field(pattern=CURRENCY_CODE_RE.pattern)
    date_time: datetime.datetime
    description: str = pydantic.Field(default="", max_length=DESCRIPTION_MAX_LENGTH)

    @pydantic.field_validator("type", "category", "currency", mode="before")
    @classmethod
    def upper_case(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @pydantic.field_validator("date_time", mode="before")
    @classmethod
    def parse_date_time(cls, value):
        if not isinstance(value, str):
            return value
        try:
            parsed = datetime.datetime.strptime(value.strip(), IMPORT_DATE_TIME_FORMAT)
        except ValueError:
            raise ValueError(f"Invalid date/time format: {value!r}")
        return timezone.make_aware(parsed)

    @pydantic.field_validator("description", mode="before")
    @classmethod
    def empty_description(cls, value):
        return value or ""


def validate_import_row(row: dict) -> list[str]:
    """Return the field errors of a CSV row, empty when it is valid."""
    try:
        ImportRow.model_validate(row)
    except pydantic.ValidationError as e:
        return [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
    return []


def parse_import_row(row: dict) -> ImportRow:
    errors = validate_import_row(row)
    if errors:
        raise BadData("; ".join(errors))
    return ImportRow.model_validate(row)


class TransactionImportService:
    def __init__(
        self,
        converter: CurrencyConverter | None = None,
        notifier: Notifier | None = None,
        settings=None,
    ):
        self.converter = converter or CurrencyConverter()
        self.notifier = notifier or get_notifier()
        self.settings = settings or get_settings().imports

    def run(self, job_uuid: UUID) -> ImportJob:
        job = ImportJob.objects.get(uuid=job_uuid)
        job.status = ImportJobStatus.RUNNING.value
        job.save(update_fields=("status",))
        logger.info("transactions.import.started", job=str(job.uuid), user=str(job.user_id))

        try:
            with db_transaction.atomic():
                user = UserService.lock(job.user_id)
                processed, skipped, delta = self._import_file(job, user)
                if delta:
                    UserService.recalculate_balance(user.uuid, delta)
        except Exception as e:
            logger.exception("transactions.import.failed", job=str(job.uuid))
            self._finish(
                job, ImportJobStatus.FAILED, error=getattr(e, "message", str(e))
            )
            self.notifier.publish(jobs_topic(job.user_id), IMPORT_FAILED_MESSAGE)
            return job
        finally:
            self._remove_file(job.file_path)

        self._finish(
            job,
            ImportJobStatus.COMPLETED,
            processed=processed,
            skipped=skipped,
            delta=delta,
        )
        logger.info(
            "transactions.import.completed",
            job=str(job.uuid),
            processed=processed,
            skipped=skipped,
            balance_delta=str(delta),
        )
        self.notifier.publish(jobs_topic(job.user_id), IMPORT_SUCCESS_MESSAGE)
        return job

    def _import_file(self, job: ImportJob, user) -> tuple[int, int, Decimal]:
        processed = skipped = 0
        delta = Decimal("0")
        chunk = []

        with open(job.file_path, newline="", encoding="utf-8-sig") as file:
            reader = csv.DictReader(file)
            if reader.fieldnames is None:
                raise BadData("Import file is empty")
            reader.fieldnames = [name.strip().lower() for name in reader.fieldnames]
            missing = [name for name in IMPORT_HEADER if name not in reader.fieldnames]
            if missing:
                raise BadData(f"Import file misses columns: {', '.join(missing)}")

            for line_number, row in enumerate(reader, start=2):
                try:
                    item = parse_import_row(row)
                except BadData as e:
                    skipped += 1
                    logger.warning(
                        "transactions.import.row_skipped",
                        job=str(job.uuid),
                        line=line_number,
                        error=e.message,
                    )
                    if skipped > self.settings.skip_limit:
                        raise BadData(
                            f"More than {self.settings.skip_limit} rows are malformed"
                        )
                    continue

                chunk.append(self._build_transaction(job, user, item))
                delta += signed_amount(item.type, item.amount)
                if len(chunk) >= self.settings.chunk_size:
                    processed += self._write(chunk)
                    chunk = []

        processed += self._write(chunk)
        return processed, skipped, delta

    def _build_transaction(self, job: ImportJob, user, item: ImportRow) -> Transaction:
        amount_in_base_currency = self.converter.to_base_currency(
            user, item.amount, item.currency
        ).amount
        return Transaction(
            user=user,
            type=item.type.value,
            category=item.category.value,
            initial_amount=item.amount,
            initial_currency=item.currency,
            amount_in_base_currency=round_amount(amount_in_base_currency),
            date_time=item.date_time,
            description=item.description,
            job=job,
        )

    @staticmethod
    def _write(chunk: list[Transaction]) -> int:
        if chunk:
            Transaction.objects.bulk_create(chunk)
        return len(chunk)

    @staticmethod
    def _finish(
        job: ImportJob,
        status: ImportJobStatus,
        processed: int = 0,
        skipped: int = 0,
        delta: Decimal = Decimal("0"),
        error: str = "",
    ) -> None:
        job.status = status.value
        job.processed_count = processed
        job.skipped_count = skipped
        job.balance_delta = delta
        job.error = error
        job.finished_at = timezone.now()
        job.save()

    @staticmethod
    def _remove_file(file_path: str) -> None:
        if not file_path:
            return
        try:
            Path(file_path).unlink(missing_ok=True)
        except OSError:
            logger.exception("transactions.import.cleanup_failed", file=file_path)
        else:
            logger.info("transactions.import.file_removed", file=file_path)


class BatchImportRunner:
    """Stages uploads and runs import jobs in a bounded worker pool."""

    _executor = None

    def __init__(
        self,
        import_service: TransactionImportService | None = None,
        executor=None,
    ):
        self.import_service = import_service or TransactionImportService()
        self.executor = executor or self._shared_executor()

    @classmethod
    def _shared_executor(cls) -> ThreadPoolExecutor:
        if cls._executor is None:
            cls._executor = ThreadPoolExecutor(
                max_workers=get_settings().imports.workers,
                thread_name_prefix="transactions-import",
            )
        return cls._executor

    @staticmethod
    def create_job(source, user) -> ImportJob:
        """Copy ``source`` (an upload or a binary file) to a temporary file."""
        with tempfile.NamedTemporaryFile(
            prefix="transactions-", suffix=".csv", delete=False
        ) as staged:
            if hasattr(source, "chunks"):
                for chunk in source.chunks():
                    staged.write(chunk)
            else:
                shutil.copyfileobj(source, staged)

        job = ImportJob.objects.create(user=user, file_path=staged.name)
        logger.info("transactions.import.staged", job=str(job.uuid), file=staged.name)
        return job

    def submit(self, source, user) -> ImportJob:
        job = self.create_job(source, user)
        job_uuid = job.uuid
        db_transaction.on_commit(lambda: self.executor.submit(self._run, job_uuid))
        return job

    def _run(self, job_uuid: UUID) -> None:
        try:
            self.import_service.run(job_uuid)
        finally:
            # worker threads open their own connections
            connection.close()
