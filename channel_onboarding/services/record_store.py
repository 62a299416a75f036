"""
Client records kept as rows of the intake spreadsheet.

Column position is the only addressing scheme: the writer order in
``ROW_FIELDS`` and the letters in ``FIELD_COLUMNS`` must change together.
Nothing is cached; every read pulls the whole sheet again.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, TYPE_CHECKING

from googleapiclient.errors import HttpError
from pydantic import ValidationError as PydanticValidationError

from channel_onboarding.core.errors import (
    InvalidStatusTransitionError,
    RecordNotFoundError,
    StoreReadError,
    StoreWriteError,
    ValidationError,
)
from channel_onboarding.models import ClientRecord, ClientStatus

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from channel_onboarding.clients.google_sheets import GoogleSheetsClient

logger = logging.getLogger(__name__)

# Order of the 18 cells written by ``append_record`` (columns A..R).
ROW_FIELDS: Tuple[str, ...] = (
    "id",
    "company_name",
    "industry",
    "mission",
    "target_audience",
    "posting_frequency",
    "email",
    "phone",
    "channel_id",
    "channel_title",
    "channel_url",
    "generated_description",
    "keywords",
    "banner_url",
    "trailer_url",
    "status",
    "channel_name",
    "created_at",
)

# setup_completed_at sits after the appended block and is only ever updated.
FIELD_COLUMNS: Dict[str, str] = {
    **{field: chr(ord("A") + index) for index, field in enumerate(ROW_FIELDS)},
    "setup_completed_at": "S",
}

_APPEND_LAST_COLUMN = FIELD_COLUMNS[ROW_FIELDS[-1]]
_LAST_COLUMN = FIELD_COLUMNS["setup_completed_at"]
_HEADER_ROWS = 1
_GOOGLE_API_ERRORS = (HttpError, OSError)


def serialize_value(value: Any) -> str:
    """Render one field the way it is stored in a cell."""
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)


def record_to_row(record: ClientRecord) -> List[str]:
    return [serialize_value(getattr(record, field)) for field in ROW_FIELDS]


def row_to_record(row: Sequence[Any]) -> ClientRecord:
    """Deserialize positionally; cells Google omitted read as empty strings."""
    columns = (*ROW_FIELDS, "setup_completed_at")
    cells = [str(cell) if cell is not None else "" for cell in row]
    cells.extend([""] * (len(columns) - len(cells)))
    return ClientRecord.model_validate(dict(zip(columns, cells)))


class ClientRecordRepository(ABC):
    """Narrow persistence surface for client records."""

    @abstractmethod
    async def append_record(self, record: ClientRecord) -> None:
        ...

    @abstractmethod
    async def fetch_all_records(self) -> List[ClientRecord]:
        ...

    @abstractmethod
    async def fetch_record_by_id(self, record_id: str) -> Optional[ClientRecord]:
        ...

    @abstractmethod
    async def update_record_fields(
        self, record_id: str, fields: Mapping[str, Any]
    ) -> None:
        ...


class SheetsClientRecordStore(ClientRecordRepository):
    """Client records stored one per row in a Google Sheet tab."""

    def __init__(self, sheets_client: "GoogleSheetsClient", *, sheet_name: str = "Clients") -> None:
        self._sheets = sheets_client
        self._sheet_name = sheet_name

    def _range(self, a1: str) -> str:
        return f"{self._sheet_name}!{a1}"

    async def append_record(self, record: ClientRecord) -> None:
        """Append one row; id uniqueness is the caller's responsibility."""
        try:
            await self._sheets.append_values(
                self._range(f"A:{_APPEND_LAST_COLUMN}"),
                [record_to_row(record)],
            )
        except _GOOGLE_API_ERRORS as exc:
            logger.error("Error adding client %s to sheet: %s", record.id, exc)
            raise StoreWriteError(f"Failed to save client: {exc}") from exc
        logger.info("Client %s added to sheet %s", record.id, self._sheet_name)

    async def _fetch_rows(self) -> List[List[Any]]:
        try:
            return await self._sheets.get_values(
                self._range(f"A{_HEADER_ROWS + 1}:{_LAST_COLUMN}")
            )
        except _GOOGLE_API_ERRORS as exc:
            logger.error("Error reading clients from sheet: %s", exc)
            raise StoreReadError(f"Failed to read clients: {exc}") from exc

    async def fetch_all_records(self) -> List[ClientRecord]:
        rows = await self._fetch_rows()
        records = []
        for offset, row in enumerate(rows):
            if not row or not str(row[0]).strip():
                continue
            try:
                records.append(row_to_record(row))
            except PydanticValidationError as exc:
                # One hand-edited row must not hide every other client.
                row_number = offset + _HEADER_ROWS + 1
                logger.warning("Skipping malformed client row %s: %s", row_number, exc)
        return records

    async def fetch_record_by_id(self, record_id: str) -> Optional[ClientRecord]:
        """Linear scan over every row; None when no row carries ``record_id``."""
        for record in await self.fetch_all_records():
            if record.id == record_id:
                return record
        return None

    async def _locate_row(self, record_id: str) -> Tuple[int, List[Any]]:
        rows = await self._fetch_rows()
        for offset, row in enumerate(rows):
            if row and str(row[0]) == record_id:
                return offset + _HEADER_ROWS + 1, row
        raise RecordNotFoundError(f"Client {record_id} not found")

    async def update_record_fields(self, record_id: str, fields: Mapping[str, Any]) -> None:
        """Write each known field with its own cell update.

        Unknown field names are skipped. The updates are independent: a failure
        stops the sequence and leaves earlier cells written.
        """
        row_number, row = await self._locate_row(record_id)

        if "status" in fields:
            try:
                target = ClientStatus(serialize_value(fields["status"]))
            except ValueError as exc:
                raise ValidationError(f"Unknown client status {fields['status']!r}") from exc
            try:
                current = row_to_record(row).status
            except PydanticValidationError as exc:
                raise StoreReadError(f"Malformed client row {row_number}: {exc}") from exc
            if not current.can_transition_to(target):
                raise InvalidStatusTransitionError(
                    f"Client {record_id} cannot move from {current.value} to {target.value}"
                )

        for field, value in fields.items():
            column = FIELD_COLUMNS.get(field)
            if column is None:
                logger.debug("Skipping unmapped field %s for client %s", field, record_id)
                continue
            try:
                await self._sheets.update_values(
                    self._range(f"{column}{row_number}"), [[serialize_value(value)]]
                )
            except _GOOGLE_API_ERRORS as exc:
                logger.error(
                    "Error updating %s for client %s: %s", field, record_id, exc
                )
                raise StoreWriteError(f"Failed to update {field}: {exc}") from exc

        logger.info("Updated client %s fields %s", record_id, sorted(fields))


__all__ = [
    "ClientRecordRepository",
    "FIELD_COLUMNS",
    "ROW_FIELDS",
    "SheetsClientRecordStore",
    "record_to_row",
    "row_to_record",
    "serialize_value",
]
