"""Google Sheets client wrapper for the client intake sheet."""

from __future__ import annotations

import asyncio
from typing import Any, List, TYPE_CHECKING

from googleapiclient.discovery import build

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from channel_onboarding.services.credentials import CredentialSource


class GoogleSheetsClient:
    """Append, read and overwrite ranges of a single spreadsheet.

    Ranges use A1 notation (``Clients!A2:S``). Values are sent ``RAW`` so ids
    and ISO timestamps are stored exactly as written.
    """

    def __init__(self, credential_source: "CredentialSource", *, spreadsheet_id: str) -> None:
        self._credential_source = credential_source
        self._spreadsheet_id = spreadsheet_id

    async def append_values(self, range_: str, rows: List[List[Any]]) -> str:
        """Append rows after the last populated row and return the updated range."""
        credentials = await self._credential_source.get_credentials()

        def _execute_append() -> str:
            service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
            result = (
                service.spreadsheets()
                .values()
                .append(
                    spreadsheetId=self._spreadsheet_id,
                    range=range_,
                    valueInputOption="RAW",
                    insertDataOption="INSERT_ROWS",
                    body={"values": rows},
                )
                .execute()
            )
            updates = result.get("updates", {})
            return updates.get("updatedRange") or updates.get("tableRange") or ""

        return await asyncio.to_thread(_execute_append)

    async def get_values(self, range_: str) -> List[List[Any]]:
        """Return the rows of ``range_``; trailing empty cells are omitted by Google."""
        credentials = await self._credential_source.get_credentials()

        def _execute_fetch() -> List[List[Any]]:
            service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
            response = (
                service.spreadsheets()
                .values()
                .get(
                    spreadsheetId=self._spreadsheet_id,
                    range=range_,
                    majorDimension="ROWS",
                )
                .execute()
            )
            return response.get("values", [])

        return await asyncio.to_thread(_execute_fetch)

    async def update_values(self, range_: str, rows: List[List[Any]]) -> int:
        """Overwrite ``range_`` with ``rows`` and return the number of updated cells."""
        credentials = await self._credential_source.get_credentials()

        def _execute_update() -> int:
            service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
            result = (
                service.spreadsheets()
                .values()
                .update(
                    spreadsheetId=self._spreadsheet_id,
                    range=range_,
                    valueInputOption="RAW",
                    body={"values": rows},
                )
                .execute()
            )
            return int(result.get("updatedCells", 0))

        return await asyncio.to_thread(_execute_update)


__all__ = ["GoogleSheetsClient"]
