"""
Gateway to the spreadsheet web app that stores every table.
Reads and writes go over HTTP; any failure degrades to the static
offline dataset so callers always receive a usable payload.
"""

import asyncio
import copy
import logging
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

import aiohttp

from manutencao.core.config import get_settings, SHEETS_URL_PLACEHOLDER
from manutencao.core.fallback_data import FALLBACK_BY_TAB, OFFLINE_WRITE_RESULT, TabName

logger = logging.getLogger(__name__)


class SheetAction(str, Enum):
    """Write actions understood by the web app."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class SheetsRequestError(Exception):
    """Raised internally when the web app answers with an unusable response."""
    pass


class SheetsGateway:
    """
    HTTP client for the spreadsheet web app.

    GET ``<url>?tab=<Tab>`` returns the rows of a tab; POST ``<url>`` with
    ``{action, tab, data|id}`` mutates it. The fallback is total: no network
    or protocol error ever reaches the caller.
    """

    def __init__(self, base_url: Optional[str] = None, timeout_seconds: Optional[float] = None):
        settings = get_settings()
        self.base_url = settings.SHEETS_URL if base_url is None else base_url
        self._session_timeout = aiohttp.ClientTimeout(
            total=timeout_seconds or settings.SHEETS_TIMEOUT_SECONDS
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url) and SHEETS_URL_PLACEHOLDER not in self.base_url

    async def fetch_table(self, tab: TabName) -> Any:
        """Read every row of a tab."""
        return await self.request("GET", {"tab": tab.value})

    async def mutate(
        self,
        action: SheetAction,
        tab: TabName,
        data: Optional[Dict[str, Any]] = None,
        record_id: Optional[str] = None,
    ) -> Any:
        """Send a create/update/delete to a tab."""
        params: Dict[str, Any] = {"action": action.value, "tab": tab.value}
        if data is not None:
            params["data"] = data
        if record_id is not None:
            params["id"] = record_id
        return await self.request("POST", params)

    async def request(self, method: str, params: Dict[str, Any]) -> Any:
        """
        Issue a request to the web app.

        Args:
            method: "GET" for reads, "POST" for writes
            params: ``{"tab": ...}`` for reads, ``{"action", "tab", "data"|"id"}`` for writes

        Returns:
            The ``data`` member of the response envelope when present, the raw
            JSON body otherwise, or the offline fallback on any failure
        """
        if not self.is_configured:
            logger.debug("Sheets URL not configured, using mock data")
            return self._fallback(params)

        label = params.get("tab") or params.get("action")
        start_time = datetime.utcnow()

        try:
            async with aiohttp.ClientSession(timeout=self._session_timeout) as client_session:
                headers = {"Content-Type": "application/json"}
                if method == "GET":
                    call = client_session.get(self.base_url, params={"tab": params["tab"]}, headers=headers)
                else:
                    call = client_session.post(self.base_url, json=params, headers=headers)

                async with call as response:
                    if not 200 <= response.status < 300:
                        raise SheetsRequestError(f"HTTP Error: {response.status} - {response.reason}")
                    # Apps Script answers JSON with a text/html or text/plain content type
                    result = await response.json(content_type=None)

            if isinstance(result, dict) and result.get("status") == "error":
                raise SheetsRequestError(result.get("message") or "Erro retornado pela API")

            duration_ms = int((datetime.utcnow() - start_time).total_seconds() * 1000)
            logger.info(f"Sheets {method} {label} answered in {duration_ms}ms")

            if isinstance(result, dict) and result.get("data") is not None:
                return result["data"]
            return result

        except asyncio.TimeoutError:
            logger.error(f"Sheets request timeout ({method} {label})")
        except Exception as e:
            logger.error(f"Sheets request error ({method} {label}): {e}")

        logger.warning(f"Erro na conexão com API ({method} {label}). Usando dados de exemplo/mock.")
        return self._fallback(params)

    def _fallback(self, params: Dict[str, Any]) -> Any:
        """Static dataset for reads, synthetic success for writes."""
        if params.get("action"):
            logger.info(f"Simulating {params['action']} on {params.get('tab')} (offline mode)")
            return dict(OFFLINE_WRITE_RESULT)

        tab = params.get("tab")
        logger.info(f"Using mock data for {tab}")
        try:
            rows = FALLBACK_BY_TAB[TabName(tab)]
        except ValueError:
            logger.warning(f"No offline dataset for tab {tab}")
            return []
        return copy.deepcopy(rows)
