"""
Client for the spreadsheet web-app endpoint.

One URL serves everything: reads are `GET ?action=<name>&adminCode=<code>`,
writes are `POST` with a JSON body carrying `action` and `adminCode`. Each call
is exactly one request; there are no retries and no caching.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional, Union

import httpx
from pydantic import BaseModel, ValidationError

from tutor_admin.api.schemas import ApiEnvelope, MutationOutcome, ServerStats
from tutor_admin.core.config import settings
from tutor_admin.core.enums import MutationAction, ReadAction
from tutor_admin.core.exceptions import AuthError, NetworkError, ServerError
from tutor_admin.core.schemas import Snapshot

logger = logging.getLogger(__name__)

# The endpoint rejects CORS preflight, so JSON goes out as text/plain.
_POST_HEADERS = {"Content-Type": "text/plain;charset=utf-8"}


class ApiClient:
    def __init__(
        self,
        api_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_url = api_url or settings.api_url
        self._client = client or httpx.AsyncClient(follow_redirects=True)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def verify(self, token: str) -> ServerStats:
        """Prove the admin code is accepted. Raises AuthError or NetworkError."""
        data = await self._get(ReadAction.STATS, token)
        stats = self._parse(ServerStats, data)
        if not stats.success:
            raise AuthError(stats.error or "Invalid admin code")
        return stats

    async def load_all(self, token: str) -> Snapshot:
        """Fetch students, lessons, payments, referrers and config in one round trip."""
        data = await self._get(ReadAction.ADMIN, token)
        envelope = self._parse(ApiEnvelope, data)
        if not envelope.success:
            raise AuthError(envelope.error or "Session expired. Please log in again.")
        try:
            return Snapshot.model_validate(
                {
                    "students": data.get("students"),
                    "lessons": data.get("lessons"),
                    "payments": data.get("payments"),
                    "referrers": data.get("referrers"),
                    "config": data.get("config"),
                }
            )
        except ValidationError as e:
            logger.warning("Malformed admin dataset: %s", e)
            raise NetworkError() from e

    async def mutate(
        self,
        action: MutationAction,
        payload: Union[BaseModel, Mapping[str, Any]],
        token: str,
    ) -> MutationOutcome:
        """Run one write action. Raises ServerError or NetworkError."""
        if isinstance(payload, BaseModel):
            body = payload.model_dump(mode="json", by_alias=True)
        else:
            body = dict(payload)
        body["action"] = MutationAction(action).value
        body["adminCode"] = token

        logger.info("POST action=%s", body["action"])
        try:
            response = await self._client.post(
                self.api_url, content=json.dumps(body), headers=_POST_HEADERS
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("POST action=%s failed: %s", body["action"], type(e).__name__)
            raise NetworkError() from e

        outcome = self._parse(MutationOutcome, self._decode(response))
        if not outcome.success:
            raise ServerError(outcome.error or "Something went wrong.")
        return outcome

    async def _get(self, action: ReadAction, token: str) -> Dict[str, Any]:
        logger.info("GET action=%s", action.value)
        try:
            response = await self._client.get(
                self.api_url, params={"action": action.value, "adminCode": token}
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("GET action=%s failed: %s", action.value, type(e).__name__)
            raise NetworkError() from e
        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            logger.warning("Response is not JSON (status %s)", response.status_code)
            raise NetworkError() from e
        if not isinstance(data, dict):
            raise NetworkError()
        return data

    @staticmethod
    def _parse(model, data: Dict[str, Any]):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.warning("Unexpected response shape: %s", e)
            raise NetworkError() from e
