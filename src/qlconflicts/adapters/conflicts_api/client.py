"""HTTP client for the deployed conflicts service."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Unpack
from urllib.parse import quote

import httpx

from qlconflicts.adapters.http_resilience import ResilientClient
from qlconflicts.config import RemoteApiConfig, get_remote_api_config

from .schema import (
    ErrorResponse,
    LoginResponse,
    PersonListAdapter,
    ProductListAdapter,
    ProductPayload,
    ResponsiblePersonPayload,
)

if TYPE_CHECKING:
    from types import TracebackType

    from pydantic import TypeAdapter

    from qlconflicts.adapters.http_resilience import RequestOptions

log = getLogger(__name__)

_UNAUTHORIZED = frozenset({401, 403})


class ConflictsApiError(RuntimeError):
    """Raised when the conflicts service fails or answers with an error status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class ConflictsApiClient:
    config: RemoteApiConfig = field(default_factory=get_remote_api_config)
    transport: httpx.BaseTransport | None = None
    _client: ResilientClient | None = field(default=None, init=False, repr=False)
    _token: str | None = field(default=None, init=False, repr=False)

    def __enter__(self) -> ConflictsApiClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
        self._token = None

    def login(self) -> str:
        response = self._send("POST", "/login", json={"password": self.config.password})
        if response.status_code in _UNAUTHORIZED:
            raise ConflictsApiError("Login rejected by conflicts service", status_code=401)
        self._raise_for_status(response)
        token = self._validate(LoginResponse, response).token
        self._token = token
        log.info("Logged in to conflicts service at %s", self.config.base_url)
        return token

    def responsible_persons(self) -> list[ResponsiblePersonPayload]:
        response = self._authorized("GET", "/responsible-persons")
        self._raise_for_status(response)
        return self._validate_list(PersonListAdapter, response)

    def products_for(self, email: str) -> list[ProductPayload]:
        response = self._authorized("GET", f"/products/{quote(email, safe='@')}")
        self._raise_for_status(response)
        return self._validate_list(ProductListAdapter, response)

    def resolve_conflict(
        self,
        remote_id: int,
        selected_value: str,
        *,
        comment: str,
        resolver: str,
    ) -> None:
        response = self._authorized(
            "POST",
            "/resolve-conflict",
            json={
                "conflictId": remote_id,
                "selectedValue": selected_value,
                "comment": comment,
                "resolvedBy": resolver,
            },
        )
        self._raise_for_status(response)

    def delete_conflict(self, remote_id: int) -> bool:
        """Delete a conflict; ``False`` when the service no longer knows it."""

        response = self._authorized("DELETE", f"/conflicts/{remote_id}")
        if response.status_code == httpx.codes.NOT_FOUND:
            return False
        self._raise_for_status(response)
        return True

    def _authorized(
        self, method: str, path: str, **kwargs: Unpack[RequestOptions]
    ) -> httpx.Response:
        if self._token is None:
            self.login()
        response = self._send(method, path, headers=self._auth_headers(), **kwargs)
        if response.status_code in _UNAUTHORIZED:
            log.info("Conflicts service token rejected; logging in again")
            self.login()
            response = self._send(method, path, headers=self._auth_headers(), **kwargs)
        return response

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._token}"}

    def _send(self, method: str, path: str, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        if self._client is None:
            self._client = ResilientClient(self.config.resilience, transport=self.transport)
        try:
            return self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise ConflictsApiError(f"{method} {path} failed: {exc}") from exc

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        message = response.reason_phrase
        try:
            message = ErrorResponse.model_validate(response.json()).error
        except ValueError:
            log.debug("Conflicts service error body was not JSON")
        raise ConflictsApiError(
            f"{response.request.method} {response.request.url.path} -> "
            f"{response.status_code}: {message}",
            status_code=response.status_code,
        )

    @staticmethod
    def _validate(model: type[LoginResponse], response: httpx.Response) -> LoginResponse:
        try:
            return model.model_validate(response.json())
        except ValueError as exc:
            raise ConflictsApiError(f"Unexpected conflicts service payload: {exc}") from exc

    @staticmethod
    def _validate_list[TItem](
        adapter: TypeAdapter[list[TItem]], response: httpx.Response
    ) -> list[TItem]:
        try:
            return adapter.validate_python(response.json())
        except ValueError as exc:
            raise ConflictsApiError(f"Unexpected conflicts service payload: {exc}") from exc
