"""Fake conflicts service and payload builders for adapter tests."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import httpx

from qlconflicts.config import RemoteApiConfig, ResilienceConfig, RetryPolicy

BASE_URL = "http://conflicts.test"
PASSWORD = "s3cret"  # noqa: S105

type Payload = dict[str, Any]


def product_payload(
    remote_id: int = 1,
    *,
    email: str = "jane@example.com",
    conflicts: list[Payload] | None = None,
) -> Payload:
    return {
        "id": remote_id,
        "item_number": 100000 + remote_id,
        "category": "KITCHEN",
        "description": None,
        "overall_reason": "values differ",
        "overall_equal": None,
        "responsible_person_name": "Jane Doe",
        "responsible_person_email": email,
        "created_at": "2024-02-01T10:00:00Z",
        "conflicts": conflicts or [],
    }


def conflict_payload(
    remote_id: int,
    quality_line: object = "Red",
    attribute: object = "Blue",
    *,
    conflict_type: str = "Color/Scent/Flavor or any form of variant/assortis",
    reason: str | None = None,
    **extra: object,
) -> Payload:
    return {
        "id": remote_id,
        "conflict_type": conflict_type,
        "quality_line_value": quality_line,
        "attribute_value": attribute,
        "reason": reason,
        "is_equal": False,
        "resolved_value": None,
        "resolution_comment": None,
        "resolved_by": None,
        "resolved_at": None,
        **extra,
    }


@dataclass
class FakeConflictsService:
    """In-process stand-in for the conflicts service HTTP API."""

    products: list[Payload] = field(default_factory=list[Payload])
    requests: list[httpx.Request] = field(default_factory=list[httpx.Request])
    token: str = "token-1"
    expire_token_once: bool = False
    failing_paths: dict[str, int] = field(default_factory=dict[str, int])

    def handler(self, request: httpx.Request) -> httpx.Response:  # noqa: PLR0911
        self.requests.append(request)
        path = request.url.path
        if path in self.failing_paths:
            return httpx.Response(self.failing_paths[path], json={"error": "Server error"})
        if path == "/login":
            if json.loads(request.content)["password"] != PASSWORD:
                return httpx.Response(401, json={"error": "Invalid password"})
            return httpx.Response(200, json={"token": self.token})
        if request.headers.get("Authorization") != f"Bearer {self.token}":
            return httpx.Response(401, json={"error": "Unauthorized"})
        if self.expire_token_once:
            self.expire_token_once = False
            return httpx.Response(403, json={"error": "Token expired"})
        if path == "/responsible-persons":
            persons = {
                p["responsible_person_email"]: p["responsible_person_name"] for p in self.products
            }
            return httpx.Response(
                200,
                json=[
                    {"responsible_person_name": name, "responsible_person_email": email}
                    for email, name in persons.items()
                ],
            )
        if path.startswith("/products/"):
            email = path.removeprefix("/products/")
            return httpx.Response(
                200, json=[p for p in self.products if p["responsible_person_email"] == email]
            )
        if path == "/resolve-conflict":
            body = json.loads(request.content)
            conflict = self._find(body["conflictId"])
            if conflict is None:
                return httpx.Response(404, json={"error": "Conflict not found"})
            conflict.update(
                resolved_value=body["selectedValue"],
                resolution_comment=body["comment"],
                resolved_by=body["resolvedBy"],
                resolved_at="2024-02-02T10:00:00Z",
            )
            return httpx.Response(200, json={"success": True})
        if path.startswith("/conflicts/") and request.method == "DELETE":
            remote_id = int(path.removeprefix("/conflicts/"))
            for product in self.products:
                for conflict in product["conflicts"]:
                    if conflict["id"] == remote_id:
                        product["conflicts"].remove(conflict)
                        return httpx.Response(200, json={"success": True})
            return httpx.Response(404, json={"error": "Conflict not found"})
        return httpx.Response(404, json={"error": "Not found"})

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def _find(self, remote_id: int) -> Payload | None:
        for product in self.products:
            for conflict in product["conflicts"]:
                if conflict["id"] == remote_id:
                    return conflict
        return None


def remote_config(password: str = PASSWORD) -> RemoteApiConfig:
    return RemoteApiConfig(
        base_url=BASE_URL,
        password=password,
        resilience=ResilienceConfig(
            name="conflicts-api-test",
            base_url=BASE_URL,
            retry=RetryPolicy(total=0),
        ),
    )
