"""
Transport-agnostic request handling for the availability matcher.

The handler owns everything a web framework would otherwise scatter around:
method gating, CORS headers, JSON decoding and the mapping of failures to
status codes. The HTTP app and the CLI both delegate to it, and the matcher
dependency is expressed as a protocol so tests can swap in a stub.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence

from rich.console import Console
from rich.markup import escape

from ..adapters.request_schema import MatchRequest
from ..config import AppConfig, ServerConfig
from ..domain.availability_matcher import AvailabilityMatcher
from ..domain.exceptions import InvalidRequestError
from ..domain.models import AvailabilityRecord, MatchResult, TargetSelector

console = Console(stderr=True)


class MatcherProtocol(Protocol):
    """Protocol describing the matcher behaviour needed by the handler."""

    def match(
        self,
        booking_time: str,
        employees: Sequence[AvailabilityRecord],
        target: Optional[TargetSelector] = None,
    ) -> MatchResult:
        """Return the ranked match result."""


@dataclass
class HandlerResponse:
    """Status, headers and JSON payload (None for an empty body)."""
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    payload: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200


class AvailabilityRequestHandler:
    """
    Turns a raw request (method + body) into a HandlerResponse.
    """

    def __init__(
        self,
        matcher: MatcherProtocol,
        server_config: ServerConfig | None = None,
    ) -> None:
        self._matcher = matcher
        self._server_config = server_config or ServerConfig()

    @classmethod
    def from_config(cls, config: AppConfig) -> "AvailabilityRequestHandler":
        """Build a handler with a matcher sized from the configuration."""
        matcher = AvailabilityMatcher(
            slots_per_employee=config.matching.slots_per_employee,
            best_availability_size=config.matching.best_availability_size,
        )
        return cls(matcher=matcher, server_config=config.server)

    def handle(
        self,
        method: str,
        body: bytes | str | Mapping[str, Any] | None,
    ) -> HandlerResponse:
        """
        Process one request.

        Args:
            method: HTTP method name
            body: Raw body bytes/text, or an already decoded JSON object

        Returns:
            HandlerResponse; never raises
        """
        method = method.upper()

        if method == "OPTIONS":
            return self._respond(200)

        if method != "POST":
            return self._respond(405, {"error": "Method not allowed. Please use POST."})

        try:
            request = MatchRequest.from_payload(self._decode_body(body))
            result = self._matcher.match(
                request.client_booking_time,
                request.records(),
                request.selector(),
            )
            payload = result.to_dict()
        except InvalidRequestError as exc:
            console.print(f"[yellow]Rejected request: {escape(str(exc))}[/yellow]")
            return self._respond(400, self._error_payload(exc))
        except Exception as exc:
            console.print(f"[bold red]Error processing request:[/bold red] {escape(repr(exc))}")
            return self._respond(500, {
                "error": "Internal server error",
                "message": str(exc),
            })

        return self._respond(200, payload)

    @staticmethod
    def _decode_body(body: bytes | str | Mapping[str, Any] | None) -> Any:
        """Decode a JSON body; mappings are passed through untouched."""
        if isinstance(body, Mapping):
            return dict(body)

        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")

        try:
            return json.loads(body or "")
        except json.JSONDecodeError as exc:
            raise InvalidRequestError("Invalid JSON body", str(exc)) from exc

    @staticmethod
    def _error_payload(exc: InvalidRequestError) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": exc.error}
        if exc.message is not None:
            payload["message"] = exc.message
        return payload

    def _respond(self, status_code: int, payload: Dict[str, Any] | None = None) -> HandlerResponse:
        return HandlerResponse(
            status_code=status_code,
            headers=self._server_config.cors_headers(),
            payload=payload,
        )
