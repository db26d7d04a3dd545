"""Base adapter class for all provider adapters."""

import logging
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Pattern, Sequence, Type, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from .config import Settings, get_cached_settings
from .exceptions import (
    AdapterError, EmptyResponseArrayError, InvalidEncodingError,
    MalformedResponseError, ProviderError, RequestFailedError
)
from .models import (
    AdapterCapability, AdapterConfig, AdapterInfo,
    AdapterRequest, AdapterResponse
)


logger = logging.getLogger(__name__)

_SENSITIVE_HEADERS = re.compile(r"(authorization|token|secret|api[_-]?key)", re.IGNORECASE)

T = TypeVar("T")
WireT = TypeVar("WireT", bound="WireModel")

CapabilityHandler = Callable[[Dict[str, Any]], Awaitable[Any]]


def redact_headers(headers: Dict[str, str]) -> Dict[str, str]:
    """Return a copy of headers safe for logging."""
    return {
        key: "***REDACTED***" if _SENSITIVE_HEADERS.search(key) else value
        for key, value in headers.items()
    }


class WireModel(BaseModel):
    """Base for provider response shapes.

    Strict so a missing or wrong-typed field fails decoding instead of being
    coerced; unknown fields are dropped.
    """
    model_config = ConfigDict(strict=True, extra="ignore")


@dataclass(frozen=True)
class ProviderResponse:
    """Status code and raw body of one provider call."""
    status_code: int
    body: bytes


class BaseAdapter(ABC):
    """Base class for provider adapters.

    Subclasses set the authorization scheme, any provider-wide headers and the
    settings field holding their API base URL. The adapter keeps no state
    between calls: the credential is passed into every operation.
    """

    AUTH_SCHEME: str = "Bearer"
    DEFAULT_HEADERS: Dict[str, str] = {}
    BASE_URL_SETTING: str = ""

    # Matches a credential in the URL path; all but group 1 is masked in logs
    SENSITIVE_PATH: Optional[Pattern[str]] = None

    def __init__(
        self,
        config: AdapterConfig,
        client: Optional[httpx.AsyncClient] = None,
        settings: Optional[Settings] = None
    ):
        self.config = config
        self.id = f"{config.name}-{config.version}"

        settings = settings or get_cached_settings()
        base_url = config.base_url or getattr(settings, self.BASE_URL_SETTING)
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = config.timeout_seconds or settings.ADAPTER_TIMEOUT_SECONDS

        # Host-supplied transport, used as-is and never closed here
        self._client = client

    @abstractmethod
    def get_capabilities(self) -> List[AdapterCapability]:
        """Return list of capabilities this adapter provides."""
        pass

    @abstractmethod
    def _capability_handlers(self) -> Dict[str, CapabilityHandler]:
        """Map capability names to handlers taking the request parameters."""
        pass

    async def execute(self, request: AdapterRequest) -> Any:
        """Run the typed operation named by the request's capability."""
        self.validate_request(request)

        handler = self._capability_handlers().get(request.capability)
        if not handler:
            raise ValueError(f"Unknown capability: {request.capability}")

        result = await handler(request.parameters)

        if result is False:
            raise ProviderError(
                f"{self.config.name} reported failure for {request.capability}",
                details={"capability": request.capability}
            )
        if isinstance(result, BaseModel):
            return result.model_dump()
        return result

    async def handle_request(self, request: AdapterRequest) -> AdapterResponse:
        """Execute a request and fold any failure into the response."""
        start_time = time.time()

        try:
            data = await self.execute(request)
        except AdapterError as e:
            logger.warning(f"{self.config.name} {request.capability} failed: {e.message}")
            return AdapterResponse(
                request_id=request.id,
                capability=request.capability,
                status="error",
                error=e.message,
                error_code=e.error_code,
                duration_ms=(time.time() - start_time) * 1000,
                metadata={k: v for k, v in e.details.items() if k != "raw_body"}
            )
        except ValueError as e:
            logger.warning(f"{self.config.name} rejected {request.capability}: {str(e)}")
            return AdapterResponse(
                request_id=request.id,
                capability=request.capability,
                status="error",
                error=str(e),
                error_code="invalid_request",
                duration_ms=(time.time() - start_time) * 1000
            )

        return AdapterResponse(
            request_id=request.id,
            capability=request.capability,
            status="success",
            data=data,
            duration_ms=(time.time() - start_time) * 1000
        )

    def validate_request(self, request: AdapterRequest) -> None:
        """Validate a request against adapter capabilities."""
        capabilities = {cap.name: cap for cap in self.get_capabilities()}

        if request.capability not in capabilities:
            raise ValueError(f"Unknown capability: {request.capability}")

        capability = capabilities[request.capability]
        for param in capability.required_parameters:
            if param not in request.parameters:
                raise ValueError(f"Missing required parameter: {param}")

    def get_info(self) -> AdapterInfo:
        """Get adapter information."""
        return AdapterInfo(
            id=self.id,
            name=self.config.name,
            category=self.config.category,
            version=self.config.version,
            description=self.config.description,
            base_url=self.base_url,
            capabilities=self.get_capabilities()
        )

    # Request building

    def build_headers(self, token: str, has_body: bool = False) -> Dict[str, str]:
        """Build the header set for one request."""
        headers = {"Authorization": f"{self.AUTH_SCHEME} {token}"}
        headers.update(self.DEFAULT_HEADERS)
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    def redact_url(self, url: str) -> str:
        """Return the URL with credential path segments masked."""
        if self.SENSITIVE_PATH is None:
            return url
        return self.SENSITIVE_PATH.sub(r"\g<1>***REDACTED***", url)

    # Transport

    async def _send(
        self,
        method: str,
        path: str,
        token: str,
        json_body: Optional[Dict[str, Any]] = None
    ) -> ProviderResponse:
        """Send one request and return its status and raw body."""
        url = f"{self.base_url}{path}"
        headers = self.build_headers(token, has_body=json_body is not None)
        safe_url = self.redact_url(url)

        logger.debug(f"{self.config.name} {method} {safe_url} headers={redact_headers(headers)}")

        try:
            if self._client is not None:
                response = await self._client.request(method, url, headers=headers, json=json_body)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await client.request(method, url, headers=headers, json=json_body)
        except httpx.RequestError as e:
            logger.error(f"{self.config.name} {method} {safe_url} failed: {str(e)}")
            raise RequestFailedError(
                f"Failed to send request: {e}",
                details={"method": method, "url": safe_url}
            ) from e

        logger.debug(f"{self.config.name} {method} {safe_url} -> {response.status_code}")
        return ProviderResponse(status_code=response.status_code, body=response.content)

    # Response decoding

    def _decode_text(self, response: ProviderResponse) -> str:
        """Decode the raw body as UTF-8 without replacing invalid bytes."""
        try:
            return response.body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidEncodingError(
                f"Failed to parse response as UTF-8: {e}",
                details={"status_code": response.status_code}
            ) from e

    def _decode(self, response: ProviderResponse, wire_model: Type[WireT]) -> WireT:
        """Decode the raw body into a provider wire model."""
        text = self._decode_text(response)
        try:
            return wire_model.model_validate_json(text)
        except ValidationError as e:
            logger.warning(
                f"{self.config.name} returned a body that does not match "
                f"{wire_model.__name__} (status {response.status_code})"
            )
            raise MalformedResponseError(
                f"Failed to decode {wire_model.__name__}: {e.error_count()} validation error(s)",
                raw_body=text,
                status_code=response.status_code,
                details={"errors": e.errors(include_url=False, include_input=False)}
            ) from e

    @staticmethod
    def _first(items: Sequence[T], field: str) -> T:
        """Select the first element of a list-shaped response field."""
        if not items:
            raise EmptyResponseArrayError(field)
        return items[0]
