"""
Base class for endpoint services.

Services do not inherit the transport; they hold a reference to a shared
BoxHTTPClient and use it to build and execute requests.
"""

from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from box_client.exceptions import DecodeError, MissingFieldError, RequestBuildError
from box_client.http import BoxHTTPClient

T = TypeVar("T", bound=BaseModel)


class BaseEndpointClient:
    """Common path building and response decoding for endpoint services."""

    def __init__(
        self,
        http_client: BoxHTTPClient,
        base_path: str,
    ):
        """
        Initialize the endpoint client.

        Args:
            http_client: The shared HTTP client
            base_path: Base path for this endpoint (e.g., "/groups")
        """
        self._http = http_client
        self._base_path = base_path.rstrip("/")

    @property
    def http(self) -> BoxHTTPClient:
        return self._http

    @property
    def base_path(self) -> str:
        """Get the base path for this endpoint."""
        return self._base_path

    def _build_path(self, *parts: str) -> str:
        """Build a path from the base path and additional parts."""
        clean_parts = [str(p).strip("/") for p in parts if p]
        if clean_parts:
            return f"{self._base_path}/{'/'.join(clean_parts)}"
        return self._base_path

    @staticmethod
    def _require(field_name: str, value: Optional[str], message: Optional[str] = None) -> str:
        """Raise MissingFieldError for an empty or blank argument."""
        if value is None or not str(value).strip():
            raise MissingFieldError(field_name, message=message)
        return value

    @staticmethod
    def _build_model(model: Type[T], **values: Any) -> T:
        """
        Build a payload or query model from call arguments.

        Raises:
            RequestBuildError: If the arguments do not fit the model
        """
        try:
            return model(**values)
        except PydanticValidationError as e:
            raise RequestBuildError(
                f"Invalid {model.__name__}: {e}",
                details={"model": model.__name__},
            ) from e

    def _query_to_params(self, query: Optional[BaseModel]) -> Optional[Dict[str, Any]]:
        """Convert a query model to request parameters."""
        if query is None:
            return None
        return query.model_dump(mode="json", exclude_none=True)

    def _send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Any] = None,
    ) -> httpx.Response:
        request = self._http.build_request(method, path, params=params, json_data=json_data)
        return self._http.execute(request)

    @staticmethod
    def _decode(response: httpx.Response, model: Type[T]) -> T:
        """
        Decode a response body into model.

        Raises:
            DecodeError: If the body is not JSON or does not fit the model
        """
        try:
            return model.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise DecodeError(
                f"Cannot decode {model.__name__} from response: {e}",
                status_code=response.status_code,
            ) from e
