"""RapidAPI AI Image Upscaler client implementation."""

from __future__ import annotations

import os
from typing import Any

import requests
from dotenv import load_dotenv
from requests.exceptions import HTTPError, RequestException
from requests_toolbelt.multipart.encoder import MultipartEncoder

from image_upscaler.models.state import Scale

API_KEY_ENV = "AI_IMAGE_UPSCALER_API_KEY"


class UpscaleRequestError(HTTPError):
    """Exception raised when the endpoint answers with a non-success status."""
    pass


class UpscaleResponseError(RequestException):
    """Exception raised when the response body has no usable result."""
    pass


class RapidApiUpscaler:
    """Handles RapidAPI integration for image upscaling."""

    def __init__(self, api_key: str | None = None, timeout: float = 300) -> None:
        """Initialize the upscaler client with API authentication.

        Args:
            api_key: RapidAPI key. If None, read from the environment / .env file.
            timeout: Seconds to wait for each request
        """
        if api_key is None:
            _ = load_dotenv()
            api_key = os.getenv(API_KEY_ENV)
        if not api_key:
            raise ValueError(
                f"{API_KEY_ENV} not found in environment variables. "
                + "Please add it to your .env file."
            )

        self.api_key: str = api_key
        self.host: str = "ai-image-upscaler1.p.rapidapi.com"
        self.base_url: str = f"https://{self.host}"
        self.timeout: float = timeout

    def _make_request(
        self,
        method: str,
        endpoint: str,
        data: Any = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """Make an API request with error handling.

        Args:
            method: HTTP method
            endpoint: API endpoint
            data: Request body (dict or MultipartEncoder)
            headers: Additional headers

        Returns:
            Response object

        Raises:
            UpscaleRequestError: If the endpoint returns an error status
            requests.exceptions.RequestException: If the request fails
        """
        url = f"{self.base_url}{endpoint}"
        request_headers = {
            "x-rapidapi-key": self.api_key,
            "x-rapidapi-host": self.host,
        }

        if headers:
            request_headers.update(headers)

        # A MultipartEncoder carries its own boundary in the content type
        if hasattr(data, "content_type"):
            request_headers["Content-Type"] = data.content_type

        response = requests.request(
            method,
            url,
            data=data,
            headers=request_headers,
            timeout=self.timeout,
        )
        try:
            response.raise_for_status()
        except HTTPError as e:
            raise UpscaleRequestError(
                f"{e} - Response: {response.text}", response=response
            ) from e
        return response

    def build_payload(
        self,
        name: str,
        content: bytes,
        media_type: str,
        scale: Scale | None = None,
    ) -> MultipartEncoder:
        """Package an image as multipart form content.

        Args:
            name: File name sent with the image part
            content: Raw image bytes
            media_type: MIME type of the image
            scale: Quality selector to transmit; omitted when None

        Returns:
            Encoder ready to be sent as the request body
        """
        fields: list[tuple[str, Any]] = [("image", (name, content, media_type))]
        if scale is not None:
            fields.append(("scale", str(scale.factor)))
        return MultipartEncoder(fields=fields)

    def upscale(self, payload: MultipartEncoder) -> str:
        """Submit a prepared payload and return the upscaled image.

        Args:
            payload: Multipart body from build_payload

        Returns:
            Base64-encoded upscaled image as returned by the endpoint

        Raises:
            UpscaleRequestError: If the endpoint returns an error status
            UpscaleResponseError: If the body has no ``result_base64`` string
            requests.exceptions.RequestException: If the request fails
        """
        response = self._make_request("POST", "/v1", data=payload)

        try:
            body = response.json()
        except ValueError as e:
            raise UpscaleResponseError(
                f"Response is not valid JSON: {response.text[:200]}", response=response
            ) from e

        result = body.get("result_base64") if isinstance(body, dict) else None
        if not isinstance(result, str):
            raise UpscaleResponseError(
                "Response has no 'result_base64' field", response=response
            )
        return result
