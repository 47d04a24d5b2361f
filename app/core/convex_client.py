"""
Convex DB Client - Python bridge for Convex serverless database
Provides async HTTP client to interact with Convex queries and mutations
"""

import httpx
from typing import Any, Dict, Optional

from app.core.config import settings
from app.core.exceptions import ConfigurationException, ExternalServiceException
from app.core.logging import get_logger

logger = get_logger(__name__)


class ConvexClient:
    """
    Async HTTP client for Convex DB

    Usage:
        client = ConvexClient()

        # Query
        page = await client.query("products:paginate", {
            "plan": {...},
            "paginationOpts": {"numItems": 12, "cursor": None},
        })

        # Mutation
        inserted = await client.mutation("products:seedIfEmpty", {"products": [...]})
    """

    def __init__(
        self,
        deployment_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.deployment_url = deployment_url or settings.CONVEX_URL
        if not self.deployment_url:
            raise ConfigurationException(
                "CONVEX_URL not set. Add CONVEX_URL=https://your-deployment.convex.cloud to .env",
                details={"setting": "CONVEX_URL"},
            )

        # Remove trailing slash
        self.deployment_url = self.deployment_url.rstrip("/")
        self.timeout = timeout if timeout is not None else settings.CONVEX_TIMEOUT_SECONDS
        self._transport = transport

        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.deployment_url,
                timeout=self.timeout,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def _call(self, kind: str, function_path: str, args: Optional[Dict[str, Any]]) -> Any:
        """POST a function call to /api/{kind} and unwrap the returned value"""
        client = await self._get_client()

        payload = {
            "path": function_path,
            "args": args or {},
            "format": "json",
        }

        try:
            response = await client.post(f"/api/{kind}", json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Convex HTTP error",
                function=function_path,
                status_code=e.response.status_code,
                body=e.response.text,
            )
            raise

        data = response.json()
        if data.get("status") == "error":
            error_message = data.get("errorMessage", f"Convex {kind} failed")
            logger.error(f"Convex {kind} error", function=function_path, error=error_message)
            raise ExternalServiceException("convex", error_message, function_path=function_path)

        return data.get("value")

    async def query(self, function_path: str, args: Optional[Dict[str, Any]] = None) -> Any:
        """
        Execute a Convex query function

        Args:
            function_path: Path to function, e.g., "products:paginate"
            args: Arguments to pass to the function

        Returns:
            Query result (typed based on Convex function return)
        """
        return await self._call("query", function_path, args)

    async def mutation(self, function_path: str, args: Optional[Dict[str, Any]] = None) -> Any:
        """
        Execute a Convex mutation function

        Mutations run as a single transaction on the Convex side.

        Args:
            function_path: Path to function, e.g., "products:seedIfEmpty"
            args: Arguments to pass to the function

        Returns:
            Mutation result
        """
        return await self._call("mutation", function_path, args)

    async def close(self):
        """Close the HTTP client"""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None


# Singleton instance
_convex_client: Optional[ConvexClient] = None


def get_convex_client() -> ConvexClient:
    """Get singleton Convex client instance"""
    global _convex_client
    if _convex_client is None:
        _convex_client = ConvexClient()
    return _convex_client


async def close_convex_client():
    """Close the global Convex client"""
    global _convex_client
    if _convex_client is not None:
        await _convex_client.close()
        _convex_client = None
