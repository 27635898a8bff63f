# src/rocketlane_sdk/base/transport.py

from abc import ABC, abstractmethod
from logging import LoggerAdapter
from typing import Any, Dict, Optional


class Transport(ABC):
    """
    Interface of the HTTP layer the resources talk to.

    Implementations own the network concerns: base URL, authentication
    headers, timeouts, retries and backoff. The query and pagination layers
    only ever see the decoded JSON bodies returned here, and any exception
    raised by an implementation reaches the caller unchanged.
    """

    @abstractmethod
    async def request(
        self,
        method: str,
        path: str,
        logger: LoggerAdapter,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        """
        Perform one request and return the decoded response body.

        Args:
            method: HTTP method ("GET", "POST", "PUT", "DELETE", "PATCH").
            path: Path relative to the API base, e.g. "/api/1.0/tasks".
            logger: Logger adapter for recording operations.
            params: Query-string parameters (the flat parameter map).
            json: Request body.

        Returns:
            The decoded JSON body (None for empty responses).
        """
        pass

    async def get(
        self,
        path: str,
        logger: LoggerAdapter,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        return await self.request("GET", path, logger, params=params)

    async def post(
        self,
        path: str,
        logger: LoggerAdapter,
        json: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        return await self.request("POST", path, logger, params=params, json=json)

    async def put(
        self,
        path: str,
        logger: LoggerAdapter,
        json: Optional[Any] = None,
    ) -> Any:
        return await self.request("PUT", path, logger, json=json)

    async def delete(
        self,
        path: str,
        logger: LoggerAdapter,
        json: Optional[Any] = None,
    ) -> Any:
        return await self.request("DELETE", path, logger, json=json)
