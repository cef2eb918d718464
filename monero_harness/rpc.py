"""
JSON-RPC client for monerod and monero-wallet-rpc.
"""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import requests

from monero_harness.config.constants import JSON_RPC_ID, JSON_RPC_PATH, JSON_RPC_VERSION
from monero_harness.errors import MalformedResponse, RpcError, TransportError

T = TypeVar("T")


@dataclass(frozen=True)
class Request(Generic[T]):
    """
    A versioned JSON-RPC request.

    `id` and `jsonrpc` never change: there's only ever one request in flight
    per HTTP exchange, so no correlation is needed.
    """

    method: str
    params: T
    jsonrpc: str = JSON_RPC_VERSION
    id: str = JSON_RPC_ID

    @classmethod
    def new(cls, method: str, params: T) -> "Request[T]":
        return cls(method=method, params=params)

    def as_dict(self) -> dict[str, Any]:
        # monerod is picky about field order.
        return {
            "jsonrpc": self.jsonrpc,
            "id": self.id,
            "method": self.method,
            "params": self.params,
        }


@dataclass(frozen=True)
class Response(Generic[T]):
    id: Any
    jsonrpc: Any
    result: T

    @classmethod
    def parse(cls, body: Any, parse_result: Callable[[Any], T]) -> "Response[T]":
        """
        Unwrap a decoded response body.

        Raises:
            RpcError: If the body carries an error object
            MalformedResponse: If the body or its result has the wrong shape
        """
        if not isinstance(body, dict):
            raise MalformedResponse(f"Expected a JSON object, got {type(body).__name__}", body)

        error = body.get("error")
        if error is not None:
            if not isinstance(error, dict):
                error = {"message": str(error)}
            raise RpcError(error)

        if "result" not in body:
            raise MalformedResponse("No result in response", body)

        return cls(
            id=body.get("id"),
            jsonrpc=body.get("jsonrpc"),
            result=parse_result(body["result"]),
        )


def _identity(result: Any) -> Any:
    return result


class JsonRpcClient:
    """
    JSON-RPC 2.0 client posting to a single endpoint.

    Usage:
        rpc = JsonRpcClient.localhost(18081, name="monerod")
        header = rpc.call("get_block_header_by_height", {"height": 0})
    """

    def __init__(self, url: str, name: str | None = None, timeout: float = 30):
        self.url = url
        self.name = name or url
        self.timeout = timeout
        self.logger = logging.getLogger(f"rpc.{self.name}")
        self.pre_call_hook: Callable[[str], None] = lambda _: None

    @classmethod
    def localhost(cls, port: int, name: str | None = None, timeout: float = 30):
        return cls(f"http://127.0.0.1:{port}{JSON_RPC_PATH}", name=name, timeout=timeout)

    def set_pre_call_hook(self, hook: Callable[[str], None]):
        self.pre_call_hook = hook

    def call(
        self,
        method: str,
        params: Any = None,
        parse_result: Callable[[Any], T] = _identity,
    ) -> T:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name
            params: Method parameters (an object for monero services)
            parse_result: Turns the raw `result` into a typed value

        Returns:
            Parsed result from RPC call

        Raises:
            TransportError: If the HTTP request fails
            RpcError: If the service returns a non-2xx status or an error
            MalformedResponse: If the body can't be parsed into the result
        """
        self.pre_call_hook(method)

        request = Request.new(method, params if params is not None else {})
        self.logger.debug(f"RPC call: {method}({request.params})")

        try:
            resp = requests.post(self.url, json=request.as_dict(), timeout=self.timeout)
        except requests.RequestException as e:
            self.logger.warning(f"RPC request failed: {e}")
            raise TransportError(self.url, str(e)) from e

        if not resp.ok:
            self.logger.warning(f"RPC HTTP error {resp.status_code}: {resp.text}")
            raise RpcError(
                {
                    "code": resp.status_code,
                    "message": f"HTTP {resp.status_code} from {method}",
                    "data": resp.text,
                }
            )

        try:
            body = resp.json()
        except (json.JSONDecodeError, ValueError) as e:
            self.logger.warning(f"Invalid JSON response: {resp.text}")
            raise MalformedResponse(f"Invalid JSON: {e}", resp.text) from e

        try:
            response = Response.parse(body, parse_result)
        except RpcError as e:
            self.logger.warning(f"RPC error from {method}: {e}")
            raise

        return response.result
