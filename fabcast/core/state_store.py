"""Key-value backends for published overlay state (get/set by key, last write wins)."""
import json
import logging
import threading
from typing import Any, Optional, Protocol

import httpx
import redis

from fabcast.core.errors import StoreFailure

logger = logging.getLogger(__name__)


class StateStore(Protocol):
    name: str

    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def close(self) -> None:
        ...


def _decode(raw: Any) -> Optional[Any]:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise StoreFailure(f"stored value is not JSON: {e}") from e


class MemoryStateStore:
    """In-process store for development and tests; lost on restart."""

    name = "memory"

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            raw = self._data.get(key)
        return _decode(raw)

    def set(self, key: str, value: Any) -> None:
        # Stored as JSON text so callers never share mutable objects with the store
        encoded = json.dumps(value)
        with self._lock:
            self._data[key] = encoded

    def close(self) -> None:
        pass


class RedisStateStore:
    """Plain Redis (or any Redis-protocol server) via redis-py."""

    name = "redis"

    def __init__(self, url: str, timeout_sec: float = 5.0) -> None:
        self._client = redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=timeout_sec,
            socket_timeout=timeout_sec,
        )

    def get(self, key: str) -> Optional[Any]:
        try:
            raw = self._client.get(key)
        except redis.RedisError as e:
            raise StoreFailure(f"redis GET {key}: {e}") from e
        return _decode(raw)

    def set(self, key: str, value: Any) -> None:
        try:
            self._client.set(key, json.dumps(value))
        except redis.RedisError as e:
            raise StoreFailure(f"redis SET {key}: {e}") from e

    def close(self) -> None:
        self._client.close()


class UpstashStateStore:
    """Upstash Redis over its REST API: POST a command array, read {"result": ...}."""

    name = "upstash"

    def __init__(
        self,
        rest_url: str,
        token: str,
        timeout_sec: float = 5.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=rest_url.rstrip("/"),
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout_sec,
            transport=transport,
        )

    def _command(self, *args: str) -> Any:
        try:
            resp = self._client.post("/", json=list(args))
        except httpx.HTTPError as e:
            raise StoreFailure(f"upstash {args[0]}: {e}") from e
        try:
            body = resp.json()
        except ValueError as e:
            raise StoreFailure(f"upstash {args[0]}: non-JSON reply ({resp.status_code})") from e
        if not isinstance(body, dict):
            raise StoreFailure(f"upstash {args[0]}: unexpected reply shape")
        if resp.status_code != 200 or "error" in body:
            raise StoreFailure(f"upstash {args[0]}: {resp.status_code} {body.get('error')}")
        return body.get("result")

    def get(self, key: str) -> Optional[Any]:
        return _decode(self._command("GET", key))

    def set(self, key: str, value: Any) -> None:
        self._command("SET", key, json.dumps(value))

    def close(self) -> None:
        self._client.close()


def build_store(
    redis_url: str = "",
    upstash_url: str = "",
    upstash_token: str = "",
    timeout_sec: float = 5.0,
) -> StateStore:
    """Pick a backend from configuration; memory when nothing is configured."""
    if redis_url:
        logger.info("State store: redis")
        return RedisStateStore(redis_url, timeout_sec=timeout_sec)
    if upstash_url and upstash_token:
        logger.info("State store: upstash REST")
        return UpstashStateStore(upstash_url, upstash_token, timeout_sec=timeout_sec)
    logger.warning(
        "No FABCAST_REDIS_URL or UPSTASH_REDIS_REST_URL/TOKEN set; "
        "using in-memory overlay state (lost on restart)"
    )
    return MemoryStateStore()
