"""
Key-Value Store Implementation

Kvrocks-backed JSON store. Every value is the orjson encoding of a JSON document
stored as a plain string; reservations carry a server-side expiry (SET ... EX).
"""

import os
import re
import time
from typing import Any, List, Optional

from opentelemetry import trace
import orjson
from redis.exceptions import ResponseError

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.platform.state.kvrocks_client import kvrocks_client
from src.service.line_booking.app.interface.i_kv_store import IKvStore


# Get key prefix from environment for test isolation
_KEY_PREFIX = os.getenv('KVROCKS_KEY_PREFIX', '')

_GLOB_SPECIAL = re.compile(r'([*?\[\]\\])')


def _make_key(key: str) -> str:
    """Add prefix to key for test isolation in parallel testing"""
    return f'{_KEY_PREFIX}{key}'


def _strip_key(stored_key: str) -> str:
    return stored_key[len(_KEY_PREFIX) :] if stored_key.startswith(_KEY_PREFIX) else stored_key


def _as_text(value: Any) -> Optional[str]:
    if not isinstance(value, bytes):
        return value
    try:
        return value.decode()
    except UnicodeDecodeError:
        return None


class KvStoreImpl(IKvStore):
    """
    Storage Format:
        Key: {KVROCKS_KEY_PREFIX}{logical key}
        Type: String
        Value: JSON text
    """

    def __init__(self) -> None:
        self.tracer = trace.get_tracer(__name__)

    async def get_text(self, *, key: str) -> Optional[str]:
        with self.tracer.start_as_current_span(
            'kv_store.get',
            attributes={'cache.system': 'kvrocks', 'cache.operation': 'get', 'kv.key': key},
        ):
            client = kvrocks_client.get_client()
            started = time.perf_counter()
            try:
                value = await client.get(_make_key(key))
            except ResponseError as e:
                # Non-string value under the key (hash, list, ...)
                if str(e).startswith('WRONGTYPE'):
                    Logger.base.warning(f'⚠️ [KV] {key} does not hold a string value')
                    return None
                raise
            except UnicodeDecodeError:
                # Binary value written by another producer
                Logger.base.warning(f'⚠️ [KV] {key} holds undecodable bytes')
                return None
            finally:
                metrics.record_kvrocks_operation(
                    operation='get', duration=time.perf_counter() - started
                )
            if value is None:
                return None
            text = _as_text(value)
            if text is None:
                Logger.base.warning(f'⚠️ [KV] {key} holds undecodable bytes')
            return text

    async def get_json(self, *, key: str) -> Optional[Any]:
        text = await self.get_text(key=key)
        if text is None:
            return None
        try:
            return orjson.loads(text)
        except orjson.JSONDecodeError:
            Logger.base.debug(f'[KV] {key} holds non-JSON text, ignored')
            return None

    async def put(
        self, *, key: str, value: Any, expiration_seconds: Optional[int] = None
    ) -> None:
        with self.tracer.start_as_current_span(
            'kv_store.put',
            attributes={
                'cache.system': 'kvrocks',
                'cache.operation': 'set',
                'kv.key': key,
                'kv.expiration_seconds': expiration_seconds or 0,
            },
        ):
            client = kvrocks_client.get_client()
            started = time.perf_counter()
            try:
                await client.set(_make_key(key), orjson.dumps(value), ex=expiration_seconds)
            finally:
                metrics.record_kvrocks_operation(
                    operation='set', duration=time.perf_counter() - started
                )

    async def list_keys(self, *, prefix: str = '') -> List[str]:
        with self.tracer.start_as_current_span(
            'kv_store.list_keys',
            attributes={'cache.system': 'kvrocks', 'cache.operation': 'scan', 'kv.prefix': prefix},
        ):
            client = kvrocks_client.get_client()
            pattern = _GLOB_SPECIAL.sub(r'\\\1', _make_key(prefix)) + '*'
            started = time.perf_counter()
            keys: set[str] = set()
            try:
                # Cluster SCAN visits every primary; duplicates are collapsed
                async for stored_key in client.scan_iter(
                    match=pattern, count=settings.KVROCKS_SCAN_COUNT
                ):
                    text_key = _as_text(stored_key)
                    if text_key is not None:
                        keys.add(_strip_key(text_key))
            finally:
                metrics.record_kvrocks_operation(
                    operation='scan', duration=time.perf_counter() - started
                )
            return sorted(keys)
