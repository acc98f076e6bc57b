from typing import Any, Dict, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.line_booking.app.interface.i_kv_store import IKvStore


class DumpKvUseCase:
    """Raw `{key, value}` pairs under a prefix, for operators inspecting the store."""

    def __init__(self, *, kv_store: IKvStore) -> None:
        self.kv_store = kv_store

    @classmethod
    @inject
    def depends(
        cls,
        kv_store: IKvStore = Depends(Provide[Container.kv_store]),
    ) -> Self:
        return cls(kv_store=kv_store)

    @Logger.io
    async def dump(self, *, prefix: str = '') -> List[Dict[str, Any]]:
        items: List[Dict[str, Any]] = []
        for key in await self.kv_store.list_keys(prefix=prefix):
            items.append({'key': key, 'value': await self.kv_store.get_json(key=key)})
        return items
