"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.service.line_booking.driven_adapter.notifier.line_notifier_impl import LineNotifierImpl
from src.service.line_booking.driven_adapter.state.kv_store_impl import KvStoreImpl


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Kvrocks-backed key-value store (stateless, client resolved per call)
    kv_store = providers.Singleton(KvStoreImpl)

    # Outbound notification channel
    reservation_notifier = providers.Singleton(LineNotifierImpl, settings=config_service)


container = Container()
