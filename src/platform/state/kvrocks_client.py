from typing import List, Optional, Union

from redis.asyncio import ConnectionPool as AsyncConnectionPool, Redis as AsyncRedis
from redis.asyncio.cluster import ClusterNode, RedisCluster

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


# Type alias for client that works in both standalone and cluster mode
KvrocksClientType = Union[AsyncRedis, RedisCluster]


def _parse_cluster_nodes(nodes_str: str) -> List[ClusterNode]:
    """
    Parse comma-separated cluster nodes string.

    Args:
        nodes_str: "host1:port1,host2:port2"

    Returns:
        List of ClusterNode objects
    """
    nodes: List[ClusterNode] = []
    for node in nodes_str.split(','):
        node = node.strip()
        if not node:
            continue
        host, port_str = node.rsplit(':', 1)
        nodes.append(ClusterNode(host=host, port=int(port_str)))
    return nodes


class KvrocksClient:
    """
    Async Kvrocks Client with connection pool.

    Usage:
        await kvrocks_client.initialize()  # In startup
        client = kvrocks_client.get_client()  # In handlers
    """

    def __init__(self) -> None:
        self._client: Optional[KvrocksClientType] = None
        self._is_cluster: bool = False

    async def initialize(self) -> KvrocksClientType:
        """Initialize connection pool (idempotent)"""
        if self._client is not None:
            return self._client

        if settings.KVROCKS_CLUSTER_MODE:
            self._client = await self._initialize_cluster()
            self._is_cluster = True
        else:
            self._client = await self._initialize_standalone()
            self._is_cluster = False

        return self._client

    async def _initialize_standalone(self) -> AsyncRedis:
        pool = AsyncConnectionPool.from_url(
            f'redis://{settings.KVROCKS_HOST}:{settings.KVROCKS_PORT}/{settings.KVROCKS_DB}',
            password=settings.KVROCKS_PASSWORD if settings.KVROCKS_PASSWORD else None,
            decode_responses=settings.REDIS_DECODE_RESPONSES,
            max_connections=settings.KVROCKS_POOL_MAX_CONNECTIONS,
            socket_timeout=settings.KVROCKS_POOL_SOCKET_TIMEOUT,
            socket_connect_timeout=settings.KVROCKS_POOL_SOCKET_CONNECT_TIMEOUT,
            socket_keepalive=settings.KVROCKS_POOL_SOCKET_KEEPALIVE,
            health_check_interval=settings.KVROCKS_POOL_HEALTH_CHECK_INTERVAL,
        )
        client = AsyncRedis.from_pool(pool)
        await client.ping()  # Fail-fast
        Logger.base.info(
            f'✅ Kvrocks connected: {settings.KVROCKS_HOST}:{settings.KVROCKS_PORT}/{settings.KVROCKS_DB}'
        )
        return client

    async def _initialize_cluster(self) -> RedisCluster:
        if not settings.KVROCKS_CLUSTER_NODES:
            raise ValueError(
                'KVROCKS_CLUSTER_NODES must be set when KVROCKS_CLUSTER_MODE is True. '
                'Format: "host1:port1,host2:port2"'
            )

        client = RedisCluster(
            startup_nodes=_parse_cluster_nodes(settings.KVROCKS_CLUSTER_NODES),
            password=settings.KVROCKS_PASSWORD if settings.KVROCKS_PASSWORD else None,
            decode_responses=settings.REDIS_DECODE_RESPONSES,
            max_connections=settings.KVROCKS_POOL_MAX_CONNECTIONS,
            socket_timeout=settings.KVROCKS_POOL_SOCKET_TIMEOUT,
            socket_connect_timeout=settings.KVROCKS_POOL_SOCKET_CONNECT_TIMEOUT,
            socket_keepalive=settings.KVROCKS_POOL_SOCKET_KEEPALIVE,
            health_check_interval=settings.KVROCKS_POOL_HEALTH_CHECK_INTERVAL,
            require_full_coverage=True,
            read_from_replicas=False,
        )
        await client.ping()  # Fail-fast, no retry
        Logger.base.info('✅ Kvrocks cluster connected')
        return client

    def get_client(self) -> KvrocksClientType:
        """Get Redis client (standalone or cluster)"""
        if self._client is None:
            raise RuntimeError(
                'Kvrocks client not initialized. '
                'Call await kvrocks_client.initialize() during startup.'
            )
        return self._client

    @property
    def is_cluster_mode(self) -> bool:
        return self._is_cluster

    async def disconnect(self) -> None:
        """Close connection pool"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            self._is_cluster = False


# Global singleton
kvrocks_client = KvrocksClient()
