"""
请求限流 - 按 (API Key, 操作类型) 计数的固定窗口限流器

设计原理：
- 窗口从该键第一次请求开始计时，持续 window_seconds 秒
- 读（GET）和写（其他方法）分别计数、分别限额
- "检查 + 计数" 在同一把锁内完成（Redis 下为 SET NX EX + INCR 事务），并发请求不会少计

计数存储：
- 默认使用进程内字典，条目按需创建、从不淘汰
- 多进程部署时启用 Redis，让所有进程共享计数
"""
import logging
import time
from threading import Lock
from typing import Callable, Dict, Tuple

logger = logging.getLogger(__name__)

READ = "read"
WRITE = "write"


def classify_method(method: str) -> str:
    """GET 为读操作，其余为写操作"""
    return READ if method.upper() == "GET" else WRITE


class RateLimiter:
    """固定窗口限流器"""

    def __init__(
        self,
        read_limit: int,
        write_limit: int,
        window_seconds: float = 60,
        use_redis: bool = False,
        redis_host: str = 'localhost',
        redis_port: int = 6379,
        redis_db: int = 0,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        初始化限流器

        Args:
            read_limit: 每个窗口内读请求上限
            write_limit: 每个窗口内写请求上限
            window_seconds: 窗口长度（秒）
            use_redis: 是否使用Redis共享计数
            redis_host: Redis主机
            redis_port: Redis端口
            redis_db: Redis库编号
            clock: 时钟函数（测试时可注入）
        """
        self.limits = {READ: read_limit, WRITE: write_limit}
        self.window_seconds = window_seconds
        self.clock = clock
        self.lock = Lock()
        # (owner_id, 类型) -> [计数, 窗口结束时间]
        self._windows: Dict[Tuple[str, str], list] = {}
        self.redis_client = None

        if use_redis:
            import redis
            self.redis_client = redis.Redis(
                host=redis_host, port=redis_port, db=redis_db, decode_responses=True
            )
            self.redis_client.ping()
            logger.info("✓ 限流计数使用 Redis")

    def get_limit(self, request_type: str) -> int:
        return self.limits[request_type]

    def try_acquire(self, owner_id: str, request_type: str) -> bool:
        """
        尝试为一次请求计数

        Args:
            owner_id: API Key ID
            request_type: READ 或 WRITE

        Returns:
            True 表示放行，False 表示超限（超限请求不计数）
        """
        limit = self.get_limit(request_type)
        if self.redis_client is not None:
            return self._try_acquire_redis(owner_id, request_type, limit)

        with self.lock:
            now = self.clock()
            key = (owner_id, request_type)
            window = self._windows.get(key)

            if window is None or now >= window[1]:
                window = [0, now + self.window_seconds]
                self._windows[key] = window

            if window[0] >= limit:
                return False

            window[0] += 1
            return True

    def _try_acquire_redis(self, owner_id: str, request_type: str, limit: int) -> bool:
        key = f"ratelimit:{owner_id}:{request_type}"
        # 键创建时即带 TTL，INCR 保留已有 TTL；两条命令在同一事务中执行
        pipe = self.redis_client.pipeline(transaction=True)
        pipe.set(key, 0, ex=max(1, int(self.window_seconds)), nx=True)
        pipe.incr(key)
        _, count = pipe.execute()
        # INCR 先计数后比较，第 limit+1 个请求开始拒绝
        return count <= limit

    def reset(self):
        """清空所有计数"""
        with self.lock:
            self._windows.clear()
        logger.info("✓ 限流计数已清空")
