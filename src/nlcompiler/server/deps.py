"""
Shared dependencies for routes.
"""

from functools import lru_cache

import redis

from nlcompiler.core.compiler import Compiler
from nlcompiler.core.config import CompilerConfig
from nlcompiler.core.memory import SessionStore


@lru_cache
def get_config() -> CompilerConfig:
    return CompilerConfig.from_env()


def get_redis(db: int | None = None):
    config = get_config()
    return redis.Redis(
        host=config.redis_host,
        port=config.redis_port,
        db=config.redis_db if db is None else db,
    )


def get_session_store() -> SessionStore:
    return SessionStore(get_redis(), capacity=get_config().memory_size)


@lru_cache
def get_compiler() -> Compiler:
    return Compiler(config=get_config())
