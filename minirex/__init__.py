"""
minirex：以 reactivex 為通知層的極簡單向狀態容器。
"""

from .errors import ConfigurationError, MinirexError, ReducerError, StoreError
from .config import StoreConfig, load_config
from .types import Middleware, NextDispatcher, Reducer
from .chain import compose, create_dispatchers
from .middleware import ActionContext, BaseMiddleware
from .reducers import action_key, combine_reducers, create_reducer, on
from .store import Store, create_store
from .immutable_utils import to_dict, to_immutable, to_pydantic

__version__ = "0.1.0"

# 匯出所有公開 API
__all__ = [
    # Errors
    "MinirexError", "StoreError", "ReducerError", "ConfigurationError",

    # Config
    "StoreConfig", "load_config",

    # Types
    "Middleware", "NextDispatcher", "Reducer",

    # Chain
    "compose", "create_dispatchers",

    # Middleware
    "ActionContext", "BaseMiddleware",

    # Reducers
    "action_key", "combine_reducers", "create_reducer", "on",

    # Store
    "Store", "create_store",

    # Immutable Utils
    "to_dict", "to_immutable", "to_pydantic",
]
