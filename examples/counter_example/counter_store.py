import logging

from minirex import create_store
from counter_reducers import counter_reducer

logger = logging.getLogger("counter")


def logging_middleware(store, action, next):
    logger.info("%s: %s", store.name, action)
    next(action)


# 創建Store；pydantic 模型以欄位值比較，distinct 模式下 RESET 到 0 不會重複通知
store = create_store(
    counter_reducer,
    middleware=[logging_middleware],
    config={"distinct": True, "name": "counter"},
)
