"""
測試共用的 reducer 與中介軟體。
"""

from typing import Any

from reactivex import Subject

from minirex import Store

NOT_FOUND = "not found"


def string_reducer(state: str, action: Any) -> str:
    """字串 action 直接成為新狀態，其他 action 得到 "not found"。"""
    return action if isinstance(action, str) else NOT_FOUND


class IncrementMiddleware:
    """每次被呼叫時計數，並透過 invocations 發出收到的 action。"""

    def __init__(self) -> None:
        self.counter = 0
        self.invocations = Subject()

    def add(self, action: Any) -> None:
        if isinstance(action, str):
            self.invocations.on_next(action)

    def __call__(self, store: Store[Any], action: Any, next) -> None:
        self.add(action)
        self.counter += 1
        next(action)


class ExtraActionIncrementMiddleware(IncrementMiddleware):
    """呼叫 next 兩次：一次原 action，一次 "another action"。"""

    def __call__(self, store: Store[Any], action: Any, next) -> None:
        self.add(action)
        self.counter += 1
        next(action)
        next("another action")


class ExtraActionIfDispatchedIncrementMiddleware(IncrementMiddleware):
    """第一次被呼叫時，在轉發之後重新 dispatch 一個新 action。"""

    def __init__(self) -> None:
        super().__init__()
        self.has_dispatched = False

    def __call__(self, store: Store[Any], action: Any, next) -> None:
        self.add(action)
        self.counter += 1
        next(action)
        if not self.has_dispatched:
            self.has_dispatched = True
            store.dispatch("another action")

