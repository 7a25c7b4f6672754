import logging
from typing import Any, Generic, List, Optional, Sequence

from reactivex import Observable, Subject
from reactivex import operators as ops

from .chain import MiddlewareCallable, create_dispatchers
from .config import ConfigLike, load_config
from .errors import ReducerError, StoreError
from .immutable_utils import to_immutable
from .types import NextDispatcher, ReducerFunction, S, StateSelector

logger = logging.getLogger(__name__)


class _ChangeSubject(Subject):
    """
    逐一通知每個訂閱者的 Subject。

    某個訂閱者拋出異常時，其餘訂閱者仍會收到同一個狀態；
    全部通知完之後再拋出第一個異常。
    """

    def _on_next_core(self, value: Any) -> None:
        with self.lock:
            observers = self.observers.copy()

        error: Optional[Exception] = None
        for observer in observers:
            try:
                observer.on_next(value)
            except Exception as err:
                if error is None:
                    error = err

        if error is not None:
            raise error


class Store(Generic[S]):
    """
    狀態容器，持有唯一的狀態值，並在狀態變更時通知訂閱者。

    改變狀態的唯一方式是 dispatch 一個 action。action 會先依序經過
    所有中介軟體，最後交給 reducer 產生新狀態。

    範例:
        ```python
        def counter_reducer(state: int, action) -> int:
            if action == "INCREMENT":
                return state + 1
            if action == "DECREMENT":
                return state - 1
            return state

        store = Store(counter_reducer, 0)
        subscription = store.on_change.subscribe(print)

        store.dispatch("INCREMENT")  # 印出 1
        store.dispatch("INCREMENT")  # 印出 2

        subscription.dispose()
        store.teardown()
        ```
    """

    def __init__(
        self,
        reducer: ReducerFunction[S],
        initial_state: S,
        middleware: Optional[Sequence[MiddlewareCallable]] = None,
        distinct: bool = False,
        *,
        name: Optional[str] = None,
    ):
        """
        Args:
            reducer: (state, action) -> state 的純函數，可透過 reducer 屬性替換
            initial_state: 初始狀態
            middleware: 依執行順序排列的中介軟體
            distinct: 為 True 時，新狀態與舊狀態相等 (==) 則不更新也不通知
            name: Store 名稱，僅用於日誌
        """
        # 公開屬性，終端階段每次都會重新讀取
        self.reducer = reducer
        self.name = name or "store"
        self._distinct = distinct
        self._state = initial_state
        self._torn_down = False
        # 複製一份，不修改呼叫者的列表
        self._middleware = tuple(middleware or ())
        self._change_subject: Subject = _ChangeSubject()
        self._on_change = self._change_subject.pipe(ops.as_observable())
        self._dispatchers: List[NextDispatcher] = create_dispatchers(
            self, self._middleware, self._create_reduce_and_notify(distinct)
        )
        logger.debug(
            "%s created with %d middleware (distinct=%s)",
            self.name,
            len(self._middleware),
            distinct,
        )

    @property
    def state(self) -> S:
        """當前狀態。"""
        return self._state

    @property
    def on_change(self) -> Observable:
        """
        狀態變更時發出新狀態的 Observable。

        每次 subscribe 都會得到獨立的 disposable，呼叫 dispose() 只會
        取消該訂閱。teardown 之後不會再發出任何值。
        """
        return self._on_change

    @property
    def distinct(self) -> bool:
        return self._distinct

    @property
    def is_torn_down(self) -> bool:
        return self._torn_down

    @property
    def dispatchers(self) -> List[NextDispatcher]:
        """整條鏈的副本，索引 0 為入口，最後一個為終端階段。"""
        return list(self._dispatchers)

    def _create_reduce_and_notify(self, distinct: bool) -> NextDispatcher:
        # 終端階段：執行 reducer、保存結果並通知訂閱者
        def reduce_and_notify(action: Any) -> None:
            state = self.reducer(self._state, action)

            if distinct and state == self._state:
                logger.debug("%s skipped notification for equal state", self.name)
                return

            self._state = state
            # teardown 之後 Subject 已完成，on_next 會被靜默忽略
            self._change_subject.on_next(state)

        return reduce_and_notify

    def dispatch(self, action: Any) -> None:
        """
        讓 action 依序經過所有中介軟體，再交給 reducer。

        同步執行：整條鏈 (包括中介軟體觸發的巢狀 dispatch) 完成後才返回。
        reducer 或中介軟體拋出的異常會原樣傳遞出去，已提交的狀態不會回滾。
        訂閱者拋出的異常在所有訂閱者都收到新狀態之後才傳遞出去。

        Args:
            action: 任意值
        """
        if self._torn_down:
            logger.debug("%s dispatching %r after teardown", self.name, action)
        self._dispatchers[0](action)

    def select(self, selector: StateSelector[S, Any]) -> Observable:
        """
        觀察狀態的一部分。

        Args:
            selector: 接收完整狀態並返回希望觀察的部分

        Returns:
            只有在選定部分改變時才發出的 Observable
        """
        return self._on_change.pipe(
            ops.map(selector),
            ops.distinct_until_changed(),
        )

    def replace_reducer(self, reducer: ReducerFunction[S]) -> None:
        """
        替換 reducer，從下一次 reduce 開始生效。

        Raises:
            ReducerError: reducer 不可呼叫時
        """
        if not callable(reducer):
            raise ReducerError("Reducer must be callable", reducer=reducer)
        self.reducer = reducer

    def teardown(self) -> None:
        """
        關閉 Store 的通知流。

        只在需要銷毀 Store 時使用；若只是想停止接收通知，請對
        on_change 的訂閱呼叫 dispose()。之後仍可 dispatch，狀態照常更新，
        但不會再發出通知。
        """
        if self._torn_down:
            return
        self._torn_down = True
        self._change_subject.on_completed()
        logger.debug("%s torn down", self.name)

    def __enter__(self) -> "Store[S]":
        if self._torn_down:
            raise StoreError(f"{self.name} has been torn down", operation="enter")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.teardown()

    def __repr__(self) -> str:
        return (
            f"Store(name={self.name!r}, middleware={len(self._middleware)}, "
            f"distinct={self._distinct}, torn_down={self._torn_down})"
        )


_MISSING: Any = object()


def create_store(
    reducer: ReducerFunction[S],
    initial_state: Any = _MISSING,
    middleware: Optional[Sequence[MiddlewareCallable]] = None,
    config: ConfigLike = None,
) -> Store[S]:
    """
    創建一個新的 Store 實例。

    Args:
        reducer: reducer 函數
        initial_state: 初始狀態；省略時使用 reducer.initial_state。
            config.freeze 為 True 時會先以 to_immutable 轉換
        middleware: 依執行順序排列的中介軟體
        config: StoreConfig 或可轉換為 StoreConfig 的映射

    Returns:
        Store: 新創建的 Store 實例

    Raises:
        StoreError: 沒有提供初始狀態，且 reducer 也沒有 initial_state 屬性時
        ConfigurationError: config 無法通過驗證時
    """
    store_config = load_config(config)

    if initial_state is _MISSING:
        if not hasattr(reducer, "initial_state"):
            raise StoreError(
                "initial_state is required when the reducer has no initial_state",
                operation="create_store",
            )
        initial_state = getattr(reducer, "initial_state")

    if store_config.freeze:
        initial_state = to_immutable(initial_state)

    return Store(
        reducer,
        initial_state,
        middleware,
        distinct=store_config.distinct,
        name=store_config.name,
    )
