"""
Dispatch 鏈的構建。

從終端階段 (reduce and notify) 開始，由後往前把每個中介軟體包裹成
NextDispatcher，使每個中介軟體的 next 都綁定到它真正的下一個階段。
"""

from typing import TYPE_CHECKING, Any, Callable, List, Sequence

from .types import NextDispatcher

if TYPE_CHECKING:
    from .store import Store

MiddlewareCallable = Callable[["Store[Any]", Any, NextDispatcher], None]


def _bind(
    store: "Store[Any]", middleware: MiddlewareCallable, next_dispatch: NextDispatcher
) -> NextDispatcher:
    """
    將單個中介軟體與它的後繼綁定為一個 NextDispatcher。

    透過函數參數綁定，避免在迴圈中使用 lambda 造成的延遲綁定問題。
    """

    def dispatch(action: Any) -> None:
        middleware(store, action, next_dispatch)

    return dispatch


def create_dispatchers(
    store: "Store[Any]",
    middleware: Sequence[MiddlewareCallable],
    reduce_and_notify: NextDispatcher,
) -> List[NextDispatcher]:
    """
    構建整條 dispatch 鏈。

    Args:
        store: 傳給每個中介軟體的 Store
        middleware: 依執行順序排列的中介軟體，不會被修改
        reduce_and_notify: 終端階段，執行 reducer 並通知訂閱者

    Returns:
        長度為 len(middleware) + 1 的列表，索引 0 為入口，最後一個為終端階段
    """
    dispatchers: List[NextDispatcher] = [reduce_and_notify]

    # 從最後一個中介軟體開始包裹
    for mw in reversed(middleware):
        dispatchers.append(_bind(store, mw, dispatchers[-1]))

    dispatchers.reverse()
    return dispatchers


def compose(
    store: "Store[Any]",
    middleware: Sequence[MiddlewareCallable],
    reduce_and_notify: NextDispatcher,
) -> NextDispatcher:
    """只返回鏈的入口。"""
    return create_dispatchers(store, middleware, reduce_and_notify)[0]
