"""
以類別實作中介軟體的輔助工具。

任何形如 (store, action, next) -> None 的可呼叫物件都可以作為中介軟體。
BaseMiddleware 額外提供 on_next、on_complete 和 on_error 三個鉤子，
讓只需要觀察 dispatch 生命週期的中介軟體不必自己處理 next。
"""

import contextlib
from typing import TYPE_CHECKING, Any, Generator

from typing_extensions import TypedDict

from .types import NextDispatcher

if TYPE_CHECKING:
    from .store import Store


class ActionContext(TypedDict, total=False):
    action: Any
    prev_state: Any
    next_state: Any
    error: Exception


class BaseMiddleware:
    """
    基礎中介類，定義所有中介可能實現的鉤子。

    預設的 __call__ 會依序呼叫 on_next、next(action)、on_complete；
    過程中拋出異常時呼叫 on_error 並重新拋出。
    子類可以只覆寫鉤子，也可以覆寫 __call__ 以改變轉發行為
    (例如呼叫 next 多次，或改寫 action)。

    範例:
        ```python
        class CountingMiddleware(BaseMiddleware):
            def __init__(self):
                self.counter = 0

            def on_next(self, action, prev_state):
                self.counter += 1

        store = Store(reducer, 0, [CountingMiddleware()])
        ```
    """

    def __call__(self, store: "Store[Any]", action: Any, next: NextDispatcher) -> None:
        with self.action_context(store, action):
            next(action)

    def on_next(self, action: Any, prev_state: Any) -> None:
        """
        在 action 轉發給下一個階段之前調用。

        Args:
            action: 正在 dispatch 的 Action
            prev_state: 轉發之前的 store.state
        """
        pass

    def on_complete(self, next_state: Any, action: Any) -> None:
        """
        在下一個階段處理完 action 之後調用。

        Args:
            next_state: 轉發之後的最新 store.state
            action: 剛剛 dispatch 的 Action
        """
        pass

    def on_error(self, error: Exception, action: Any) -> None:
        """
        如果轉發過程中拋出異常，則調用此鉤子。異常會在鉤子之後重新拋出。

        Args:
            error: 拋出的異常
            action: 導致異常的 Action
        """
        pass

    @contextlib.contextmanager
    def action_context(
        self, store: "Store[Any]", action: Any
    ) -> Generator[ActionContext, None, None]:
        """
        以上下文管理器形式包裹一次轉發的生命週期。

        覆寫 __call__ 的子類可以用它保留鉤子行為:

            ```python
            def __call__(self, store, action, next):
                with self.action_context(store, action):
                    next(action)
                    next(action)
            ```

        Yields:
            ActionContext: 本次轉發的上下文數據
        """
        context: ActionContext = {
            "action": action,
            "prev_state": store.state,
        }

        self.on_next(action, context["prev_state"])

        try:
            yield context
        except Exception as err:
            context["error"] = err
            self.on_error(err, action)
            raise

        context["next_state"] = store.state
        self.on_complete(context["next_state"], action)

