"""
minirex 共用的類型定義。

Action 刻意保持為 Any：reducer 與 middleware 自行解讀其內容，
與狀態類型 S 分開，不做合併。
"""

from typing import TYPE_CHECKING, Any, Callable, Mapping, TypeVar

from typing_extensions import Protocol

if TYPE_CHECKING:
    from .store import Store


S = TypeVar("S")  # 狀態類型
T = TypeVar("T")  # selector 輸出類型

# 將 action 傳給鏈中下一個階段
NextDispatcher = Callable[[Any], None]

ReducerFunction = Callable[[S, Any], S]
StateSelector = Callable[[S], T]
HandlerMap = Mapping[Any, Callable[[Any, Any], Any]]


class Reducer(Protocol[S]):
    """以類別實作的 reducer，只要可呼叫即可。"""

    def __call__(self, state: S, action: Any) -> S: ...


class Middleware(Protocol):
    """
    以類別實作的中介軟體。

    中介軟體可以自行決定是否呼叫 next、呼叫幾次，以及傳遞哪個 action。
    """

    def __call__(
        self, store: "Store[Any]", action: Any, next: NextDispatcher
    ) -> None: ...
