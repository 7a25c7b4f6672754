from typing import Any, Callable, Dict, Mapping, Tuple, Union

from immutables import Map

from .immutable_utils import to_immutable
from .types import HandlerMap, ReducerFunction, S

ActionHandler = Callable[[Any, Any], Any]


def action_key(action: Any) -> Any:
    """
    取得用於查找處理函式的鍵。

    帶有 type 屬性的 action 使用 action.type，可雜湊的 action 使用自身，
    其餘返回 None。
    """
    action_type = getattr(action, "type", None)
    if action_type is not None:
        return action_type
    try:
        hash(action)
    except TypeError:
        return None
    return action


def on(action_type: Any, handler: ActionHandler) -> Dict[Any, ActionHandler]:
    """
    創建一個 action 類型與處理函式的映射。

    Args:
        action_type: action 鍵，例如字串 "INCREMENT"，或帶有 type 屬性的物件
        handler: 處理函式，接收 (state, action) 並返回新狀態

    Returns:
        一個包含 {action_type: handler} 的字典
    """
    key = getattr(action_type, "type", action_type)
    return {key: handler}


def create_reducer(
    initial_state: S,
    *handlers: Union[Tuple[Any, ActionHandler], HandlerMap],
) -> ReducerFunction[S]:
    """
    創建一個 reducer 函式，根據 action 鍵選擇處理函式。

    Args:
        initial_state: 初始狀態，會保存為 reducer.initial_state
        *handlers: (action_type, handler) 元組或使用 on 創建的字典

    Returns:
        reducer 函式；沒有對應處理函式時返回原狀態物件
    """
    action_handlers: Dict[Any, ActionHandler] = {}

    for handler in handlers:
        if isinstance(handler, tuple) and len(handler) == 2:
            action_type, handler_fn = handler
            action_handlers[action_type] = handler_fn
        else:
            action_handlers.update(handler)

    def reducer(state: S, action: Any) -> S:
        handler_fn = action_handlers.get(action_key(action))
        if handler_fn is None:
            return state
        return handler_fn(state, action)

    reducer.initial_state = initial_state  # type: ignore[attr-defined]
    reducer.handlers = action_handlers  # type: ignore[attr-defined]
    return reducer


def combine_reducers(reducers: Mapping[str, ReducerFunction[Any]]) -> ReducerFunction[Map]:
    """
    將多個 reducer 組合為一個，每個 reducer 管理 Map 中的一個鍵。

    沒有任何子狀態改變 (以 is 判斷) 時返回同一個狀態物件，
    因此在 distinct 模式下不會觸發通知。傳入的狀態若是 dict 等
    非 Map 的映射，會先以 to_immutable 轉換；None 視為空 Map。

    Args:
        reducers: 特性鍵名到 reducer 的映射

    Returns:
        處理 immutables.Map 狀態的 reducer
    """
    feature_reducers = dict(reducers)

    def reducer(state: Map, action: Any) -> Map:
        if not isinstance(state, Map):
            state = to_immutable(state if state is not None else {})
        changed = False
        mutation = state.mutate()

        for feature_key, feature_reducer in feature_reducers.items():
            prev_substate = state.get(feature_key)
            next_substate = feature_reducer(prev_substate, action)
            if next_substate is not prev_substate:
                mutation[feature_key] = next_substate
                changed = True

        return mutation.finish() if changed else state

    if all(hasattr(r, "initial_state") for r in feature_reducers.values()):
        reducer.initial_state = Map(  # type: ignore[attr-defined]
            {key: r.initial_state for key, r in feature_reducers.items()}  # type: ignore[attr-defined]
        )
    return reducer
