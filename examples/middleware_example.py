"""
minirex 範例：待辦事項應用，展示自訂中介軟體的寫法

minirex 本身不附帶任何現成的中介軟體；日誌、thunk 等行為都由使用者
以 (store, action, next) 的形式自行實作，這裡示範幾個常見的例子。
"""

import logging
import time
import uuid
from pathlib import Path
import sys
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
from typing import Any, List, Optional

from immutables import Map
from pydantic import BaseModel, ConfigDict

from minirex import BaseMiddleware, combine_reducers, create_reducer, create_store, on
from minirex.immutable_utils import to_dict, to_pydantic

logger = logging.getLogger("todo_example")


# ====== 1. 定義狀態模型 ======
class TodoItemModel(BaseModel):
    id: str
    text: str
    completed: bool


class TodoStateModel(BaseModel):
    todos: List[TodoItemModel]
    last_updated: Optional[float]
    max_todos: int


todo_initial_state = Map(todos=(), last_updated=None, max_todos=5)


# ====== 2. 定義 Actions ======
# minirex 不規定 action 的形狀，這裡使用帶有 type 屬性的不可變模型
class TodoAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    payload: Any = None


def action(action_type: str, payload: Any = None) -> TodoAction:
    return TodoAction(type=action_type, payload=payload)


# ====== 3. 定義 Reducer ======
def handle_add_todo(state: Map, action: TodoAction) -> Map:
    new_todo = Map(id=str(uuid.uuid4()), text=action.payload, completed=False)
    return state.set("todos", state["todos"] + (new_todo,)).set("last_updated", time.time())


def handle_toggle_todo(state: Map, action: TodoAction) -> Map:
    new_todos = tuple(
        todo.set("completed", not todo["completed"]) if todo["id"] == action.payload else todo
        for todo in state["todos"]
    )
    return state.set("todos", new_todos).set("last_updated", time.time())


def handle_remove_todo(state: Map, action: TodoAction) -> Map:
    new_todos = tuple(todo for todo in state["todos"] if todo["id"] != action.payload)
    return state.set("todos", new_todos).set("last_updated", time.time())


todo_reducer = create_reducer(
    todo_initial_state,
    on("addTodo", handle_add_todo),
    on("toggleTodo", handle_toggle_todo),
    on("removeTodo", handle_remove_todo),
)
root_reducer = combine_reducers({"todo": todo_reducer})


# ====== 4. 定義中介軟體 ======
def logging_middleware(store, action, next):
    """記錄每個 action 以及處理後的狀態。"""
    logger.info("dispatching %r", action)
    next(action)
    logger.info("state after %s: %s", getattr(action, "type", action), to_dict(store.state))


def thunk_middleware(store, action, next):
    """可呼叫的 action 會被執行，並取得 dispatch 與 get_state。"""
    if callable(action):
        action(store.dispatch, lambda: store.state)
        return
    next(action)


class ValidationMiddleware(BaseMiddleware):
    """忽略內容為空的 addTodo，其餘 action 照常轉發。"""

    def __init__(self):
        self.rejected = 0

    def __call__(self, store, action, next):
        if getattr(action, "type", None) == "addTodo" and not str(action.payload).strip():
            self.rejected += 1
            logger.warning("rejected empty todo")
            return
        super().__call__(store, action, next)


class HistoryMiddleware(BaseMiddleware):
    """記錄每次 (prev_state, action, next_state)。"""

    def __init__(self):
        self.history = []
        self._prev_states = []

    def on_next(self, action, prev_state):
        self._prev_states.append(prev_state)

    def on_complete(self, next_state, action):
        self.history.append((self._prev_states.pop(), action, next_state))

    def on_error(self, error, action):
        self._prev_states.pop()


# ====== 5. 定義 Thunk ======
def validate_and_add_todo(text: str):
    def thunk(dispatch, get_state):
        todo_state = get_state()["todo"]
        if len(todo_state["todos"]) >= todo_state["max_todos"]:
            logger.warning("too many todos: %d", len(todo_state["todos"]))
            return
        dispatch(action("addTodo", text))

    return thunk


# ====== 6. 建立 Store ======
validation = ValidationMiddleware()
history = HistoryMiddleware()

store = create_store(
    root_reducer,
    middleware=[thunk_middleware, logging_middleware, validation, history],
    config={"distinct": True, "name": "todos"},
)

store.select(lambda state: len(state["todo"]["todos"])).subscribe(
    lambda count: print(f"待辦事項數量: {count}")
)


# ====== 7. 執行操作示例 ======
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    print("開始執行待辦事項範例...")
    store.dispatch(action("addTodo", "學習 minirex"))
    store.dispatch(validate_and_add_todo("完成範例程式"))
    store.dispatch(action("toggleTodo", store.state["todo"]["todos"][0]["id"]))
    store.dispatch(action("addTodo", "   "))
    store.dispatch(action("unknown"))  # distinct 模式下不會通知
    store.dispatch(action("removeTodo", store.state["todo"]["todos"][1]["id"]))

    print("\n==== 最終狀態 ====")
    todo_state = store.state["todo"]
    print(f"Todo 字典: {to_dict(todo_state)}")
    print(f"Todo Pydantic: {to_pydantic(todo_state, TodoStateModel)}")
    print(f"被拒絕的 action 數量: {validation.rejected}")

    print("\n==== 歷史 ====")
    for prev_state, act, next_state in history.history:
        print(f"動作: {act.type}, 數量: {len(prev_state['todo']['todos'])} -> {len(next_state['todo']['todos'])}")

    store.teardown()
