from pydantic import BaseModel, ConfigDict

from minirex import create_reducer, on

INCREMENT = "INCREMENT"
DECREMENT = "DECREMENT"
RESET = "RESET"


# ====== Model Definition ======
class CounterState(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: int = 0


# ====== Handlers ======
def increment_handler(state: CounterState, action) -> CounterState:
    return state.model_copy(update={"count": state.count + 1})


def decrement_handler(state: CounterState, action) -> CounterState:
    return state.model_copy(update={"count": state.count - 1})


def reset_handler(state: CounterState, action) -> CounterState:
    return CounterState()


# ====== Reducer ======
counter_reducer = create_reducer(
    CounterState(),
    on(INCREMENT, increment_handler),
    on(DECREMENT, decrement_handler),
    on(RESET, reset_handler),
)
