"""dispatch 鏈的構建。"""

from minirex import Store, compose, create_dispatchers
from support import string_reducer


def make_recorder(name, log):
    def middleware(store, action, next):
        log.append((name, action))
        next(action)

    middleware.__name__ = name
    return middleware


def test_chain_length_is_middleware_count_plus_one():
    log = []
    terminal_calls = []
    middleware = [make_recorder(name, log) for name in ("a", "b", "c")]

    dispatchers = create_dispatchers(None, middleware, terminal_calls.append)

    assert len(dispatchers) == 4
    assert dispatchers[-1] == terminal_calls.append


def test_entry_dispatcher_runs_middleware_in_declared_order():
    log = []
    terminal_calls = []
    middleware = [make_recorder(name, log) for name in ("a", "b", "c")]

    entry = compose(None, middleware, terminal_calls.append)
    entry("action")

    assert log == [("a", "action"), ("b", "action"), ("c", "action")]
    assert terminal_calls == ["action"]


def test_each_dispatcher_starts_at_its_position():
    log = []
    terminal_calls = []
    middleware = [make_recorder(name, log) for name in ("a", "b", "c")]

    dispatchers = create_dispatchers(None, middleware, terminal_calls.append)
    dispatchers[2]("from c")

    assert log == [("c", "from c")]
    assert terminal_calls == ["from c"]


def test_empty_middleware_makes_terminal_the_entry():
    terminal_calls = []

    dispatchers = create_dispatchers(None, [], terminal_calls.append)

    assert dispatchers == [terminal_calls.append]


def test_store_without_middleware_reduces_and_notifies_directly(states):
    store = Store(string_reducer, "hello")
    store.on_change.subscribe(states.append)

    store.dispatch("direct")

    assert len(store.dispatchers) == 1
    assert store.state == "direct"
    assert states == ["direct"]


def test_each_middleware_receives_the_store():
    seen = []

    def capture(store, action, next):
        seen.append(store)
        next(action)

    store = Store(string_reducer, "hello", [capture, capture])
    store.dispatch("x")

    assert seen == [store, store]


def test_each_middleware_binds_its_own_successor():
    """在迴圈中構建閉包時，每個中介軟體都必須綁定到正確的下一個階段。"""
    log = []
    middleware = [make_recorder(str(i), log) for i in range(5)]
    store = Store(string_reducer, "hello", middleware)

    store.dispatch("go")

    assert [name for name, _ in log] == ["0", "1", "2", "3", "4"]


def test_long_chain_is_built_and_dispatched():
    log = []
    middleware = [make_recorder(str(i), log) for i in range(200)]
    store = Store(string_reducer, "hello", middleware)

    store.dispatch("deep")

    assert len(store.dispatchers) == 201
    assert len(log) == 200
    assert store.state == "deep"


def test_rewritten_action_flows_to_later_stages():
    seen = []

    def rewrite(store, action, next):
        next(action * 2)

    def capture(store, action, next):
        seen.append(action)
        next(action)

    store = Store(lambda state, action: action, 0, [rewrite, capture])
    store.dispatch(21)

    assert seen == [42]
    assert store.state == 42
