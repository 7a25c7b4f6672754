import logging
from pathlib import Path
import sys
sys.path.insert(0, str(Path(__file__).resolve().parents[2]))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from counter_store import store
from counter_reducers import INCREMENT, DECREMENT, RESET

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(name)s %(levelname)s %(message)s")

    # 訂閱狀態變化
    subscription = store.on_change.subscribe(
        on_next=lambda state: print(f"計數變化: {state.count}")
    )
    store.select(lambda state: state.count > 0).subscribe(
        on_next=lambda positive: print(f"是否為正數: {positive}")
    )

    # 分發actions
    print("\n==== 開始測試基本操作 ====")
    store.dispatch(INCREMENT)
    store.dispatch(INCREMENT)
    store.dispatch(DECREMENT)
    store.dispatch(RESET)
    store.dispatch(RESET)  # 狀態相同，不會通知

    # 取消訂閱後不再收到通知
    subscription.dispose()
    store.dispatch(INCREMENT)

    # 打印最終狀態
    print("\n==== 最終狀態 ====")
    print(store.state)
    store.teardown()
