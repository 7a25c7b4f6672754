"""
Store 狀態的不可變轉換。

create_store(config={"freeze": True}) 與 combine_reducers 透過 to_immutable
把 dict、list、set 以及 pydantic 模型轉為 immutables.Map、tuple、frozenset，
使 reducer 只能以「返回新狀態」的方式更新狀態，distinct 模式的 == 比較
也能對巢狀結構生效。to_dict / to_pydantic 則在輸出 (日誌、序列化) 時反向轉換。

兩個轉換都基於 functools.singledispatch，可為自訂型別註冊額外的轉換:

    ```python
    @to_immutable.register
    def _(obj: MyRecord):
        return Map(id=obj.id, name=obj.name)
    ```
"""

import functools
from typing import Any, Type, TypeVar

from immutables import Map
from pydantic import BaseModel

M = TypeVar("M", bound=BaseModel)


@functools.singledispatch
def to_immutable(obj: Any) -> Any:
    """
    將狀態轉為不可變結構。

    未註冊的型別 (數字、字串、已是不可變的物件) 原樣返回。
    """
    return obj


@to_immutable.register(dict)
@to_immutable.register(Map)
def _mapping_to_immutable(obj: Any) -> Map:
    return Map((key, to_immutable(value)) for key, value in obj.items())


@to_immutable.register(list)
@to_immutable.register(tuple)
def _sequence_to_immutable(obj: Any) -> tuple:
    return tuple(to_immutable(item) for item in obj)


@to_immutable.register(set)
@to_immutable.register(frozenset)
def _set_to_immutable(obj: Any) -> frozenset:
    return frozenset(to_immutable(item) for item in obj)


@to_immutable.register(BaseModel)
def _model_to_immutable(obj: BaseModel) -> Map:
    return to_immutable(obj.model_dump())


@functools.singledispatch
def to_dict(obj: Any) -> Any:
    """將不可變狀態轉回普通的 dict / list / set，其餘值原樣返回。"""
    return obj


@to_dict.register(Map)
def _map_to_dict(obj: Map) -> dict:
    return {key: to_dict(value) for key, value in obj.items()}


@to_dict.register(tuple)
def _tuple_to_list(obj: tuple) -> list:
    return [to_dict(item) for item in obj]


@to_dict.register(frozenset)
def _frozenset_to_set(obj: frozenset) -> set:
    return {to_dict(item) for item in obj}


def to_pydantic(state: Map, model_class: Type[M]) -> M:
    """
    以 Map 狀態建立 pydantic 模型。

    Raises:
        pydantic.ValidationError: 狀態內容不符合模型時
    """
    return model_class.model_validate(to_dict(state))
