"""
測試共用的 fixtures。
"""

from typing import Any, List

import pytest

from minirex import Store
from support import string_reducer


@pytest.fixture
def order() -> List[str]:
    """外部觀察到的中介軟體執行順序。"""
    return []


@pytest.fixture
def states() -> List[Any]:
    return []


@pytest.fixture
def store() -> Store[str]:
    """沒有中介軟體的字串 Store。"""
    return Store(string_reducer, "hello")
