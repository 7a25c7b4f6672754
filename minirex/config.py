"""
Store 配置。

StoreConfig 是不可變的 pydantic 模型，load_config 負責把各種輸入
統一轉換成 StoreConfig，並把驗證錯誤轉為 ConfigurationError。
"""

from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import ConfigurationError


class StoreConfig(BaseModel):
    """
    Store 的可選配置。

    Attributes:
        distinct: 為 True 時，reducer 回傳與前一狀態相等 (==) 的狀態不會觸發通知
        name: Store 名稱，僅用於日誌與 repr
        freeze: 為 True 時，create_store 會把 dict、list 等初始狀態轉為不可變結構
    """

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    distinct: bool = False
    name: str = "store"
    freeze: bool = False


ConfigLike = Union[StoreConfig, Mapping[str, Any], None]


def load_config(data: ConfigLike = None) -> StoreConfig:
    """
    將輸入轉換為 StoreConfig。

    Args:
        data: None、StoreConfig 或普通映射

    Returns:
        驗證後的 StoreConfig

    Raises:
        ConfigurationError: 映射內容無法通過驗證時
    """
    if data is None:
        return StoreConfig()
    if isinstance(data, StoreConfig):
        return data
    if not isinstance(data, Mapping):
        raise ConfigurationError(
            f"Store config must be a mapping, got {type(data).__name__}",
            component="StoreConfig",
        )

    try:
        return StoreConfig.model_validate(dict(data))
    except ValidationError as err:
        first = err.errors()[0]
        key: Optional[str] = ".".join(str(part) for part in first["loc"]) or None
        raise ConfigurationError(
            f"Invalid store config: {first['msg']}",
            component="StoreConfig",
            config_key=key,
        ) from err
