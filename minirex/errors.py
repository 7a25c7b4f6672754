"""
minirex 錯誤定義模組。

只有在誤用 minirex 自身的 API 時才會拋出這些錯誤；
reducer、middleware 與訂閱者拋出的異常一律原樣傳遞給 dispatch 的呼叫者。
"""

from typing import Any, Dict, Optional


class MinirexError(Exception):
    """所有 minirex 異常的基礎類。"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        將錯誤轉換為字典，方便記錄日誌。

        Returns:
            包含錯誤類型、訊息與細節的字典
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": dict(self.details),
        }

    def __str__(self) -> str:
        if not self.details:
            return self.message
        details = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        return f"{self.message} ({details})"


class StoreError(MinirexError):
    """與 Store 相關的錯誤。"""

    def __init__(self, message: str, operation: str, **kwargs: Any) -> None:
        details = {"operation": operation}
        details.update(kwargs)
        super().__init__(message, details)
        self.operation = operation


class ReducerError(MinirexError):
    """與 Reducer 相關的錯誤。"""

    def __init__(self, message: str, reducer: Any = None, **kwargs: Any) -> None:
        details = dict(kwargs)
        if reducer is not None:
            details["reducer"] = getattr(reducer, "__name__", repr(reducer))
        super().__init__(message, details)


class ConfigurationError(MinirexError):
    """配置相關的錯誤。"""

    def __init__(
        self,
        message: str,
        component: str,
        config_key: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        details = {"component": component}
        if config_key is not None:
            details["config_key"] = config_key
        details.update(kwargs)
        super().__init__(message, details)
        self.component = component
        self.config_key = config_key
