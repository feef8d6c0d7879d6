# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Generic success/failure response envelope."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_UNSET: Any = object()


class ResultCode(Enum):
    SUCCESS = (200, "操作成功")
    ERROR = (500, "操作失败")
    VALIDATE_FAILED = (404, "参数检验失败")
    UNAUTHORIZED = (401, "暂未登录或token已经过期")
    FORBIDDEN = (403, "没有相关权限")

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message

    @classmethod
    def from_code(cls, code: int) -> ResultCode | None:
        for member in cls:
            if member.code == code:
                return member
        return None


class Result(Generic[T]):
    """
    Envelope with ``code``, ``message``, ``data`` and ``success``.

    Build instances with the factories so ``code`` and ``success`` stay consistent:

    - ``Result.success()``, ``Result.success(message)``, ``Result.success(data=payload)``,
      ``Result.success(payload)``, ``Result.success(message, payload)``; ``Result.ok(payload)``
      is the data-only form
    - ``Result.error()``, ``Result.error(message)``, ``Result.error(code, message)``

    A lone positional string passed to ``success`` is the message, not the payload.
    Fields remain assignable after construction.
    """

    def __init__(self, code: int, message: str, data: T | None = None, success: bool = False):
        self.code = code
        self.message = message
        self.data = data
        # Shadows the ``success`` factory on instances.
        self.success = success

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Result(code={self.code!r}, message={self.message!r}, data={self.data!r}, success={self.success!r})"

    @classmethod
    def success(cls, message: Any = _UNSET, data: Any = _UNSET) -> Result[Any]:
        if message is not _UNSET and data is _UNSET and not isinstance(message, str):
            # success(data): a lone non-string argument is the payload.
            message, data = _UNSET, message
        code = ResultCode.SUCCESS
        return cls(
            code=code.code,
            message=code.message if message is _UNSET else message,
            data=None if data is _UNSET else data,
            success=True,
        )

    @classmethod
    def ok(cls, data: T) -> Result[T]:
        return cls.success(data=data)

    @classmethod
    def error(cls, code: Any = _UNSET, message: Any = _UNSET) -> Result[Any]:
        if isinstance(code, ResultCode):
            return cls(
                code=code.code,
                message=code.message if message is _UNSET else message,
                data=None,
                success=False,
            )
        if code is not _UNSET and message is _UNSET and not isinstance(code, int):
            # error(message): a lone non-numeric argument is the message.
            code, message = _UNSET, code
        default = ResultCode.from_code(code) if code is not _UNSET else None
        default = default or ResultCode.ERROR
        return cls(
            code=default.code if code is _UNSET else int(code),
            message=default.message if message is _UNSET else message,
            data=None,
            success=False,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "data": self.data,
            "success": self.success,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Result[Any]:
        return cls(
            code=int(data.get("code", ResultCode.ERROR.code)),
            message=str(data.get("message") or ""),
            data=data.get("data"),
            success=bool(data.get("success")),
        )

    def __str__(self) -> str:
        return f"Result{{code={self.code}, message='{self.message}', data={self.data}, success={self.success}}}"


__all__ = ["Result", "ResultCode"]
