"""Root error class for the ledgerkit error hierarchy."""

from __future__ import annotations

import json
from typing import Any, ClassVar


class BaseError(Exception):
    """Root of every error raised by ledgerkit.

    Each error carries a machine-readable ``code`` (the class's
    ``default_code`` unless overridden), a structured ``detail`` mapping and
    optionally the ``cause`` it wraps.  ``retryable`` marks failures where
    reloading state and repeating the operation can succeed; callers that
    only need that decision can branch on it instead of on the class.

    ``str(err)`` is a one-line JSON document, ready for log lines::

        {"code": "not_found", "message": "Account 'acc-1' not found", ...}
    """

    default_code: ClassVar[str] = "base_error"
    retryable: ClassVar[bool] = False

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail) if detail else {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "retryable": self.retryable,
            "detail": self.detail,
        }
        if self.cause is not None:
            out["cause"] = repr(self.cause)
        return out

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


__all__ = ["BaseError"]
