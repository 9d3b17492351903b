"""Error types raised by the chain modules."""

from __future__ import annotations


class SdkError(Exception):
    """Base error carrying a codespace, a numeric code and a message."""

    codespace = "sdk"
    code = 1
    description = "internal"

    def __init__(
        self,
        message: str | None = None,
        *,
        codespace: str | None = None,
        code: int | None = None,
    ) -> None:
        super().__init__(self.description if message is None else message)
        if codespace is not None:
            self.codespace = codespace
        if code is not None:
            self.code = code

    @property
    def message(self) -> str:
        return str(self.args[0])

    def __str__(self) -> str:
        return self.message

    def wrap(self, message: str) -> SdkError:
        """Return an error of the same kind whose text is prefixed by ``message``."""
        wrapped = type(self)(
            f"{message}: {self.message}", codespace=self.codespace, code=self.code
        )
        wrapped.__cause__ = self
        return wrapped


class UnauthorizedError(SdkError):
    code = 4
    description = "unauthorized"


class InsufficientFundsError(SdkError):
    code = 5
    description = "insufficient funds"


class UnknownRequestError(SdkError):
    code = 6
    description = "unknown request"


class InvalidAddressError(SdkError, ValueError):
    code = 7
    description = "invalid address"


class InvalidCoinsError(SdkError, ValueError):
    code = 10
    description = "invalid coins"


ADMIN_SAMPLE_ERROR = SdkError("sample error", codespace="admin", code=1100)
MINT_SAMPLE_ERROR = SdkError("sample error", codespace="cudoMint", code=1100)