"""
Errors — иерархия исключений движка voting power

Все ошибки прерывают охватывающий state transition целиком:
частичные изменения весов/чекпоинтов не сохраняются, локального
recovery/retry нет — вызывающая сторона повторяет вызов сама.

Unknown token id ошибкой НЕ является (пустая последовательность / нулевой вес).
"""

from typing import Optional


class VotingPowerError(Exception):
    """Базовое исключение для всех ошибок движка."""


# =============================================================================
# AUTHORIZATION / POLICY
# =============================================================================


class Unauthorized(VotingPowerError):
    """Вызывающий не owner и не approved operator (токена либо аккаунта-владельца)."""

    def __init__(self, caller: str, token_id: Optional[int] = None, owner: Optional[str] = None):
        self.caller = caller
        self.token_id = token_id
        self.owner = owner
        if token_id is not None:
            subject = f"token {token_id}"
        else:
            subject = f"holdings of {owner!r}"
        super().__init__(f"Caller {caller!r} is not owner or approved for {subject}")


class MultiplierLimitExceeded(VotingPowerError):
    """Достигнут лимит multipliers на токен (если лимит сконфигурирован)."""

    def __init__(self, token_id: int, limit: int):
        self.token_id = token_id
        self.limit = limit
        super().__init__(f"Token {token_id} already carries {limit} multipliers (limit)")


class ReentrantCall(VotingPowerError):
    """State-changing вызов во время незавершённого transition."""


# =============================================================================
# ARITHMETIC
# =============================================================================


class ArithmeticOverflow(VotingPowerError):
    """
    Выход за границу fixed-width целого (uint256 для весов, uint208 для
    чекпоинтов) либо отрицательный результат беззнаковой операции.

    Никогда не wrap-around: операция прерывается целиком.
    """


# =============================================================================
# BATCH / LOOKUP
# =============================================================================


class BatchLengthMismatch(VotingPowerError):
    """Длины ids и values в batch transfer не совпадают."""

    def __init__(self, ids_length: int, values_length: int):
        self.ids_length = ids_length
        self.values_length = values_length
        super().__init__(
            f"ids length {ids_length} != values length {values_length}"
        )


class FutureLookup(VotingPowerError):
    """Запрос исторических голосов на timepoint, который ещё не наступил."""

    def __init__(self, timepoint: int, current: int):
        self.timepoint = timepoint
        self.current = current
        super().__init__(f"Timepoint {timepoint} is not in the past (clock={current})")


# =============================================================================
# HOST LEDGER
# =============================================================================


class LedgerError(VotingPowerError):
    """Ошибки host ledger (ownership/balances)."""


class TokenNotFound(LedgerError):
    def __init__(self, token_id: int):
        self.token_id = token_id
        super().__init__(f"Token {token_id} does not exist")


class TokenAlreadyMinted(LedgerError):
    def __init__(self, token_id: int):
        self.token_id = token_id
        super().__init__(f"Token {token_id} already minted")


class InvalidOwner(LedgerError):
    """Null account как owner, либо from не совпадает с текущим owner."""


class InvalidReceiver(LedgerError):
    """Null account как получатель обычного transfer."""


class InsufficientBalance(LedgerError):
    def __init__(self, account: str, token_class_id: int, balance: int, needed: int):
        self.account = account
        self.token_class_id = token_class_id
        self.balance = balance
        self.needed = needed
        super().__init__(
            f"Account {account!r} holds {balance} of class {token_class_id}, needs {needed}"
        )
