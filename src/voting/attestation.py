"""Attestation — внешний источник бонуса к весу токена.

Интеграция с внешними attestation/oracle не реализуется: NullAttestationSource
всегда возвращает нулевой вклад, endpoint только сохраняется для диагностики.
"""

import logging
from typing import Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class AttestationSource(Protocol):
    """Дополнительный (scaled) вклад в вес токена."""

    def contribution(self, token_id: int) -> int:
        ...


class NullAttestationSource:
    """Нейтральный stub: вклад 0 для любого токена."""

    def __init__(self, endpoint: Optional[str] = None):
        self.endpoint = endpoint
        if endpoint is not None:
            logger.debug("attestation endpoint %s configured, stub contributes 0", endpoint)

    def contribution(self, token_id: int) -> int:
        return 0
