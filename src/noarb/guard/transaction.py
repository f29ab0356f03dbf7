"""
Band Transaction — явная граница all-or-nothing вокруг сделки

Swap pipeline применяет сделку к живым пулам внутри блока; на выходе
band проверяется по свежему чтению accessors. Любое исключение в блоке
или нарушение band вызывает rollback() ровно один раз и пробрасывается
дальше: охватывающая операция не оставляет частичных изменений.

Пример:
    saved = pools.save()
    with band_transaction(spot_pool, conditional_pools, rollback=lambda: pools.restore(saved)):
        spot_pool.swap(amount_in)
"""

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Sequence

from noarb.core.domain.pools import ConditionalSource, SpotSource
from noarb.guard.band_enforcer import BandGuardResult, NoArbBandGuard

logger = logging.getLogger(__name__)


@contextmanager
def band_transaction(
    spot_market: SpotSource,
    markets: Sequence[ConditionalSource],
    *,
    rollback: Callable[[], None],
    guard: Optional[NoArbBandGuard] = None,
) -> Iterator[None]:
    """
    Атомарная граница: тело блока + проверка band как последний шаг.

    spot_market и markets должны быть accessors живых пулов: views
    неизменяемы и не отражают сделку, выполненную в блоке.

    Args:
        spot_market: accessor спот пула
        markets: accessors условных пулов
        rollback: отмена всех изменений блока
        guard: NoArbBandGuard (опционально, используется default)

    Raises:
        NoArbBandViolation: если после блока цена вне band (после rollback)
        Exception: любое исключение тела блока (после rollback)
    """
    guard = guard or NoArbBandGuard()

    try:
        yield
        result: BandGuardResult = guard.enforce(spot_market, markets)
    except BaseException as exc:
        logger.warning("rolling back guarded trade: %s: %s", type(exc).__name__, exc)
        rollback()
        raise

    logger.debug("guarded trade committed: %s", result.details)
