"""
Domain models and accessor protocols.

Contains market snapshot views and the read-only pool contracts they are
produced from.
"""

from noarb.core.domain.market_views import (
    BandSnapshot,
    ConditionalMarketView,
    SpotMarketView,
)
from noarb.core.domain.pools import (
    ConditionalPool,
    ConditionalSource,
    SpotPool,
    SpotSource,
    read_conditional,
    read_conditionals,
    read_spot,
)

__all__ = [
    # Views
    "BandSnapshot",
    "ConditionalMarketView",
    "SpotMarketView",
    # Accessors
    "ConditionalPool",
    "ConditionalSource",
    "SpotPool",
    "SpotSource",
    "read_conditional",
    "read_conditionals",
    "read_spot",
]
