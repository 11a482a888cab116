"""
Domain models — pydantic and dataclass types for the bridge.

All models are re-exported here for convenient access:

    from elide_bridge.core.models import EffectiveConfig, PreparationPlan, ShimResult
"""

from elide_bridge.core.models.config import EffectiveConfig
from elide_bridge.core.models.plan import (
    REGISTER_REPOSITORY,
    RUN_INSTALL,
    AppliedPlan,
    PreparationAction,
    PreparationPlan,
)
from elide_bridge.core.models.settings import BridgeSettings
from elide_bridge.core.models.shim import ShimResult
from elide_bridge.core.models.tool import CapturedOutput, ToolReference

__all__ = [
    "REGISTER_REPOSITORY",
    "RUN_INSTALL",
    "AppliedPlan",
    "BridgeSettings",
    "CapturedOutput",
    "EffectiveConfig",
    "PreparationAction",
    "PreparationPlan",
    "ShimResult",
    "ToolReference",
]
