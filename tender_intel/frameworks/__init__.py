"""Framework intelligence: tracked supply frameworks and contract expiries."""

from .intelligence import ContractExpiryAdapter, FrameworkAdapter, get_framework_intelligence
from .registry import FRAMEWORKS, TOTAL_FRAMEWORK_VALUE
from .signals import classify_signal, detect_status

__all__ = [
    "ContractExpiryAdapter",
    "FrameworkAdapter",
    "get_framework_intelligence",
    "FRAMEWORKS",
    "TOTAL_FRAMEWORK_VALUE",
    "classify_signal",
    "detect_status",
]
