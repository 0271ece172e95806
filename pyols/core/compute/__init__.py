"""
Shared compute infrastructure for PyOLS.

Hardware detection, timing utilities and the MatrixOps implementations
that regression backends are built on.

IMPORTANT: This is NOT where regression backends live. Those go in
pyols.regression.backends. This module contains shared NUMERIC
infrastructure.
"""

from pyols.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from pyols.core.compute.timing import Timer

__all__ = [
    # Device detection
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    # Timing
    "Timer",
]
