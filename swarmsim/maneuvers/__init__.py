"""
Maneuvers Module
================

Delta-v commands in the RTN frame, impulsive burns and trajectory preview.
"""

from .delta_v import BurnResult, rtn_to_eci, apply_delta_v, preview_trajectory

__all__ = [
    'BurnResult',
    'rtn_to_eci',
    'apply_delta_v',
    'preview_trajectory',
]
