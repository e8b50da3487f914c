# -*- coding: utf-8 -*-
"""
Analysis Module
===============

Sensitivity of the compromise ranking to the strategy weight v.
"""

from .sensitivity import VSensitivityAnalysis, VSensitivityResult

__all__ = [
    'VSensitivityAnalysis', 'VSensitivityResult',
]
