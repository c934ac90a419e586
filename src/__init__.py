"""
Diagnostic Scoring Engine - Source Package
"""

from .evaluators import get_evaluator, list_evaluators

__all__ = [
    'get_evaluator',
    'list_evaluators',
]
