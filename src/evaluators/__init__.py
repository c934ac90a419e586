"""
Evaluators Registry

Maps evaluator names to their classes.
Add new evaluators here.
"""

from .diagnostic import DiagnosticEvaluator, MathDiagnosticEvaluator, ELADiagnosticEvaluator
from .oral_reading import OralReadingEvaluator, OralAnswerEvaluator

# Registry: name -> evaluator class
EVALUATORS = {
    'math': MathDiagnosticEvaluator,
    'ela': ELADiagnosticEvaluator,
    'oral_reading': OralReadingEvaluator,
    'oral_answer': OralAnswerEvaluator,
}

def get_evaluator(name: str):
    """Get evaluator class by name"""
    if name not in EVALUATORS:
        available = ', '.join(EVALUATORS.keys())
        raise ValueError(f"Unknown evaluator: '{name}'. Available: {available}")
    return EVALUATORS[name]

def list_evaluators():
    """List available evaluator names"""
    return list(EVALUATORS.keys())

__all__ = [
    'EVALUATORS',
    'get_evaluator',
    'list_evaluators',
    'DiagnosticEvaluator',
    'MathDiagnosticEvaluator',
    'ELADiagnosticEvaluator',
    'OralReadingEvaluator',
    'OralAnswerEvaluator',
]
