from kappa.evaluation.evaluator import evaluate, execute

__all__ = ["evaluate", "execute"]
