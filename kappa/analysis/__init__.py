from kappa.analysis.analyzer import parse

__all__ = ["parse"]
