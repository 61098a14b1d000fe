"""
Statistics

Multivariate analyses built on matrixkit matrices.
"""

from matrixkit.statistics.mds import ClassicalMultidimensionalScaling

__all__ = ['ClassicalMultidimensionalScaling']
