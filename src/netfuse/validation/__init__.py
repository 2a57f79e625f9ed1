"""Evaluation of cluster labels against external information"""

from .metrics import LabelAgreement, concordance_nmi, evaluate_labels
from .survival import logrank_pvalue

__all__ = [
    'LabelAgreement',
    'evaluate_labels',
    'concordance_nmi',
    'logrank_pvalue',
]
