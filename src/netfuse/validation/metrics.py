"""External agreement metrics between labelings

Thin wrappers over scikit-learn; the core only supplies labels.
"""
from dataclasses import dataclass, asdict
from typing import Dict, Mapping

import numpy as np
import pandas as pd
from sklearn.metrics import adjusted_rand_score, normalized_mutual_info_score

from ..exceptions import InvalidInput


@dataclass(frozen=True)
class LabelAgreement:
    """Agreement between predicted labels and a reference labeling"""
    nmi: float  # normalized mutual information, [0, 1]
    ari: float  # adjusted Rand index, [-1, 1]

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def _paired_labels(labels, truth):
    labels = np.asarray(labels)
    truth = np.asarray(truth)
    if labels.ndim != 1 or truth.ndim != 1:
        raise InvalidInput("Labelings must be one-dimensional")
    if len(labels) != len(truth):
        raise InvalidInput(
            f"Labelings differ in length: {len(labels)} vs {len(truth)}"
        )
    if len(labels) == 0:
        raise InvalidInput("Labelings are empty")
    return labels, truth


def evaluate_labels(labels, truth) -> LabelAgreement:
    """
    Compare cluster labels against known classes

    Args:
        labels: Predicted cluster labels (n,)
        truth: Reference labels (n,)

    Returns:
        LabelAgreement with NMI and ARI
    """
    labels, truth = _paired_labels(labels, truth)
    return LabelAgreement(
        nmi=float(normalized_mutual_info_score(truth, labels)),
        ari=float(adjusted_rand_score(truth, labels)),
    )


def concordance_nmi(
    view_labels: Mapping[str, np.ndarray],
    fused_labels,
) -> pd.Series:
    """
    NMI between each view's own clustering and the fused clustering

    Args:
        view_labels: Cluster labels obtained from each single view
        fused_labels: Cluster labels obtained from the fused network

    Returns:
        Series of NMI values indexed by view name
    """
    scores = {}
    for view, labels in view_labels.items():
        labels, fused = _paired_labels(labels, fused_labels)
        scores[view] = float(normalized_mutual_info_score(fused, labels))
    return pd.Series(scores, name="nmi", dtype=float)
