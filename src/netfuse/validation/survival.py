"""Log-rank test of survival differences between clusters"""
import logging

import numpy as np
from lifelines.statistics import logrank_test, multivariate_logrank_test

from ..exceptions import InvalidInput

logger = logging.getLogger(__name__)


def logrank_pvalue(times, events, labels) -> float:
    """
    Test whether survival differs between clusters

    Uses the two-group log-rank test for two clusters and the multivariate
    log-rank test otherwise.

    Args:
        times: Follow-up time per object (n,)
        events: Event indicator per object, 1 = event observed, 0 = censored
        labels: Cluster label per object (n,)

    Returns:
        p-value of the log-rank test
    """
    times = np.asarray(times, dtype=np.float64)
    events = np.asarray(events).astype(bool)
    labels = np.asarray(labels)

    if not (len(times) == len(events) == len(labels)):
        raise InvalidInput(
            f"times, events and labels differ in length: "
            f"{len(times)}, {len(events)}, {len(labels)}"
        )
    if not np.isfinite(times).all() or (times < 0).any():
        raise InvalidInput("times must be finite and non-negative")

    groups = np.unique(labels)
    if len(groups) < 2:
        raise InvalidInput(f"Need at least 2 clusters for a log-rank test, got {len(groups)}")

    if len(groups) == 2:
        a = labels == groups[0]
        b = labels == groups[1]
        result = logrank_test(
            times[a], times[b],
            event_observed_A=events[a],
            event_observed_B=events[b],
        )
    else:
        result = multivariate_logrank_test(times, labels, events)

    p_value = float(result.p_value)
    logger.debug(f"Log-rank test over {len(groups)} clusters: p = {p_value:.4g}")
    return p_value
