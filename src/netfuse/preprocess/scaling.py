"""Feature scaling"""
from typing import Union

import numpy as np
import pandas as pd
from sklearn.preprocessing import StandardScaler

from ..exceptions import InvalidInput


def standard_normalize(
    X: Union[np.ndarray, pd.DataFrame],
) -> Union[np.ndarray, pd.DataFrame]:
    """
    Z-score each feature column

    Constant columns are mapped to 0 rather than NaN.

    Args:
        X: Feature matrix (n_samples, n_features)

    Returns:
        Scaled matrix of the same type; DataFrames keep index and columns
    """
    values = np.asarray(X, dtype=np.float64)
    if values.ndim != 2:
        raise InvalidInput(f"Feature matrix must be 2D, got {values.ndim}D")
    if not np.isfinite(values).all():
        raise InvalidInput("Feature matrix contains NaN or Inf values")

    # StandardScaler leaves zero-variance columns at 0 after centering
    scaled = StandardScaler().fit_transform(values)

    if isinstance(X, pd.DataFrame):
        return pd.DataFrame(scaled, index=X.index, columns=X.columns)
    return scaled
