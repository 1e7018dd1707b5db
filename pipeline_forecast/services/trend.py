from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class RegressionResult:
    slope: float
    intercept: float
    std_dev: float

    def predict(self, x):
        return self.slope * x + self.intercept


def fit_trend(series: Union[pd.Series, Sequence[float]]) -> RegressionResult:
    """
    Ordinary least squares line through ``series`` using its positions
    0..n-1 as x.

    ``std_dev`` is the residual standard deviation with ``max(n - 2, 1)``
    degrees of freedom. A series too short to define a slope yields a flat
    line at its mean.
    """
    y = np.asarray(series, dtype=float)
    n = y.size
    if n == 0:
        return RegressionResult(slope=0.0, intercept=0.0, std_dev=0.0)

    x = np.arange(n, dtype=float)
    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = float(np.dot(x, y))
    sum_x2 = float(np.dot(x, x))

    denominator = n * sum_x2 - sum_x * sum_x
    slope = (n * sum_xy - sum_x * sum_y) / denominator if denominator != 0 else 0.0
    intercept = (sum_y - slope * sum_x) / n

    residuals = y - (slope * x + intercept)
    variance = float(np.dot(residuals, residuals)) / max(n - 2, 1)
    std_dev = float(np.sqrt(max(variance, 0.0)))

    return RegressionResult(slope=float(slope), intercept=float(intercept), std_dev=std_dev)
