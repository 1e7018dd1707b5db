from typing import Sequence, Union

import pandas as pd

Series = Union[pd.Series, Sequence[float]]


def rolling_average(series: Series, window: int) -> pd.Series:
    """
    Trailing moving average over ``window`` points.

    The first ``window - 1`` values average only what has been seen so far,
    so the output always has the same length as the input.
    """
    if window < 1:
        raise ValueError("window must be >= 1")
    values = pd.Series(series, dtype="float64").reset_index(drop=True)
    if values.empty:
        return values
    return values.rolling(window, min_periods=1).mean()
