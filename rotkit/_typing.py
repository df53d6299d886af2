from typing import Union, Literal
from datetime import datetime
from pandas import Timestamp

import numpy as np
import numpy.typing as npt

FLOAT_ARRAY = npt.NDArray[np.floating]
ARRAY_LIKE = npt.ArrayLike

SCALAR_TYPE_LIKE = Union[type[np.float32], type[np.float64], np.dtype, str]

DatetimeLike = Union[datetime, Timestamp]


EULER_ORDERS = Literal['zyx', 'xyz']
