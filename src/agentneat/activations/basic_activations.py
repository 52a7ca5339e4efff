import numpy as np
import random
from enum import Enum

class ActivationType(Enum):
    """
    The activation functions a node can be assigned.
    """
    LOGISTIC = "logistic"
    TANH     = "tanh"
    PRELU    = "prelu"
    SWISH    = "swish"

def logistic_activation(z):
    z = np.clip(z, -100, 100)   # to prevent under/overflow when calculating exp
    return 1.0 / (1.0 + np.exp(-z))

def tanh_activation(z):
    return 2.0 * logistic_activation(2.0 * z) - 1.0

def prelu_activation(z, slope):
    return np.where(z < 0, slope * z, z)

def swish_activation(z):
    return z * logistic_activation(z)

# 3-letter identifiers for each activation function
activation_codes = {
    ActivationType.LOGISTIC: "LOG",
    ActivationType.TANH    : "TNH",
    ActivationType.PRELU   : "PRL",
    ActivationType.SWISH   : "SWI",
    }

def apply_activation(activation: ActivationType, z, slope: float = 1.0):
    """
    Apply an activation function element-wise.

    Parameters:
        activation: which function to apply
        z:          the accumulated (weighted) input, scalar or numpy array
        slope:      learned slope for negative inputs (only used by PRELU)

    Returns:
        the activated value(s), with the same shape as 'z'
    """
    if activation is ActivationType.LOGISTIC:
        return logistic_activation(z)
    elif activation is ActivationType.TANH:
        return tanh_activation(z)
    elif activation is ActivationType.PRELU:
        return prelu_activation(z, slope)
    elif activation is ActivationType.SWISH:
        return swish_activation(z)
    raise ValueError(f"Unknown activation '{activation}'")

def activate(activation: ActivationType, z: float, slope: float = 1.0) -> float:
    """
    Apply an activation function to a node's accumulated input, returning a Python float.
    """
    return float(apply_activation(activation, z, slope))

def parse_activation(name: 'str | ActivationType') -> ActivationType:
    """
    Convert a configuration value into an ActivationType.
    The special value "random" selects one of the activations uniformly.
    """
    if isinstance(name, ActivationType):
        return name
    if name == "random":
        return random.choice(list(ActivationType))
    try:
        return ActivationType(name)
    except ValueError:
        raise ValueError(f"Invalid activation function '{name}'") from None
