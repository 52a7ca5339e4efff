"""
Activations Package

This package provides the activation functions available to network nodes.

Exported:
    ActivationType:   Enumeration of the supported activation functions
    activation_codes: Dictionary mapping each ActivationType to a 3-letter code
    activate:         Apply an activation function to a scalar input
    apply_activation: Apply an activation function element-wise to an array
    parse_activation: Convert a configuration string into an ActivationType
    Individual activation functions: logistic_activation, tanh_activation,
                                     prelu_activation, swish_activation
"""

from agentneat.activations.basic_activations import (
    ActivationType,
    activation_codes,
    activate,
    apply_activation,
    parse_activation,
    logistic_activation,
    tanh_activation,
    prelu_activation,
    swish_activation
)

__all__ = [
    'ActivationType',
    'activation_codes',
    'activate',
    'apply_activation',
    'parse_activation',
    'logistic_activation',
    'tanh_activation',
    'prelu_activation',
    'swish_activation'
]
