"""
KerasBridge: validated Keras optimizer specs and their keras/torch engine objects.
"""

from KerasBridge.components.optimizer import (
    SGD,
    Adadelta,
    Adagrad,
    Adam,
    Adamax,
    InvalidHyperparameter,
    Nadam,
    OptimizerSpec,
    RMSprop,
    create_optimizer_spec,
    get_optimizer_cls,
)

__all__ = [
    "OptimizerSpec",
    "InvalidHyperparameter",
    "SGD",
    "RMSprop",
    "Adagrad",
    "Adadelta",
    "Adam",
    "Adamax",
    "Nadam",
    "create_optimizer_spec",
    "get_optimizer_cls",
]

__version__ = "0.1.0"
