"""
# @ Create Time: 2026-10-01 11:27:36
# @ Modified time: 2026-10-13 16:20:04
# @ Description:
"""

"""
Model builders for the example workflow.
Each builder produces the same network as a Keras model or as a torch module.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence

# Sets the engine choice before keras is imported
from KerasBridge.components import backend  # noqa: F401
import keras
import torch.nn as nn

from KerasBridge.components.component_registry import registry

# keras.initializers.RandomUniform defaults
_UNIFORM_LIMIT = 0.05

_TORCH_ACTIVATIONS = {
    "relu": nn.ReLU,
    "sigmoid": nn.Sigmoid,
    "tanh": nn.Tanh,
    "softmax": lambda: nn.Softmax(dim=-1),
    "linear": nn.Identity,
}


def _torch_activation(name: Optional[str]) -> nn.Module:
    if name is None:
        return nn.Identity()
    if name not in _TORCH_ACTIVATIONS:
        raise ValueError(
            f"Unknown activation: {name}. Available: {list(_TORCH_ACTIVATIONS)}"
        )
    return _TORCH_ACTIVATIONS[name]()


def _torch_init_(weight, initializer: str) -> None:
    if initializer in ("uniform", "random_uniform"):
        nn.init.uniform_(weight, -_UNIFORM_LIMIT, _UNIFORM_LIMIT)
    elif initializer == "glorot_uniform":
        nn.init.xavier_uniform_(weight)
    elif initializer == "zeros":
        nn.init.zeros_(weight)
    else:
        raise ValueError(f"Unsupported kernel initializer for torch: {initializer}")


class BaseModel(ABC):
    """Base class for all model builders."""

    def __init__(self, **kwargs):
        self.model_config = kwargs

    @abstractmethod
    def build(self) -> keras.Model:
        """Build and return an uncompiled Keras model."""
        pass

    @abstractmethod
    def build_torch(self) -> nn.Module:
        """Build and return the equivalent torch module."""
        pass

    @abstractmethod
    def get_config(self) -> Dict[str, Any]:
        """Return the constructor arguments of the builder."""
        pass


@registry.model("sequential_mlp")
class SequentialMLP(BaseModel):
    """
    Stack of dense layers ending in a single output layer.

    The defaults give the 8-12-8-1 network of the Pima Indians diabetes example.
    """

    def __init__(
        self,
        input_dim: int = 8,
        hidden_units: Sequence[int] = (12, 8),
        activation: str = "relu",
        kernel_initializer: str = "random_uniform",
        output_units: int = 1,
        output_activation: str = "sigmoid",
        **kwargs,
    ):
        super().__init__(**kwargs)
        if input_dim <= 0:
            raise ValueError(f"input_dim must be positive, got {input_dim}")
        self.input_dim = input_dim
        self.hidden_units = list(hidden_units)
        self.activation = activation
        self.kernel_initializer = kernel_initializer
        self.output_units = output_units
        self.output_activation = output_activation

    def build(self) -> keras.Model:
        model = keras.Sequential(name="sequential_mlp")
        model.add(keras.Input(shape=(self.input_dim,)))
        for units in self.hidden_units:
            model.add(
                keras.layers.Dense(
                    units,
                    kernel_initializer=self.kernel_initializer,
                    activation=self.activation,
                )
            )
        model.add(
            keras.layers.Dense(self.output_units, activation=self.output_activation)
        )
        return model

    def build_torch(self) -> nn.Module:
        layers = []
        in_features = self.input_dim
        for units in self.hidden_units:
            linear = nn.Linear(in_features, units)
            _torch_init_(linear.weight, self.kernel_initializer)
            nn.init.zeros_(linear.bias)
            layers += [linear, _torch_activation(self.activation)]
            in_features = units

        output = nn.Linear(in_features, self.output_units)
        nn.init.xavier_uniform_(output.weight)
        nn.init.zeros_(output.bias)
        layers += [output, _torch_activation(self.output_activation)]
        return nn.Sequential(*layers)

    def get_config(self) -> Dict[str, Any]:
        return {
            "input_dim": self.input_dim,
            "hidden_units": list(self.hidden_units),
            "activation": self.activation,
            "kernel_initializer": self.kernel_initializer,
            "output_units": self.output_units,
            "output_activation": self.output_activation,
        }
