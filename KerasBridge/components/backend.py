"""
# @ Create Time: 2026-09-30 16:48:09
# @ Modified time: 2026-10-12 21:40:31
# @ Description:
"""

"""
Engine backends turning optimizer specs into engine optimizers.

The keras backend produces ``keras.optimizers.Optimizer`` instances, the torch
backend produces a ``TorchOptimizer`` handle that binds to model parameters.
"""

import logging
import os

# Keras 3 picks its engine at import time
os.environ.setdefault("KERAS_BACKEND", "torch")

from abc import ABC, abstractmethod  # noqa: E402
from dataclasses import dataclass, field  # noqa: E402
from typing import Any, Dict, Iterable, Optional, Tuple, Type, Union  # noqa: E402

import keras  # noqa: E402
import torch.optim as optim  # noqa: E402
from torch.optim.lr_scheduler import LambdaLR  # noqa: E402

from KerasBridge.components.component_registry import registry  # noqa: E402
from KerasBridge.components.logger import get_logger  # noqa: E402
from KerasBridge.components.optimizer import Nadam, OptimizerSpec  # noqa: E402

logger = get_logger()


class BaseBackend(ABC):
    """Base class for all engine backends."""

    def __init__(self, **kwargs):
        self.kwargs = kwargs

    @abstractmethod
    def build(self, spec: OptimizerSpec) -> Any:
        """Convert ``spec`` into the engine's optimizer object."""
        pass


_KERAS_OPTIMIZERS = {
    "sgd": keras.optimizers.SGD,
    "rmsprop": keras.optimizers.RMSprop,
    "adagrad": keras.optimizers.Adagrad,
    "adadelta": keras.optimizers.Adadelta,
    "adam": keras.optimizers.Adam,
    "adamax": keras.optimizers.Adamax,
    "nadam": keras.optimizers.Nadam,
}


def keras_learning_rate(
    spec: OptimizerSpec,
) -> Union[float, keras.optimizers.schedules.LearningRateSchedule]:
    """
    Learning rate argument for a Keras optimizer.

    Keras 3 dropped the ``decay`` argument; ``lr / (1 + decay * iterations)`` is
    expressed as an ``InverseTimeDecay`` schedule with one step per decay unit.
    """
    decay = getattr(spec, "decay", 0.0)
    if decay > 0.0:
        return keras.optimizers.schedules.InverseTimeDecay(
            initial_learning_rate=spec.lr, decay_steps=1, decay_rate=decay
        )
    return spec.lr


@registry.backend("keras")
class KerasBackend(BaseBackend):
    """Builds Keras 3 optimizers."""

    def build(self, spec: OptimizerSpec) -> keras.optimizers.Optimizer:
        hyperparameters = spec.hyperparameters()
        hyperparameters.pop("lr")
        hyperparameters.pop("decay", None)
        if "epsilon" in hyperparameters and hyperparameters["epsilon"] is None:
            del hyperparameters["epsilon"]

        schedule_decay = hyperparameters.pop("schedule_decay", None)
        if schedule_decay is not None and schedule_decay != Nadam().schedule_decay:
            logger.log_rank_zero(
                f"Keras Nadam uses a fixed momentum schedule, ignoring "
                f"schedule_decay={schedule_decay}",
                logging.WARNING,
            )

        optimizer = _KERAS_OPTIMIZERS[spec.name](
            learning_rate=keras_learning_rate(spec), **hyperparameters
        )
        logger.debug(f"Built keras optimizer '{spec.name}' with {hyperparameters}")
        return optimizer


_TORCH_OPTIMIZERS: Dict[str, Type[optim.Optimizer]] = {
    "sgd": optim.SGD,
    "rmsprop": optim.RMSprop,
    "adagrad": optim.Adagrad,
    "adadelta": optim.Adadelta,
    "adam": optim.Adam,
    "adamax": optim.Adamax,
    "nadam": optim.NAdam,
}

# Keras name -> torch argument name, per optimizer
_TORCH_RENAMES = {
    "rmsprop": {"rho": "alpha"},
    # torch Adagrad decays the learning rate per step itself
    "adagrad": {"decay": "lr_decay"},
    "nadam": {"schedule_decay": "momentum_decay"},
}


@dataclass
class TorchOptimizer:
    """A torch optimizer class with its arguments, bound to parameters by ``build``."""

    optimizer_cls: Type[optim.Optimizer]
    kwargs: Dict[str, Any] = field(default_factory=dict)
    decay: float = 0.0

    def lr_lambda(self, step: int) -> float:
        return 1.0 / (1.0 + self.decay * step)

    def build(self, params: Iterable) -> Tuple[optim.Optimizer, Optional[LambdaLR]]:
        """
        Create the optimizer over ``params``.

        Returns:
            The optimizer and a ``LambdaLR`` applying time-based decay, or None
            when the spec has no decay.
        """
        optimizer = self.optimizer_cls(params, **self.kwargs)
        scheduler = None
        if self.decay > 0.0:
            scheduler = LambdaLR(optimizer, lr_lambda=self.lr_lambda)
        return optimizer, scheduler


@registry.backend("torch")
class TorchBackend(BaseBackend):
    """Builds ``TorchOptimizer`` handles for ``torch.optim``."""

    def build(self, spec: OptimizerSpec) -> TorchOptimizer:
        kwargs = spec.hyperparameters()
        decay = 0.0 if spec.name == "adagrad" else kwargs.pop("decay", 0.0)

        epsilon = kwargs.pop("epsilon", None)
        if epsilon is not None:
            kwargs["eps"] = epsilon
        if "beta_1" in kwargs:
            kwargs["betas"] = (kwargs.pop("beta_1"), kwargs.pop("beta_2"))
        for keras_name, torch_name in _TORCH_RENAMES.get(spec.name, {}).items():
            kwargs[torch_name] = kwargs.pop(keras_name)

        handle = TorchOptimizer(_TORCH_OPTIMIZERS[spec.name], kwargs, decay)
        logger.debug(f"Built torch optimizer '{spec.name}' with {kwargs}")
        return handle


def get_backend(backend_name: str) -> BaseBackend:
    backend_cls = registry.get_backend(backend_name)
    if backend_cls is None:
        raise ValueError(
            f"Unknown backend: {backend_name}. Available: {registry.list_backends()}"
        )
    return backend_cls()
