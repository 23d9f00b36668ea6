"""
# @ Create Time: 2026-09-28 10:40:02
# @ Modified time: 2026-10-12 21:17:55
# @ Description:
"""

"""
Optimizer specs for the Keras optimizer catalog.

Every optimizer is a frozen dataclass holding its own typed hyperparameters.
Values are validated when the spec is created, so a spec that exists is always
a complete and valid description of one optimizer. Engine objects are produced
from specs by the backends in ``KerasBridge.components.backend``.
"""

import json
import math
import numbers
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, Optional, Type

from KerasBridge.components.component_registry import registry

NON_NEGATIVE = "must be >= 0"
OPEN_UNIT_INTERVAL = "must lie in the open interval (0, 1)"


class InvalidHyperparameter(ValueError):
    """Raised when a hyperparameter value is outside its valid range."""

    def __init__(self, field_name: str, value: Any, bound: str):
        self.field = field_name
        self.value = value
        self.bound = bound
        super().__init__(f"Invalid hyperparameter '{field_name}'={value!r}: {bound}")


def _real(default: Optional[float], bound: str = NON_NEGATIVE, optional: bool = False):
    """Declare a real-valued hyperparameter field."""
    return field(
        default=default,
        metadata={"kind": "real", "bound": bound, "optional": optional},
    )


def _flag(default: bool = False):
    """Declare a boolean hyperparameter field."""
    return field(default=default, metadata={"kind": "flag"})


def _check_real(name: str, value: Any, bound: str) -> float:
    # bool is a numbers.Real subclass, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidHyperparameter(name, value, "must be a real number")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidHyperparameter(name, value, "must be finite")
    if bound == NON_NEGATIVE and value < 0.0:
        raise InvalidHyperparameter(name, value, bound)
    if bound == OPEN_UNIT_INTERVAL and not 0.0 < value < 1.0:
        raise InvalidHyperparameter(name, value, bound)
    return value


@dataclass(frozen=True)
class OptimizerSpec:
    """Base class of all optimizer specs.

    Subclasses declare their hyperparameters with ``_real`` and ``_flag`` and are
    registered under their Keras identifier.
    """

    name: ClassVar[str] = ""

    def __post_init__(self):
        if not self.name:
            raise TypeError(
                f"{type(self).__name__} is not a registered optimizer; "
                f"use one of {registry.list_optimizers()}"
            )
        for spec_field in fields(self):
            value = getattr(self, spec_field.name)
            meta = spec_field.metadata
            if meta.get("kind") == "flag":
                if not isinstance(value, bool):
                    raise InvalidHyperparameter(spec_field.name, value, "must be a bool")
                continue
            if value is None and meta.get("optional"):
                continue
            value = _check_real(spec_field.name, value, meta.get("bound", NON_NEGATIVE))
            object.__setattr__(self, spec_field.name, value)

    def hyperparameters(self) -> Dict[str, Any]:
        """Return every hyperparameter of the spec, in declaration order."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def uses_engine_epsilon(self) -> bool:
        """True when epsilon is left for the engine to choose."""
        return any(f.name == "epsilon" for f in fields(self)) and self.epsilon is None

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, **self.hyperparameters()}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def replace(self, **changes) -> "OptimizerSpec":
        """Return a new, validated spec with ``changes`` applied."""
        return self.from_dict({**self.to_dict(), **changes})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OptimizerSpec":
        """
        Build a spec from a mapping of the form ``{"name": ..., **hyperparameters}``.

        When called on a concrete spec class the ``name`` key may be omitted.

        Raises:
            ValueError: if the name is unknown or does not match the class.
            InvalidHyperparameter: on unknown keys or out-of-range values.
        """
        data = dict(data)
        name = data.pop("name", None)
        if cls is OptimizerSpec:
            if name is None:
                raise ValueError("Optimizer spec mapping is missing 'name'")
            target = get_optimizer_cls(name)
        else:
            if name is not None and name != cls.name:
                raise ValueError(f"Cannot build '{cls.name}' spec from '{name}' data")
            target = cls

        known = {f.name for f in fields(target)}
        for key, value in data.items():
            if key not in known:
                raise InvalidHyperparameter(
                    key, value, f"not a hyperparameter of '{target.name}'"
                )
        return target(**data)

    @classmethod
    def from_json(cls, text: str) -> "OptimizerSpec":
        return cls.from_dict(json.loads(text))


def _register(name: str):
    def decorator(cls: Type[OptimizerSpec]) -> Type[OptimizerSpec]:
        cls.name = name
        return registry.optimizer(name)(cls)

    return decorator


@_register("sgd")
@dataclass(frozen=True)
class SGD(OptimizerSpec):
    """Stochastic gradient descent with optional momentum and Nesterov lookahead."""

    lr: float = _real(0.01)
    momentum: float = _real(0.0)
    decay: float = _real(0.0)
    nesterov: bool = _flag(False)


@_register("rmsprop")
@dataclass(frozen=True)
class RMSprop(OptimizerSpec):
    """RMSProp. Usually a good choice for recurrent networks."""

    lr: float = _real(0.01)
    rho: float = _real(0.9)
    epsilon: Optional[float] = _real(None, optional=True)
    decay: float = _real(0.0)


@_register("adagrad")
@dataclass(frozen=True)
class Adagrad(OptimizerSpec):
    """Adagrad: per-parameter learning rates scaled by accumulated squared gradients."""

    lr: float = _real(0.01)
    epsilon: Optional[float] = _real(None, optional=True)
    decay: float = _real(0.0)


@_register("adadelta")
@dataclass(frozen=True)
class Adadelta(OptimizerSpec):
    """Adadelta: Adagrad over a decaying window of past gradients."""

    lr: float = _real(1.0)
    rho: float = _real(0.95)
    epsilon: Optional[float] = _real(None, optional=True)
    decay: float = _real(0.0)


@_register("adam")
@dataclass(frozen=True)
class Adam(OptimizerSpec):
    """Adam. ``amsgrad`` switches to the max-of-past-squared-gradients variant."""

    lr: float = _real(0.001)
    beta_1: float = _real(0.9, OPEN_UNIT_INTERVAL)
    beta_2: float = _real(0.999, OPEN_UNIT_INTERVAL)
    epsilon: Optional[float] = _real(None, optional=True)
    decay: float = _real(0.0)
    amsgrad: bool = _flag(False)


@_register("adamax")
@dataclass(frozen=True)
class Adamax(OptimizerSpec):
    """Adamax: Adam based on the infinity norm."""

    lr: float = _real(0.002)
    beta_1: float = _real(0.9, OPEN_UNIT_INTERVAL)
    beta_2: float = _real(0.999, OPEN_UNIT_INTERVAL)
    epsilon: Optional[float] = _real(None, optional=True)
    decay: float = _real(0.0)


@_register("nadam")
@dataclass(frozen=True)
class Nadam(OptimizerSpec):
    """Nesterov Adam."""

    lr: float = _real(0.002)
    beta_1: float = _real(0.9, OPEN_UNIT_INTERVAL)
    beta_2: float = _real(0.999, OPEN_UNIT_INTERVAL)
    epsilon: Optional[float] = _real(None, optional=True)
    schedule_decay: float = _real(0.004, OPEN_UNIT_INTERVAL)


def get_optimizer_cls(optimizer_name: str) -> Type[OptimizerSpec]:
    optimizer_cls = registry.get_optimizer(optimizer_name)
    if optimizer_cls is None:
        raise ValueError(
            f"Unknown optimizer: {optimizer_name}. Available: {registry.list_optimizers()}"
        )
    return optimizer_cls


def create_optimizer_spec(optimizer_name: str, **hyperparameters) -> OptimizerSpec:
    return get_optimizer_cls(optimizer_name).from_dict(hyperparameters)
