"""
# @ Create Time: 2026-10-06 14:05:22
# @ Modified time: 2026-10-13 12:48:36
# @ Description:
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
import torch
import torch.nn as nn

from KerasBridge.components.backend import (
    KerasBackend,
    TorchBackend,
    TorchOptimizer,
    get_backend,
    keras_learning_rate,
)
from KerasBridge.components.component_registry import ComponentFactory
from KerasBridge.components.optimizer import (
    SGD,
    Adadelta,
    Adagrad,
    Adam,
    Adamax,
    Nadam,
    RMSprop,
    create_optimizer_spec,
)

import keras  # noqa: E402

OPTIMIZER_NAMES = ["sgd", "rmsprop", "adagrad", "adadelta", "adam", "adamax", "nadam"]

KERAS_CLASSES = {
    "sgd": keras.optimizers.SGD,
    "rmsprop": keras.optimizers.RMSprop,
    "adagrad": keras.optimizers.Adagrad,
    "adadelta": keras.optimizers.Adadelta,
    "adam": keras.optimizers.Adam,
    "adamax": keras.optimizers.Adamax,
    "nadam": keras.optimizers.Nadam,
}

TORCH_CLASSES = {
    "sgd": torch.optim.SGD,
    "rmsprop": torch.optim.RMSprop,
    "adagrad": torch.optim.Adagrad,
    "adadelta": torch.optim.Adadelta,
    "adam": torch.optim.Adam,
    "adamax": torch.optim.Adamax,
    "nadam": torch.optim.NAdam,
}


@pytest.fixture
def dummy_model():
    return nn.Linear(10, 1)


def test_factory_creates_backends():
    assert isinstance(ComponentFactory.create_backend("keras"), KerasBackend)
    assert isinstance(ComponentFactory.create_backend("torch"), TorchBackend)
    with pytest.raises(ValueError, match="Unknown backend: jax"):
        ComponentFactory.create_backend("jax")
    with pytest.raises(ValueError, match="Unknown backend: jax"):
        get_backend("jax")


@pytest.mark.parametrize("opt_name", OPTIMIZER_NAMES)
def test_keras_optimizers(opt_name):
    """Every spec builds the matching Keras optimizer with its learning rate."""
    spec = create_optimizer_spec(opt_name, lr=0.05)
    optimizer = get_backend("keras").build(spec)

    assert isinstance(optimizer, KERAS_CLASSES[opt_name])
    assert optimizer.get_config()["learning_rate"] == pytest.approx(0.05)


def test_keras_sgd_momentum_and_nesterov():
    optimizer = KerasBackend().build(SGD(momentum=0.9, nesterov=True))

    assert optimizer.momentum == pytest.approx(0.9)
    assert optimizer.nesterov is True


def test_keras_adam_fields():
    optimizer = KerasBackend().build(Adam(beta_1=0.8, beta_2=0.99, amsgrad=True))

    assert optimizer.beta_1 == pytest.approx(0.8)
    assert optimizer.beta_2 == pytest.approx(0.99)
    assert optimizer.amsgrad is True


def test_keras_rho():
    assert KerasBackend().build(RMSprop(rho=0.8)).rho == pytest.approx(0.8)
    assert KerasBackend().build(Adadelta(rho=0.7)).rho == pytest.approx(0.7)


def test_keras_epsilon():
    """An unset epsilon leaves the Keras default in place."""
    engine_default = keras.optimizers.Adam().epsilon

    assert KerasBackend().build(Adam()).epsilon == pytest.approx(engine_default)
    assert KerasBackend().build(Adam(epsilon=1e-3)).epsilon == pytest.approx(1e-3)


def test_keras_nadam_ignores_schedule_decay():
    optimizer = KerasBackend().build(Nadam(schedule_decay=0.01))

    assert isinstance(optimizer, keras.optimizers.Nadam)


def test_keras_learning_rate_decay():
    assert keras_learning_rate(Adam(lr=0.01)) == 0.01

    schedule = keras_learning_rate(Adamax(lr=0.01, decay=0.5))
    assert isinstance(schedule, keras.optimizers.schedules.InverseTimeDecay)
    config = schedule.get_config()
    assert config["initial_learning_rate"] == pytest.approx(0.01)
    assert config["decay_rate"] == pytest.approx(0.5)
    assert config["decay_steps"] == 1

    # Nadam has no decay hyperparameter
    assert keras_learning_rate(Nadam(lr=0.01)) == 0.01


@pytest.mark.parametrize("opt_name", OPTIMIZER_NAMES)
def test_torch_optimizers(opt_name, dummy_model):
    """Every spec builds the matching torch optimizer over the model parameters."""
    spec = create_optimizer_spec(opt_name, lr=0.05)
    handle = get_backend("torch").build(spec)

    assert isinstance(handle, TorchOptimizer)
    assert "eps" not in handle.kwargs

    optimizer, scheduler = handle.build(dummy_model.parameters())
    assert isinstance(optimizer, TORCH_CLASSES[opt_name])
    assert len(optimizer.param_groups) == 1
    assert optimizer.param_groups[0]["lr"] == pytest.approx(0.05)
    assert scheduler is None


def test_torch_argument_mapping(dummy_model):
    backend = TorchBackend()

    group = backend.build(SGD(momentum=0.9, nesterov=True)).build(
        dummy_model.parameters()
    )[0].param_groups[0]
    assert group["momentum"] == pytest.approx(0.9)
    assert group["nesterov"] is True

    group = backend.build(RMSprop(rho=0.8, epsilon=1e-4)).build(
        dummy_model.parameters()
    )[0].param_groups[0]
    assert group["alpha"] == pytest.approx(0.8)
    assert group["eps"] == pytest.approx(1e-4)

    group = backend.build(Adadelta(rho=0.7)).build(dummy_model.parameters())[0].param_groups[0]
    assert group["rho"] == pytest.approx(0.7)

    group = backend.build(Adam(beta_1=0.8, amsgrad=True)).build(
        dummy_model.parameters()
    )[0].param_groups[0]
    assert group["betas"] == pytest.approx((0.8, 0.999))
    assert group["amsgrad"] is True

    group = backend.build(Nadam(schedule_decay=0.01)).build(
        dummy_model.parameters()
    )[0].param_groups[0]
    assert group["momentum_decay"] == pytest.approx(0.01)


def test_torch_adagrad_decay_uses_lr_decay(dummy_model):
    handle = TorchBackend().build(Adagrad(lr=0.1, decay=0.01))

    assert handle.decay == 0.0
    optimizer, scheduler = handle.build(dummy_model.parameters())
    assert optimizer.param_groups[0]["lr_decay"] == pytest.approx(0.01)
    assert scheduler is None


def test_torch_time_based_decay(dummy_model):
    handle = TorchBackend().build(SGD(lr=0.1, decay=0.5))
    optimizer, scheduler = handle.build(dummy_model.parameters())

    assert scheduler is not None
    assert optimizer.param_groups[0]["lr"] == pytest.approx(0.1)

    for step in range(1, 4):
        optimizer.step()
        scheduler.step()
        assert optimizer.param_groups[0]["lr"] == pytest.approx(0.1 / (1.0 + 0.5 * step))
