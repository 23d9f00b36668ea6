"""
# @ Create Time: 2026-10-03 09:41:27
# @ Modified time: 2026-10-12 22:10:03
# @ Description:
"""

from typing import Any, Sequence, Union

import keras

from KerasBridge.components.backend import get_backend
from KerasBridge.components.component_registry import ComponentFactory
from KerasBridge.components.logger import get_logger
from KerasBridge.components.model import BaseModel
from KerasBridge.components.optimizer import OptimizerSpec

logger = get_logger()


def get_optimizer_spec(config_manager) -> OptimizerSpec:
    spec = config_manager.get_optimizer_spec()
    logger.log_rank_zero(f"Optimizer spec: {spec.to_json()}")
    return spec


def get_optimizer(config_manager) -> Any:
    """Build the engine optimizer for the configured backend."""
    opt_config = config_manager.get_optimizer_config()
    spec = get_optimizer_spec(config_manager)
    return get_backend(opt_config["backend"]).build(spec)


def get_model(config_manager) -> BaseModel:
    """Create the configured model builder; call ``build`` or ``build_torch`` on it."""
    model_config = config_manager.get_model_config()
    model_name = model_config.pop("name")
    return ComponentFactory.create_model(model_name, **model_config)


def compile_model(
    model: keras.Model,
    optimizer: Union[OptimizerSpec, keras.optimizers.Optimizer, str],
    loss: str,
    metrics: Sequence[str] = ("accuracy",),
) -> keras.Model:
    """
    Compile ``model`` with an optimizer spec, a Keras optimizer or a Keras
    optimizer identifier such as ``"adam"``.
    """
    if isinstance(optimizer, OptimizerSpec):
        optimizer = get_backend("keras").build(optimizer)
    model.compile(optimizer=optimizer, loss=loss, metrics=list(metrics))
    return model
