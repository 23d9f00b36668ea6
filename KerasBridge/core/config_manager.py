"""
# @ Create Time: 2026-10-02 13:30:44
# @ Modified time: 2026-10-13 10:08:19
# @ Description:
"""

"""
Configuration manager for the example workflow.
Provides configuration loading, validation, and conversion to optimizer specs.
"""

import json
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import torch
import yaml

from KerasBridge.components.backend import get_backend
from KerasBridge.components.component_registry import registry
from KerasBridge.components.optimizer import OptimizerSpec, create_optimizer_spec


@dataclass
class OptimizerConfig:
    """Configuration for the optimizer spec and the engine that consumes it."""

    name: str = "adam"
    backend: str = "keras"
    # Hyperparameters of the spec; anything left out takes the spec default
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ModelConfig:
    """Configuration for the model builder."""

    name: str = "sequential_mlp"
    # Builder-specific parameters
    extra_params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class DatasetConfig:
    """Configuration for the tabular dataset."""

    path: str = "pima-indians-diabetes.data.csv"
    delimiter: str = ","
    label_column: int = -1


@dataclass
class TrainingConfig:
    """Configuration for compile, fit and persistence."""

    loss: str = "binary_crossentropy"
    metrics: List[str] = field(default_factory=lambda: ["accuracy"])
    batch_size: int = 10
    epochs: int = 150
    verbose: int = 1
    seed: int = 42
    output_dir: str = "./results"
    model_json: str = "model.json"
    weights_file: str = "model.weights.h5"
    # Optimizer used to compile the reloaded model; a Keras identifier
    reload_optimizer: str = "rmsprop"

    extra_params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class MasterConfig:
    """Main configuration."""

    optimizer: OptimizerConfig = field(default_factory=OptimizerConfig)
    model: ModelConfig = field(default_factory=ModelConfig)
    dataset: DatasetConfig = field(default_factory=DatasetConfig)
    training: TrainingConfig = field(default_factory=TrainingConfig)
    log_level: str = "INFO"

    # Additional parameters
    extra_params: Dict[str, Any] = field(default_factory=dict)


def _coerce_number(value: Any) -> Any:
    # YAML 1.1 loads "1e-3" as a string
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return value
    return value


class ConfigManager:
    """Manages configuration loading, validation, and updates."""

    def __init__(
        self, config_source: Optional[Union[str, Path, Dict[str, Any]]] = None
    ):
        """
        Initialize ConfigManager with either:
        - Path to config file (str or Path)
        - Configuration dictionary
        - None (default config)
        """
        self.config = MasterConfig()

        if config_source is not None:
            if isinstance(config_source, (str, Path)):
                self.load_config(config_source)
            elif isinstance(config_source, dict):
                self.update_config(config_source)
            else:
                raise TypeError(
                    f"config_source must be path (str/Path) or dict, got {type(config_source)}"
                )

    def load_config(self, config_path: Union[str, Path]) -> None:
        """Load configuration from a YAML or JSON file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        if config_path.suffix.lower() in [".yaml", ".yml"]:
            with open(config_path, "r") as f:
                config_dict = yaml.safe_load(f) or {}
        elif config_path.suffix.lower() == ".json":
            with open(config_path, "r") as f:
                config_dict = json.load(f)
        else:
            raise ValueError(
                f"Unsupported configuration file format: {config_path.suffix}"
            )

        self.update_config(config_dict)

    def update_config(self, config_dict: Dict[str, Any]) -> None:
        """Update configuration with dictionary values."""
        for key, value in config_dict.items():
            if not hasattr(self.config, key):
                # Store unknown parameters in extra_params
                self.config.extra_params[key] = value
                continue

            nested_config = getattr(self.config, key)
            if not (isinstance(value, dict) and hasattr(nested_config, "__dataclass_fields__")):
                setattr(self.config, key, value)
                continue

            for nested_key, nested_value in value.items():
                if key == "optimizer" and nested_key == "params":
                    nested_config.params.update(nested_value or {})
                elif hasattr(nested_config, nested_key):
                    setattr(nested_config, nested_key, nested_value)
                elif key == "optimizer":
                    # Flat hyperparameters next to the optimizer name
                    nested_config.params[nested_key] = nested_value
                elif hasattr(nested_config, "extra_params"):
                    nested_config.extra_params[nested_key] = nested_value
                else:
                    raise ValueError(f"Unknown {key} configuration key: {nested_key}")

    def save_config(self, output_path: Union[str, Path]) -> None:
        """Save current configuration to file."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = asdict(self.config)

        if output_path.suffix.lower() in [".yaml", ".yml"]:
            with open(output_path, "w") as f:
                yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2)
        elif output_path.suffix.lower() == ".json":
            with open(output_path, "w") as f:
                json.dump(config_dict, f, indent=2)
        else:
            raise ValueError(f"Unsupported output file format: {output_path.suffix}")

    def validate_config(self) -> None:
        """Validate configuration parameters."""
        errors = []

        optimizer = self.config.optimizer
        if registry.get_optimizer(optimizer.name) is None:
            errors.append(
                f"Optimizer must be one of {registry.list_optimizers()}, got '{optimizer.name}'"
            )
        else:
            try:
                spec = self.get_optimizer_spec()
                if optimizer.backend == "torch":
                    # torch checks argument combinations only when the optimizer is built
                    get_backend("torch").build(spec).build([torch.nn.Parameter(torch.zeros(1))])
            except ValueError as e:
                errors.append(str(e))

        if registry.get_backend(optimizer.backend) is None:
            errors.append(
                f"Backend must be one of {registry.list_backends()}, got '{optimizer.backend}'"
            )
        elif optimizer.backend == "keras" and not str(
            self.config.training.weights_file
        ).endswith(".weights.h5"):
            errors.append("Keras weights file name must end with '.weights.h5'")

        if registry.get_model(self.config.model.name) is None:
            errors.append(
                f"Model must be one of {registry.list_models()}, got '{self.config.model.name}'"
            )

        if not self.config.dataset.path:
            errors.append("Dataset path is required")

        training = self.config.training
        if int(training.batch_size) <= 0:
            errors.append("Batch size must be positive")
        if int(training.epochs) <= 0:
            errors.append("Number of epochs must be positive")
        if not training.loss:
            errors.append("Loss is required")
        if registry.get_optimizer(training.reload_optimizer) is None:
            errors.append(
                f"Reload optimizer must be one of {registry.list_optimizers()}, "
                f"got '{training.reload_optimizer}'"
            )

        if errors:
            raise ValueError(
                f"Configuration validation failed:\n"
                + "\n".join(f"- {error}" for error in errors)
            )

    def get_optimizer_spec(self) -> OptimizerSpec:
        """Build the validated optimizer spec described by the configuration."""
        params = {
            key: _coerce_number(value)
            for key, value in self.config.optimizer.params.items()
        }
        return create_optimizer_spec(self.config.optimizer.name, **params)

    def get_optimizer_config(self) -> Dict[str, Any]:
        """Get optimizer configuration as dictionary."""
        return asdict(self.config.optimizer)

    def get_model_config(self) -> Dict[str, Any]:
        """Get model configuration as dictionary."""
        model_dict = asdict(self.config.model)
        model_dict.update(model_dict.pop("extra_params"))
        return model_dict

    def get_dataset_config(self) -> Dict[str, Any]:
        """Get dataset configuration as dictionary."""
        return asdict(self.config.dataset)

    def get_training_config(self) -> Dict[str, Any]:
        """Get training configuration as dictionary."""
        training_dict = asdict(self.config.training)
        training_dict.update(training_dict.pop("extra_params"))
        return training_dict

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self.config)

    def __getattr__(self, name: str) -> Any:
        """Allow direct access to config attributes."""
        if name != "config" and hasattr(self.config, name):
            return getattr(self.config, name)
        raise AttributeError(
            f"'{self.__class__.__name__}' object has no attribute '{name}'"
        )
