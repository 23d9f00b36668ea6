"""
# @ Create Time: 2026-10-07 10:33:15
# @ Modified time: 2026-10-13 14:02:59
# @ Description:
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import json

import pytest
import yaml

from KerasBridge.components.optimizer import Adam, SGD
from KerasBridge.core.config_manager import ConfigManager
from KerasBridge.core.config_parser import create_parser, overrides_from_args

CONFIG_DIR = Path(__file__).parent.parent / "configs"


def test_default_config_is_valid():
    config_manager = ConfigManager()
    config_manager.validate_config()

    assert config_manager.get_optimizer_spec() == Adam()


@pytest.mark.parametrize(
    "config_file", ["pima_indians_diabetes.yaml", "pima_indians_diabetes_torch.yaml"]
)
def test_shipped_configs_are_valid(config_file):
    config_manager = ConfigManager(CONFIG_DIR / config_file)
    config_manager.validate_config()


def test_load_yaml_coerces_numeric_strings(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "optimizer:\n"
        "  name: sgd\n"
        "  backend: torch\n"
        "  params:\n"
        "    lr: 1e-3\n"
        "    momentum: 0.9\n"
        "    nesterov: true\n"
    )
    config_manager = ConfigManager(config_path)

    assert config_manager.optimizer.backend == "torch"
    assert config_manager.get_optimizer_spec() == SGD(lr=1e-3, momentum=0.9, nesterov=True)


def test_flat_optimizer_hyperparameters():
    config_manager = ConfigManager({"optimizer": {"name": "adam", "amsgrad": True}})

    assert config_manager.get_optimizer_spec().amsgrad is True


def test_model_and_training_sections():
    config_manager = ConfigManager(
        {
            "model": {"name": "sequential_mlp", "hidden_units": [4]},
            "training": {"epochs": 3, "patience": 2},
            "experiment": "pima",
        }
    )

    assert config_manager.get_model_config() == {
        "name": "sequential_mlp",
        "hidden_units": [4],
    }
    training = config_manager.get_training_config()
    assert training["epochs"] == 3
    assert training["patience"] == 2
    assert config_manager.extra_params == {"experiment": "pima"}


def test_validation_collects_all_errors():
    config_manager = ConfigManager(
        {
            "optimizer": {"name": "adam", "params": {"lr": -0.1}, "backend": "jax"},
            "training": {"epochs": 0, "batch_size": -1},
        }
    )

    with pytest.raises(ValueError) as excinfo:
        config_manager.validate_config()

    message = str(excinfo.value)
    assert message.startswith("Configuration validation failed:")
    assert "'lr'=-0.1" in message
    assert "Backend must be one of" in message
    assert "Number of epochs must be positive" in message
    assert "Batch size must be positive" in message


def test_validation_rejects_unknown_names():
    config_manager = ConfigManager(
        {
            "optimizer": {"name": "lion"},
            "model": {"name": "resnet"},
            "training": {"reload_optimizer": "lion"},
        }
    )

    with pytest.raises(ValueError) as excinfo:
        config_manager.validate_config()

    message = str(excinfo.value)
    assert "Optimizer must be one of" in message
    assert "Model must be one of" in message
    assert "Reload optimizer must be one of" in message


def test_validation_checks_keras_weights_suffix():
    config_manager = ConfigManager({"training": {"weights_file": "model.h5"}})

    with pytest.raises(ValueError, match="weights.h5"):
        config_manager.validate_config()

    config_manager.update_config({"optimizer": {"backend": "torch"}})
    config_manager.validate_config()


@pytest.mark.parametrize("suffix", [".yaml", ".json"])
def test_save_and_load(tmp_path, suffix):
    config_manager = ConfigManager(
        {"optimizer": {"name": "rmsprop", "params": {"rho": 0.8}}}
    )
    output_path = tmp_path / f"saved{suffix}"
    config_manager.save_config(output_path)

    with open(output_path) as f:
        saved = yaml.safe_load(f) if suffix == ".yaml" else json.load(f)
    assert saved["optimizer"]["params"] == {"rho": 0.8}

    reloaded = ConfigManager(output_path)
    assert reloaded.to_dict() == config_manager.to_dict()
    assert reloaded.get_optimizer_spec() == config_manager.get_optimizer_spec()


def test_unsupported_formats(tmp_path):
    config_path = tmp_path / "config.toml"
    config_path.write_text("")

    with pytest.raises(ValueError, match="Unsupported configuration file format"):
        ConfigManager(config_path)
    with pytest.raises(FileNotFoundError):
        ConfigManager(tmp_path / "missing.yaml")
    with pytest.raises(TypeError):
        ConfigManager(42)


def test_parser_overrides():
    args = create_parser().parse_args(
        ["--config", "c.yaml", "--optimizer", "sgd", "--backend", "torch", "--epochs", "5"]
    )

    assert overrides_from_args(args) == {
        "optimizer": {"name": "sgd", "backend": "torch"},
        "training": {"epochs": 5},
    }
    assert overrides_from_args(create_parser().parse_args(["--config", "c.yaml"])) == {}


def test_validation_builds_torch_optimizer():
    config_manager = ConfigManager(
        {
            "optimizer": {"name": "sgd", "backend": "torch", "params": {"nesterov": True}},
            "training": {"weights_file": "model.pt"},
        }
    )

    with pytest.raises(ValueError, match="Nesterov momentum requires a momentum"):
        config_manager.validate_config()

    config_manager.update_config({"optimizer": {"params": {"momentum": 0.9}}})
    config_manager.validate_config()
