"""
# @ Create Time: 2026-10-04 17:55:03
# @ Modified time: 2026-10-13 16:42:38
# @ Description:
"""

"""
The example workflow: train a dense network on a tabular CSV, evaluate it,
save architecture and weights, reload both and evaluate again.
"""

import json
from pathlib import Path
from typing import Any, Dict, Tuple

import keras
import numpy as np
import torch
import torch.nn as nn
from torch.utils.data import DataLoader, TensorDataset

from KerasBridge.components.backend import TorchOptimizer
from KerasBridge.components.component_registry import ComponentFactory
from KerasBridge.components.logger import get_logger
from KerasBridge.utils.helper import compile_model, get_model, get_optimizer

logger = get_logger()

_TORCH_LOSSES = {
    "binary_crossentropy": nn.BCELoss,
    "mse": nn.MSELoss,
    "mean_squared_error": nn.MSELoss,
}


def load_dataset(
    path: str, delimiter: str = ",", label_column: int = -1
) -> Tuple[np.ndarray, np.ndarray]:
    """Load a numeric CSV and split it into features and labels."""
    dataset = np.loadtxt(fname=path, delimiter=delimiter, dtype=np.float32, ndmin=2)
    ncols = dataset.shape[1]
    if not -ncols <= label_column < ncols:
        raise ValueError(f"label_column {label_column} out of range for {ncols} columns")
    label_index = label_column % ncols
    x = np.delete(dataset, label_index, axis=1)
    y = dataset[:, label_index]
    logger.log_rank_zero(f"Loaded {x.shape[0]} rows with {x.shape[1]} features from {path}")
    return x, y


def _log_scores(prefix: str, scores: Dict[str, float]) -> None:
    if "accuracy" in scores:
        logger.log_rank_zero(f"{prefix} accuracy: {scores['accuracy'] * 100:.2f}")
    logger.log_rank_zero(f"{prefix} scores: {scores}")


def _run_keras(config_manager, x, y, output_dir: Path) -> Dict[str, Any]:
    training = config_manager.get_training_config()
    builder = get_model(config_manager)

    model = compile_model(
        builder.build(),
        get_optimizer(config_manager),
        loss=training["loss"],
        metrics=training["metrics"],
    )
    model.fit(
        x, y,
        batch_size=training["batch_size"],
        epochs=training["epochs"],
        verbose=training["verbose"],
    )
    scores = model.evaluate(x, y, verbose=training["verbose"], return_dict=True)
    _log_scores("Trained model", scores)

    model_json = output_dir / training["model_json"]
    weights_file = output_dir / training["weights_file"]
    model_json.write_text(model.to_json())
    model.save_weights(str(weights_file))
    logger.log_rank_zero(f"Saved model to {model_json} and {weights_file}")

    loaded_model = keras.models.model_from_json(model_json.read_text())
    loaded_model.load_weights(str(weights_file))
    logger.log_rank_zero("Loaded model from disk")

    compile_model(
        loaded_model,
        training["reload_optimizer"],
        loss=training["loss"],
        metrics=training["metrics"],
    )
    reloaded_scores = loaded_model.evaluate(
        x, y, verbose=training["verbose"], return_dict=True
    )
    _log_scores("Reloaded model", reloaded_scores)

    return {
        "scores": scores,
        "reloaded_scores": reloaded_scores,
        "model_json": str(model_json),
        "weights_file": str(weights_file),
    }


def _evaluate_torch(model: nn.Module, loss_fn, x: torch.Tensor, y: torch.Tensor, metrics) -> Dict[str, float]:
    model.eval()
    with torch.no_grad():
        predictions = model(x)
        scores = {"loss": float(loss_fn(predictions, y))}
        if "accuracy" in metrics:
            scores["accuracy"] = float(((predictions > 0.5).float() == y).float().mean())
    return scores


def _run_torch(config_manager, x, y, output_dir: Path) -> Dict[str, Any]:
    training = config_manager.get_training_config()
    model_name = config_manager.get_model_config()["name"]
    builder = get_model(config_manager)

    if training["loss"] not in _TORCH_LOSSES:
        raise ValueError(
            f"Unsupported loss for torch: {training['loss']}. Available: {list(_TORCH_LOSSES)}"
        )
    loss_fn = _TORCH_LOSSES[training["loss"]]()

    features = torch.from_numpy(x)
    labels = torch.from_numpy(y).reshape(-1, 1)
    loader = DataLoader(
        TensorDataset(features, labels),
        batch_size=training["batch_size"],
        shuffle=True,
    )

    handle: TorchOptimizer = get_optimizer(config_manager)
    torch.manual_seed(training["seed"])
    model = builder.build_torch()
    optimizer, scheduler = handle.build(model.parameters())

    for epoch in range(training["epochs"]):
        model.train()
        epoch_loss = 0.0
        for batch_x, batch_y in loader:
            optimizer.zero_grad()
            loss = loss_fn(model(batch_x), batch_y)
            loss.backward()
            optimizer.step()
            # Keras applies decay per iteration, not per epoch
            if scheduler is not None:
                scheduler.step()
            epoch_loss += loss.item() * batch_x.shape[0]
        if training["verbose"]:
            logger.log_rank_zero(
                f"Epoch {epoch + 1}/{training['epochs']} - loss: {epoch_loss / len(features):.4f}"
            )

    scores = _evaluate_torch(model, loss_fn, features, labels, training["metrics"])
    _log_scores("Trained model", scores)

    model_json = output_dir / training["model_json"]
    weights_name = training["weights_file"].removesuffix(".weights.h5")
    weights_file = output_dir / Path(weights_name).with_suffix(".pt")
    model_json.write_text(json.dumps({"name": model_name, "config": builder.get_config()}))
    torch.save(model.state_dict(), weights_file)
    logger.log_rank_zero(f"Saved model to {model_json} and {weights_file}")

    architecture = json.loads(model_json.read_text())
    loaded_model = ComponentFactory.create_model(
        architecture["name"], **architecture["config"]
    ).build_torch()
    loaded_model.load_state_dict(torch.load(weights_file))
    logger.log_rank_zero("Loaded model from disk")

    reloaded_scores = _evaluate_torch(
        loaded_model, loss_fn, features, labels, training["metrics"]
    )
    _log_scores("Reloaded model", reloaded_scores)

    return {
        "scores": scores,
        "reloaded_scores": reloaded_scores,
        "model_json": str(model_json),
        "weights_file": str(weights_file),
    }


def run_experiment(config_manager) -> Dict[str, Any]:
    """
    Run the full example workflow with the configured backend.

    Returns:
        Dict with the scores of the trained and of the reloaded model, and the
        paths of the saved architecture and weights.
    """
    training = config_manager.get_training_config()
    dataset = config_manager.get_dataset_config()

    keras.utils.set_random_seed(training["seed"])
    output_dir = Path(training["output_dir"])
    output_dir.mkdir(parents=True, exist_ok=True)

    x, y = load_dataset(dataset["path"], dataset["delimiter"], dataset["label_column"])

    backend_name = config_manager.get_optimizer_config()["backend"]
    if backend_name == "torch":
        return _run_torch(config_manager, x, y, output_dir)
    return _run_keras(config_manager, x, y, output_dir)
