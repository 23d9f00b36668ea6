"""
# @ Create Time: 2026-10-02 15:02:10
# @ Modified time: 2026-10-08 19:44:53
# @ Description:
"""

"""
Command line parser for the example workflow.
"""

import argparse
from typing import Any, Dict


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the example workflow."""
    parser = argparse.ArgumentParser(
        description="Train, evaluate, save and reload a Keras model with a validated optimizer spec",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to configuration file (YAML or JSON)",
    )
    parser.add_argument(
        "--optimizer",
        type=str,
        default=None,
        help="Override the optimizer name (e.g. adam, sgd, rmsprop)",
    )
    parser.add_argument(
        "--backend",
        type=str,
        default=None,
        choices=["keras", "torch"],
        help="Override the engine the optimizer spec is built for",
    )
    parser.add_argument(
        "--epochs",
        type=int,
        default=None,
        help="Override the number of training epochs",
    )

    return parser


def overrides_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """Turn the override flags into a dict for ``ConfigManager.update_config``."""
    overrides: Dict[str, Any] = {}
    if args.optimizer is not None:
        overrides.setdefault("optimizer", {})["name"] = args.optimizer
    if args.backend is not None:
        overrides.setdefault("optimizer", {})["backend"] = args.backend
    if args.epochs is not None:
        overrides["training"] = {"epochs": args.epochs}
    return overrides
