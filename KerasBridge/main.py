"""
# @ Create Time: 2026-10-05 10:17:29
# @ Modified time: 2026-10-13 17:02:51
# @ Description:
"""

"""
Entry point for the Pima Indians diabetes example.
"""

import logging
import sys

from KerasBridge.components.logger import get_logger
from KerasBridge.core.config_manager import ConfigManager
from KerasBridge.core.config_parser import create_parser, overrides_from_args
from KerasBridge.trainer import run_experiment

logger = get_logger()


def main(argv=None):
    """Main entry point for the example workflow."""
    parser = create_parser()
    args = parser.parse_args(argv)

    config_manager = ConfigManager()
    config_manager.load_config(args.config)
    if args.optimizer is not None and args.optimizer != config_manager.optimizer.name:
        # Hyperparameters of the configured optimizer do not apply to another one
        config_manager.optimizer.params.clear()
    config_manager.update_config(overrides_from_args(args))

    try:
        config_manager.validate_config()
    except ValueError as e:
        logger.log_rank_zero(f"Configuration validation failed: {e}", logging.ERROR)
        sys.exit(1)

    logger.prepare_for_logs(
        config_manager.training.output_dir, log_level=config_manager.log_level
    )

    logger.log_rank_zero("Starting example with configuration:")
    logger.log_rank_zero(f"Optimizer: {config_manager.optimizer.name}")
    logger.log_rank_zero(f"Backend: {config_manager.optimizer.backend}")
    logger.log_rank_zero(f"Model: {config_manager.model.name}")
    logger.log_rank_zero(f"Dataset: {config_manager.dataset.path}")
    logger.log_rank_zero(f"Epochs: {config_manager.training.epochs}")

    try:
        results = run_experiment(config_manager)
    except Exception as e:
        logger.log_rank_zero(f"Example run failed with error: {e}", logging.ERROR)
        raise

    logger.log_rank_zero("Example completed successfully!")
    return results


if __name__ == "__main__":
    main()
