"""
# @ Create Time: 2026-09-29 09:02:18
# @ Modified time: 2026-09-29 09:05:40
# @ Description:
"""

"""
Process rank helpers.

The torch engine may run under ``torch.distributed``; only rank 0 should
write user-facing log lines in that case.
"""

import torch.distributed as dist


def is_dist_available_and_initialized() -> bool:
    """
    Check if distributed training is available and initialized.

    Returns:
        bool: True if distributed training is available and initialized, False otherwise.
    """
    if not dist.is_available():
        return False
    return dist.is_initialized()


def get_rank() -> int:
    """
    Get the rank of the current process.

    Returns:
        int: The rank of the current process, 0 outside distributed runs.
    """
    if not is_dist_available_and_initialized():
        return 0
    return dist.get_rank()
