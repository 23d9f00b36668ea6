"""
# @ Create Time: 2026-09-28 10:05:12
# @ Modified time: 2026-10-10 08:55:47
# @ Description:
"""

"""
Bridge components: optimizer specs, engine backends and model builders.
Importing this package registers all of them.
"""

from KerasBridge.components.optimizer import *
from KerasBridge.components.backend import *
from KerasBridge.components.model import *
