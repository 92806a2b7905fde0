"""CPU load sampling."""

import numpy as np
import psutil


class LoadSampler:
    """Report aggregate CPU utilization over a sampling window."""

    def __init__(self, window: float = 0.6):
        self.window = window

    def sample(self) -> float:
        """
        Measure CPU utilization.

        Blocks for `window` seconds while psutil collects per-core counters.

        Returns:
            Mean utilization across logical CPUs (0-100)
        """
        per_cpu = psutil.cpu_percent(interval=self.window, percpu=True)
        if not per_cpu:
            return 0.0
        return float(np.mean(per_cpu))
