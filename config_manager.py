"""Configuration management for the queensweep command line.

This module provides a thin, explicit wrapper around a JSON configuration file
to centralize the live sweep and benchmark settings.

File format (high-level)
------------------------
- sweep_settings: search mode, worker threads, fan-out depth and the pause
  between sizes. There is deliberately no size limit: the sweep is unbounded.
- benchmark_settings: board sizes, runs per mode and whether to show a chart.

All methods return Python native types; the class does not validate semantics
beyond presence of keys to keep responsibilities minimal.
"""
import json
from pathlib import Path


class ConfigManager:
    """Load and query the configuration file.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Path to the configuration file.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Load and parse the JSON configuration file.

        Returns
        -------
        dict
            Root configuration object.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Create it or use the default config.json template"
            )

        with open(self.config_path, 'r') as f:
            config = json.load(f)
        if not isinstance(config, dict):
            raise ValueError(f"{self.config_path} must contain a JSON object")
        return config

    def get_sweep_settings(self):
        """Return live sweep settings (mode, workers, fan-out depth, pause)."""
        return self.config.get("sweep_settings", {})

    def get_benchmark_settings(self):
        """Return benchmark settings (sizes, runs, plot)."""
        return self.config.get("benchmark_settings", {})
