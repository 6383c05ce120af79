"""
Utility Modules

Configuration loading.
"""

from konterra_insights.utils.config import load_config, Config

__all__ = ["load_config", "Config"]
