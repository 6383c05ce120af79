"""
Configuration Management

Loads configuration from YAML files with environment variable resolution.
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


class GraphConfig(BaseModel):
    """Graph construction configuration."""
    default_strength: int = Field(default=3, ge=1, le=5)


class ClustersConfig(BaseModel):
    """Cluster description thresholds."""
    shared_tag_ratio: float = Field(default=0.5, ge=0.0, le=1.0)
    shared_country_ratio: float = Field(default=0.6, ge=0.0, le=1.0)


class HubsConfig(BaseModel):
    """Hub ranking configuration."""
    limit: int = 5


class IntroductionsConfig(BaseModel):
    """Introduction recommender configuration."""
    weights: dict[str, int] = Field(default_factory=lambda: {
        "shared_tag": 15,
        "same_company": 25,
        "same_city": 20,
        "same_country": 10,
        "shared_interest": 10,
        "shared_goal": 12,
        "same_relationship_type": 5,
        "mutual_connection": 20,
    })
    min_reasons: int = 2
    min_score: int = 25
    limit: int = 10
    summary_limit: int = 5


class WeakLinksConfig(BaseModel):
    """Weak connection detection configuration."""
    low_strength_max: int = 2
    high_strength_min: int = 4
    recent_days: int = 90


class RiskConfig(BaseModel):
    """Risk alert thresholds."""
    thresholds: dict[str, int] = Field(default_factory=lambda: {
        "bridge_min_clusters": 2,
        "bridge_high_clusters": 3,
        "hub_pool": 10,
        "hub_min_degree": 3,
        "hub_high_degree": 5,
        "cooling_window_days": 30,
        "favor_min_degree": 2,
        "favor_min_imbalance": 3,
        "favor_high_imbalance": 5,
        "isolated_min_rating": 4,
        "isolated_min_influence": 4,
    })


class TrendConfig(BaseModel):
    """Health trend configuration."""
    window_days: int = 30
    improving_ratio: float = 1.1
    declining_ratio: float = 0.9


class DashboardConfig(BaseModel):
    """Contact-level dashboard metrics configuration."""
    stale_days: int = 90
    top_countries: int = 10
    trend_months: int = 6


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None


class Config(BaseModel):
    """Root configuration object."""
    graph: GraphConfig = Field(default_factory=GraphConfig)
    clusters: ClustersConfig = Field(default_factory=ClustersConfig)
    hubs: HubsConfig = Field(default_factory=HubsConfig)
    introductions: IntroductionsConfig = Field(default_factory=IntroductionsConfig)
    weak_links: WeakLinksConfig = Field(default_factory=WeakLinksConfig)
    risk: RiskConfig = Field(default_factory=RiskConfig)
    trend: TrendConfig = Field(default_factory=TrendConfig)
    dashboard: DashboardConfig = Field(default_factory=DashboardConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _resolve_env_vars(data: Any) -> Any:
    """Recursively resolve environment variables in config values.

    Supports ${VAR_NAME} and ${VAR_NAME:-default} syntax.
    """
    if isinstance(data, str):
        if data.startswith("${") and data.endswith("}"):
            var_expr = data[2:-1]
            if ":-" in var_expr:
                var_name, default = var_expr.split(":-", 1)
                return os.environ.get(var_name, default)
            return os.environ.get(var_expr, data)
        return data
    elif isinstance(data, dict):
        return {k: _resolve_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars(item) for item in data]
    return data


def load_config(
    config_path: Optional[Path] = None,
    local_config_path: Optional[Path] = None,
) -> Config:
    """Load configuration from YAML files.

    Args:
        config_path: Path to main config file (default: config.yaml)
        local_config_path: Path to local overrides (default: config.local.yaml)

    Returns:
        Merged and validated Config object
    """
    project_root = Path(__file__).parent.parent.parent

    if config_path is None:
        config_path = project_root / "config.yaml"
    if local_config_path is None:
        local_config_path = project_root / "config.local.yaml"

    config_data: dict[str, Any] = {}

    if config_path.exists():
        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}

    if local_config_path.exists():
        with open(local_config_path) as f:
            local_data = yaml.safe_load(f) or {}
            config_data = _deep_merge(config_data, local_data)

    config_data = _resolve_env_vars(config_data)

    return Config(**config_data)


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
