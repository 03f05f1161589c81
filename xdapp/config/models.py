"""
Pydantic models for resource configuration.

Mirrors the defaults dict in loader.py, providing typed access
to all xdapp.yml settings via ResourceConfig.settings().
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BrokerConnectionConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    base_url: str = "http://localhost/Citrix/BrokerAdmin"
    verify_tls: bool = True
    # None blocks until the broker answers
    timeout: float | None = None
    api_key: str = ""


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    level: str = "INFO"
    json_output: bool = True


class ResourceSettings(BaseModel):
    """Root settings model mirroring xdapp.yml structure."""

    model_config = ConfigDict(extra="ignore")

    broker: BrokerConnectionConfig = BrokerConnectionConfig()
    logging: LoggingConfig = LoggingConfig()
