#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

import os
from functools import lru_cache

from core.app_context import AppContext
from core.config_loader import CONFIG_PATH_ENV, AppConfig, load_config


@lru_cache()
def get_config() -> AppConfig:
    """
    Get application configuration with caching.

    Loads the YAML file named by $APP_CONFIG_PATH (default config.yaml)
    and applies environment variable overrides.
    Result is cached for the life of the process.
    """
    return load_config(os.environ.get(CONFIG_PATH_ENV, "config.yaml"))


@lru_cache()
def get_app_context() -> AppContext:
    """
    FastAPI dependency that returns the process-wide AppContext.

    Usage:
        @router.get("/endpoint")
        def my_endpoint(ctx: AppContext = Depends(get_app_context)):
            ...

    Tests replace it through ``app.dependency_overrides``.
    """
    return AppContext.build(get_config())
