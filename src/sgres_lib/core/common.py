# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
General utility functions for sgres.
"""

from functools import lru_cache

import yaml

from .logger import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def load_yaml_dumper() -> type[yaml.Dumper]:
    """Return the fastest available YAML dumper (CDumper if libyaml is available)."""
    if dumper := getattr(yaml, "CDumper", None):
        logger.debug("Loaded YAML CDumper.")
        return dumper

    logger.debug("Loaded default YAML dumper.")
    return yaml.Dumper
