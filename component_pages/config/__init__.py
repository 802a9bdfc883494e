"""Load and validate compiler configuration for component builds.

This subpackage reads the optional ``components.yaml`` file found next to the
root document (or passed explicitly), merges it with built-in defaults and
CLI overrides, and returns a :class:`CompilerConfig` that the compiler and
asset copier consume.

Examples
--------
>>> from pathlib import Path
>>> from component_pages.config import load_compiler_config
>>> config = load_compiler_config(source_dir=Path("site"))  # doctest: +SKIP
>>> config.index_path  # doctest: +SKIP
PosixPath('site/index.html')
"""

from ..errors import ConfigError
from .loader import load_compiler_config
from .models import CompilerConfig

__all__ = ["CompilerConfig", "ConfigError", "load_compiler_config"]
