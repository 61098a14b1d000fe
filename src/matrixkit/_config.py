"""
matrixkit Config - Library Configuration System

Provides property-based configuration for matrix construction, printing and
numerical tolerances. Allows control over library behavior without
threading extra arguments through every call.

Environment:
    MATRIXKIT_DEFAULT_STORAGE: "dense" or "sparse", the scheme used by
        factories that are not given one explicitly.

Example:
    >>> import matrixkit
    >>> matrixkit.config.format.precision = 2
    >>> with matrixkit.config.local(storage=StorageConfig(StorageScheme.SPARSE)):
    ...     m = DoubleMatrix.from_array(arr)   # sparse storage here
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger("matrixkit.config")


# =============================================================================
# Enumerations
# =============================================================================

class StorageScheme(Enum):
    """
    Storage scheme of a matrix.

    Attributes:
        DENSE: Every entry stored in a column-major buffer.
        SPARSE: Compressed-row storage of nonzero entries only.
    """
    DENSE = 'dense'
    SPARSE = 'sparse'


def _scheme_from_env() -> StorageScheme:
    """Read the default storage scheme from MATRIXKIT_DEFAULT_STORAGE."""
    raw = os.environ.get('MATRIXKIT_DEFAULT_STORAGE', '').strip().lower()
    if not raw:
        return StorageScheme.DENSE
    try:
        return StorageScheme(raw)
    except ValueError:
        logger.warning(
            "Ignoring MATRIXKIT_DEFAULT_STORAGE=%r (expected 'dense' or 'sparse')", raw
        )
        return StorageScheme.DENSE


# =============================================================================
# Configuration Classes
# =============================================================================

@dataclass
class FormatConfig:
    """Configuration for the string representation of matrices."""
    precision: int = 4             # Significant digits per entry
    max_rows: int = 20             # Rows shown before eliding
    max_cols: int = 10             # Columns shown before eliding


@dataclass
class StorageConfig:
    """Configuration for matrix construction."""
    default_scheme: StorageScheme = StorageScheme.DENSE


@dataclass
class ScalingConfig:
    """Configuration for multidimensional scaling."""
    # Eigenvalues at or below tolerance * max|eigenvalue| are not positive
    eigenvalue_tolerance: float = 1e-10


# =============================================================================
# Global Configuration Manager
# =============================================================================

class Config:
    """
    Global configuration manager for matrixkit.

    Provides thread-local configuration with context manager support.
    Configuration can be set globally or locally within a context.

    Example:
        # Global configuration
        matrixkit.config.format.precision = 6

        # Local configuration (context manager)
        with matrixkit.config.local(scaling=ScalingConfig(eigenvalue_tolerance=1e-6)):
            result = ClassicalMultidimensionalScaling.analyze(proximities)
        # Back to global config
    """

    _SECTIONS = ("format", "storage", "scaling")

    def __init__(self):
        self._global_format = FormatConfig()
        self._global_storage = StorageConfig(default_scheme=_scheme_from_env())
        self._global_scaling = ScalingConfig()

        # Thread-local storage for context overrides
        self._local = threading.local()

    def _override(self, name: str) -> Optional[Any]:
        return getattr(self._local, name, None)

    # -------------------------------------------------------------------------
    # Property Accessors (with thread-local override support)
    # -------------------------------------------------------------------------

    @property
    def format(self) -> FormatConfig:
        """Get format configuration."""
        local = self._override("format")
        return local if local is not None else self._global_format

    @format.setter
    def format(self, value: FormatConfig):
        """Set global format configuration."""
        self._global_format = value

    @property
    def storage(self) -> StorageConfig:
        """Get storage configuration."""
        local = self._override("storage")
        return local if local is not None else self._global_storage

    @storage.setter
    def storage(self, value: StorageConfig):
        """Set global storage configuration."""
        self._global_storage = value

    @property
    def scaling(self) -> ScalingConfig:
        """Get scaling configuration."""
        local = self._override("scaling")
        return local if local is not None else self._global_scaling

    @scaling.setter
    def scaling(self, value: ScalingConfig):
        """Set global scaling configuration."""
        self._global_scaling = value

    # -------------------------------------------------------------------------
    # Convenience Properties
    # -------------------------------------------------------------------------

    @property
    def default_scheme(self) -> StorageScheme:
        """Storage scheme used when a factory is not given one."""
        return self.storage.default_scheme

    @default_scheme.setter
    def default_scheme(self, value: StorageScheme):
        self._global_storage.default_scheme = StorageScheme(value)

    # -------------------------------------------------------------------------
    # Context Manager Support
    # -------------------------------------------------------------------------

    def local(self, **kwargs) -> "_LocalConfigContext":
        """
        Create a local configuration context.

        Args:
            **kwargs: Configuration overrides (format, storage, scaling)

        Returns:
            Context manager

        Raises:
            TypeError: If an unknown section is given
        """
        unknown = [key for key in kwargs if key not in self._SECTIONS]
        if unknown:
            raise TypeError(f"Unknown configuration sections: {unknown}")
        return _LocalConfigContext(self, **kwargs)

    def _set_local(self, **kwargs):
        """Set thread-local configuration."""
        for key, value in kwargs.items():
            if value is not None:
                setattr(self._local, key, value)

    def _clear_local(self, keys: List[str]):
        """Clear thread-local configuration."""
        for key in keys:
            if hasattr(self._local, key):
                setattr(self._local, key, None)

    # -------------------------------------------------------------------------
    # Reset / Serialization
    # -------------------------------------------------------------------------

    def reset(self):
        """Reset all configurations to defaults."""
        self._global_format = FormatConfig()
        self._global_storage = StorageConfig(default_scheme=_scheme_from_env())
        self._global_scaling = ScalingConfig()

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "format": {
                "precision": self.format.precision,
                "max_rows": self.format.max_rows,
                "max_cols": self.format.max_cols,
            },
            "storage": {
                "default_scheme": self.storage.default_scheme.name,
            },
            "scaling": {
                "eigenvalue_tolerance": self.scaling.eigenvalue_tolerance,
            },
        }

    def __repr__(self) -> str:
        return f"Config({self.to_dict()})"


class _LocalConfigContext:
    """Context manager for local configuration override."""

    def __init__(self, config: Config, **kwargs):
        self._config = config
        self._kwargs = kwargs
        self._keys = list(kwargs.keys())

    def __enter__(self):
        self._config._set_local(**self._kwargs)
        return self._config

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._config._clear_local(self._keys)
        return False


# =============================================================================
# Global Instance
# =============================================================================

config = Config()


def get_config() -> Config:
    """Get the global configuration instance."""
    return config


def set_default_storage(scheme: StorageScheme = StorageScheme.DENSE):
    """Set the storage scheme used by factories called without one."""
    config.default_scheme = scheme


def set_precision(precision: int = 4):
    """Set the number of significant digits used when printing matrices."""
    config.format = FormatConfig(
        precision=precision,
        max_rows=config.format.max_rows,
        max_cols=config.format.max_cols,
    )


__all__ = [
    "StorageScheme",
    "FormatConfig",
    "StorageConfig",
    "ScalingConfig",
    "Config",
    "config",
    "get_config",
    "set_default_storage",
    "set_precision",
]
