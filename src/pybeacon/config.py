"""Monitoring configuration for pybeacon."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from pybeacon.exceptions import BeaconConfigError

#: Default time without a matching sighting before a region is
#: considered exited, in seconds.
DEFAULT_EXPIRATION_WINDOW: float = 30.0

#: Name of the persisted monitoring snapshot blob.
DEFAULT_STATE_NAME: str = "beacon_monitoring_state"


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise BeaconConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class MonitoringConfig:
    """Region monitoring configuration.

    Parameters
    ----------
    expiration_window : float
        Seconds without a matching sighting after which an inside
        region flips to outside on the next sweep.
    state_dir : Path
        Directory used by the default file-backed state store.
    state_name : str
        Name of the persisted snapshot blob.
    persistence_enabled : bool
        Restore on start and save on change.  When ``False`` the
        registry never touches the store.
    autosave : bool
        Save after every registration change and transition batch.
        Disable to batch saves and call ``RegionRegistry.save()``
        explicitly.
    """

    expiration_window: float = DEFAULT_EXPIRATION_WINDOW
    state_dir: Path = dataclasses.field(default_factory=lambda: Path.cwd() / ".pybeacon")
    state_name: str = DEFAULT_STATE_NAME
    persistence_enabled: bool = True
    autosave: bool = True

    def __post_init__(self) -> None:
        if self.expiration_window < 0:
            raise BeaconConfigError("expiration_window must be >= 0")
        if not self.state_name.strip():
            raise BeaconConfigError("state_name must be non-empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> MonitoringConfig:
        """Create configuration from environment variables.

        Reads optional ``PYBEACON_*`` variables.  Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        MonitoringConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        window_env = env.get("PYBEACON_EXPIRATION_WINDOW")
        if window_env is not None and "expiration_window" not in overrides:
            config_kwargs["expiration_window"] = _env_float("PYBEACON_EXPIRATION_WINDOW", window_env)

        state_dir_env = env.get("PYBEACON_STATE_DIR")
        if state_dir_env is not None and "state_dir" not in overrides:
            config_kwargs["state_dir"] = Path(state_dir_env).expanduser()

        state_name_env = env.get("PYBEACON_STATE_NAME")
        if state_name_env is not None and "state_name" not in overrides:
            config_kwargs["state_name"] = state_name_env

        if "persistence_enabled" not in overrides:
            config_kwargs["persistence_enabled"] = _env_bool(env.get("PYBEACON_PERSISTENCE_ENABLED"), True)

        if "autosave" not in overrides:
            config_kwargs["autosave"] = _env_bool(env.get("PYBEACON_AUTOSAVE"), True)

        config_kwargs.update(overrides)
        if isinstance(config_kwargs.get("state_dir"), str):
            config_kwargs["state_dir"] = Path(config_kwargs["state_dir"])

        return cls(**config_kwargs)
