from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Callable, List
from scanbrawl.core.logging import logger

SETTINGS_FILENAME = ".scanbrawl_settings.json"

# battle_speed -> multiplier applied to every pacing delay
SPEED_SCALE = {1: 0.5, 2: 1.0, 3: 1.5}

@dataclass
class SettingsData:
    battle_speed: int = 2          # 1 fast, 2 normal, 3 slow
    log_level: str = "INFO"        # DEBUG / INFO / WARN / ERROR
    debug: bool = False            # Verbose battle/debug logging
    log_capacity: int = 4          # Battle narration lines kept on screen

    def normalize(self):
        if self.battle_speed not in SPEED_SCALE:
            self.battle_speed = 2
        if self.log_level not in {"DEBUG","INFO","WARN","ERROR"}:
            self.log_level = "INFO"
        if not isinstance(self.log_capacity, int) or isinstance(self.log_capacity, bool) or self.log_capacity < 1:
            self.log_capacity = 4
        self.debug = bool(self.debug)

    @property
    def delay_scale(self) -> float:
        return SPEED_SCALE[self.battle_speed]

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path
        self._listeners: List[Callable[[SettingsData], None]] = []

    @classmethod
    def _resolve_path(cls) -> Path:
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls) -> "Settings":
        path = cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                # Backfill missing fields (migration safe)
                field_names = {f.name for f in fields(SettingsData)}
                data_kwargs = {name: raw[name] for name in field_names if name in raw}
                data = SettingsData(**data_kwargs)
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
            logger.debug("SettingsSaved", path=str(self.path))
        except OSError as e:
            logger.error("SettingsSaveFailed", error=str(e))

    def update(self, **changes):
        for k, v in changes.items():
            if k not in {f.name for f in fields(SettingsData)}:
                raise KeyError(f"Unknown setting {k!r}")
            setattr(self.data, k, v)
        self.data.normalize()
        self._notify()

    def on_change(self, fn: Callable[[SettingsData], None]):
        self._listeners.append(fn)

    def _notify(self):
        for fn in self._listeners:
            fn(self.data)

    def apply_log_level(self):
        from scanbrawl.core.logging import logger as global_logger
        # Without debug, INFO/DEBUG events stay hidden so play output is just the
        # rich console, where battle outcomes are printed as well.
        lvl: str = self.data.log_level
        if self.data.debug:
            global_logger.set_level("DEBUG")
        elif lvl in {"INFO","DEBUG"}:
            global_logger.set_level("WARN")
        else:
            global_logger.set_level(lvl)  # type: ignore[arg-type]
