import hashlib
import os
from dataclasses import asdict, dataclass, fields
from typing import List, Mapping, Optional

RANDOM_SEED = -1
MAX_SEED = 2**31 - 1

# Environment overrides read by DungeonConfig.from_env (ROOMWEAVER_<FIELD>).
ENV_PREFIX = "ROOMWEAVER_"


@dataclass
class DungeonConfig:
    seed: Optional[int] = 39129
    room_size_min: int = 3
    room_size_max: int = 6
    width: int = 50
    height: int = 50
    room_pool_size: int = 50
    minimal_directional_room_distance: int = 7
    minimal_room_distance: int = 3
    additional_edges: int = 3
    min_door_dist_to_corner: int = 1
    enable_metrics: bool = True

    @property
    def size(self):
        return (self.width, self.height)

    def validate(self) -> List[str]:
        """Return configuration problems; an empty list means the config is usable."""
        errors: List[str] = []
        if self.width < 3 or self.height < 3:
            errors.append("grid must be at least 3x3")
        if self.room_size_min < 1:
            errors.append("room_size_min must be >= 1")
        if self.room_size_max < self.room_size_min:
            errors.append("room_size_max must be >= room_size_min")
        # The first room sits at the grid midpoint and must stay clear of the border row/column.
        limit = min(self.width - self.width // 2, self.height - self.height // 2) - 1
        if self.room_size_max > limit:
            errors.append(f"room_size_max must be <= {limit} for a {self.width}x{self.height} grid")
        for name in (
            "room_pool_size",
            "minimal_directional_room_distance",
            "minimal_room_distance",
            "additional_edges",
            "min_door_dist_to_corner",
        ):
            if getattr(self, name) < 0:
                errors.append(f"{name} must be >= 0")
        if self.seed is not None and self.seed < RANDOM_SEED:
            errors.append("seed must be >= 0 (or -1 for a random seed)")
        return errors

    def update(self, **changes) -> "DungeonConfig":
        """Apply typed field changes in place (unknown keys raise KeyError)."""
        known = {f.name: f for f in fields(self)}
        for key, raw in changes.items():
            if key not in known:
                raise KeyError(key)
            if key == "seed":
                value = coerce_seed(raw)
            elif key == "enable_metrics":
                value = _coerce_bool(raw)
            else:
                value = int(raw)
            setattr(self, key, value)
        return self

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DungeonConfig":
        environ = os.environ if environ is None else environ
        cfg = cls()
        overrides = {}
        for f in fields(cls):
            env_key = ENV_PREFIX + f.name.upper()
            if env_key in environ:
                overrides[f.name] = environ[env_key]
        if overrides:
            cfg.update(**overrides)
        return cfg


def _coerce_bool(raw) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() not in {"0", "false", "no", "off", ""}


def coerce_seed(value) -> int:
    """Convert an int or string seed to a bounded int; blank means random (-1)."""
    if value is None:
        return RANDOM_SEED
    if isinstance(value, bool):
        raise ValueError("seed must be an int or string")
    if isinstance(value, int):
        return value if value == RANDOM_SEED else value % MAX_SEED
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return RANDOM_SEED
        if s.lstrip("-").isdigit():
            return coerce_seed(int(s))
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % MAX_SEED
    raise ValueError("seed must be an int or string")


__all__ = ["DungeonConfig", "RANDOM_SEED", "coerce_seed"]
