"""
Bot configuration

Settings come from the environment (a `.env` file is loaded first) with
optional defaults from `config.yaml`:

    watcher:
      api_url: https://...
      channel_id: 123456789
      poll_ms: 15000
      debug: false
      region_codes: [br, bra]
    emoji:
      win: "<:ok:1408286736181891072>"
      village: "🏘️"

Environment variables always win over the YAML file.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import dotenv
import yaml

logger = logging.getLogger(__name__)

DEFAULT_POLL_MS = 15000
DEFAULT_REGION_CODES = ("br", "bra")

_TRUTHY = re.compile(r"^(1|true|yes)$", re.IGNORECASE)

# structure code -> env variable carrying its glyph
STRUCTURE_GLYPH_ENV = {
    "VILLAGE": "VILLAGE_EMOJI",
    "SHIPWRECK": "SHIP_EMOJI",
    "DESERT_TEMPLE": "DESERT_TEMPLE_EMOJI",
    "RUINED_PORTAL": "RUINED_PORTAL_EMOJI",
    "BURIED_TREASURE": "BURIED_TREASURE_EMOJI",
    "BRIDGE": "BRIDGE_EMOJI",
    "HOUSING": "HOUSING_EMOJI",
    "STABLES": "STABLES_EMOJI",
    "TREASURE": "TREASURE_EMOJI",
}


@dataclass(frozen=True)
class Glyphs:
    """Symbols used in announcements. Custom server emoji can be set via env."""

    win: str = "🏆"
    lose: str = "❌"
    forfeit: str = "🏳️"
    seed: str = "🌱"
    clock: str = "⏱️"
    trophy: str = "🏆"
    globe: str = "🌐"
    bastion: str = " "
    structures: Mapping[str, str] = field(default_factory=dict)

    def structure(self, code: Optional[str]) -> str:
        if not code:
            return ""
        return self.structures.get(str(code).upper(), "")

    @classmethod
    def from_sources(cls, env: Mapping[str, str], overrides: Mapping[str, Any]) -> "Glyphs":
        """
        Build glyphs from environment and YAML overrides

        Args:
            env: environment mapping (`WIN_EMOJI`, `SHIP_EMOJI` ...)
            overrides: the `emoji:` section of config.yaml, lower-case keys

        Returns:
            Glyphs with defaults for everything not overridden
        """
        def pick(env_key: str, default: str) -> str:
            value = env.get(env_key)
            if value:
                return value
            yaml_key = env_key[: -len("_EMOJI")].lower()
            value = overrides.get(yaml_key)
            return str(value) if value else default

        base = cls()
        structures = {}
        for code, env_key in STRUCTURE_GLYPH_ENV.items():
            glyph = pick(env_key, "")
            if glyph:
                structures[code] = glyph

        return cls(
            win=pick("WIN_EMOJI", base.win),
            lose=pick("LOSE_EMOJI", base.lose),
            forfeit=pick("FF_EMOJI", base.forfeit),
            seed=pick("SEED_EMOJI", base.seed),
            clock=pick("CLOCK_EMOJI", base.clock),
            trophy=pick("TROPHY_EMOJI", base.trophy),
            globe=pick("GLOBE_EMOJI", base.globe),
            bastion=pick("BASTION_EMOJI", base.bastion),
            structures=structures,
        )


@dataclass(frozen=True)
class Settings:
    token: Optional[str]
    client_id: Optional[str]
    guild_id: Optional[int]
    api_url: Optional[str]
    channel_id: Optional[int]
    poll_ms: int = DEFAULT_POLL_MS
    debug: bool = False
    region_codes: Tuple[str, ...] = DEFAULT_REGION_CODES
    glyphs: Glyphs = field(default_factory=Glyphs)
    footer_icon_url: Optional[str] = None

    @property
    def watcher_enabled(self) -> bool:
        return bool(self.api_url) and self.channel_id is not None

    @classmethod
    def load(cls, config_file: str = "config.yaml", env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Load settings from `.env`, the process environment and config.yaml

        Args:
            config_file: YAML file with optional defaults
            env: environment mapping, defaults to os.environ after loading `.env`

        Returns:
            Settings instance
        """
        if env is None:
            dotenv.load_dotenv()
            env = os.environ

        file_config = _load_yaml(Path(config_file))
        watcher = file_config.get("watcher") or {}
        emoji = file_config.get("emoji") or {}

        def value(env_key: str, yaml_key: str) -> Any:
            raw = env.get(env_key)
            if raw not in (None, ""):
                return raw
            return watcher.get(yaml_key)

        return cls(
            token=env.get("TOKEN") or env.get("DISCORD_TOKEN"),
            client_id=env.get("CLIENT_ID"),
            guild_id=parse_int(env.get("GUILD_ID"), "GUILD_ID"),
            api_url=value("RANKED_API_URL", "api_url"),
            channel_id=parse_int(value("RANKED_ANNOUNCE_CHANNEL_ID", "channel_id"), "RANKED_ANNOUNCE_CHANNEL_ID"),
            poll_ms=parse_poll_ms(value("RANKED_POLL_MS", "poll_ms")),
            debug=parse_flag(value("RANKED_DEBUG", "debug")),
            region_codes=parse_region_codes(value("RANKED_REGION_CODES", "region_codes")),
            glyphs=Glyphs.from_sources(env, emoji),
            footer_icon_url=env.get("FOOTER_ICON_URL") or env.get("MCSR_FOOTER_ICON_URL"),
        )


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("[config] failed to read %s: %s; ignoring it", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("[config] %s is not a mapping; ignoring it", path)
        return {}
    return data


def parse_int(raw: Any, name: str) -> Optional[int]:
    if raw in (None, ""):
        return None
    try:
        return int(str(raw).strip())
    except ValueError:
        logger.warning("[config] invalid integer for %s: %r", name, raw)
        return None


def parse_poll_ms(raw: Any) -> int:
    if raw in (None, ""):
        return DEFAULT_POLL_MS
    try:
        poll_ms = int(float(raw))
    except (TypeError, ValueError):
        return DEFAULT_POLL_MS
    return poll_ms if poll_ms > 0 else DEFAULT_POLL_MS


def parse_flag(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return False
    return bool(_TRUTHY.match(str(raw).strip()))


def parse_region_codes(raw: Any) -> Tuple[str, ...]:
    if raw in (None, ""):
        return DEFAULT_REGION_CODES
    if isinstance(raw, str):
        items = raw.split(",")
    else:
        items = [str(item) for item in raw]
    codes = tuple(item.strip().lower() for item in items if item.strip())
    return codes or DEFAULT_REGION_CODES
