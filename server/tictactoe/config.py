"""Game configuration dataclasses."""
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
import json
import logging


@dataclass
class PlayerConfig:
    """Display settings for one player."""
    name: str

    def to_dict(self) -> dict:
        return {"name": self.name}

    @classmethod
    def from_dict(cls, data: dict) -> PlayerConfig:
        return cls(**data)


@dataclass
class ServerConfig:
    """Where the web surface listens."""
    host: str = "127.0.0.1"
    port: int = 7000

    def to_dict(self) -> dict:
        return {"host": self.host, "port": self.port}

    @classmethod
    def from_dict(cls, data: dict) -> ServerConfig:
        return cls(
            host=data.get("host", "127.0.0.1"),
            port=data.get("port", 7000),
        )


@dataclass
class GameConfig:
    """Complete session configuration."""
    player_x: PlayerConfig = field(default_factory=lambda: PlayerConfig("Player X"))
    player_o: PlayerConfig = field(default_factory=lambda: PlayerConfig("Player O"))
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = "INFO"

    def to_dict(self) -> dict:
        return {
            "player_x": self.player_x.to_dict(),
            "player_o": self.player_o.to_dict(),
            "server": self.server.to_dict(),
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: dict) -> GameConfig:
        defaults = cls()
        return cls(
            player_x=PlayerConfig.from_dict(data["player_x"]) if "player_x" in data else defaults.player_x,
            player_o=PlayerConfig.from_dict(data["player_o"]) if "player_o" in data else defaults.player_o,
            server=ServerConfig.from_dict(data.get("server", {})),
            log_level=data.get("log_level", "INFO"),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> GameConfig:
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def load(cls, path: str | Path | None) -> GameConfig:
        """Load from a JSON file, or defaults if no path is given."""
        if path is None:
            return cls()
        return cls.from_json(Path(path).read_text())


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
