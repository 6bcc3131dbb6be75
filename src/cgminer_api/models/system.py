"""Version and configuration models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Version:
    """Result of the ``version`` command.

    cgminer reports ``CGMiner``; bmminer based firmware reports
    ``BMMiner`` and a ``Type`` such as ``Antminer S9``.
    """

    cgminer: str = field(default="", metadata={"key": "CGMiner"})
    bmminer: str = field(default="", metadata={"key": "BMMiner"})
    api: str = field(default="", metadata={"key": "API"})
    miner: str = field(default="", metadata={"key": "Miner"})
    compile_time: str = field(default="", metadata={"key": "CompileTime"})
    type: str = field(default="", metadata={"key": "Type"})

    @property
    def software(self) -> str:
        if self.bmminer:
            return f"bmminer {self.bmminer}"
        return f"cgminer {self.cgminer}" if self.cgminer else "unknown"


@dataclass
class Config:
    """Result of the ``config`` command."""

    asc_count: int = field(default=0, metadata={"key": "ASC Count"})
    pga_count: int = field(default=0, metadata={"key": "PGA Count"})
    pool_count: int = field(default=0, metadata={"key": "Pool Count"})
    strategy: str = field(default="", metadata={"key": "Strategy"})
    log_interval: int = field(default=0, metadata={"key": "Log Interval"})
    device_code: str = field(default="", metadata={"key": "Device Code"})
    os: str = field(default="", metadata={"key": "OS"})
    hotplug: str = field(default="", metadata={"key": "Hotplug"})
