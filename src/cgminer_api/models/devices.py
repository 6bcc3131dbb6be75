"""Result record of the ``devs`` command."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Device:
    """Per-device statistics.

    Depending on the hardware the index is reported as ``ASC``, ``PGA`` or
    ``GPU``; :attr:`index` returns whichever one is set.
    """

    asc: int | None = field(default=None, metadata={"key": "ASC"})
    pga: int | None = field(default=None, metadata={"key": "PGA"})
    gpu: int | None = field(default=None, metadata={"key": "GPU"})
    name: str = field(default="", metadata={"key": "Name"})
    id: int | None = field(default=None, metadata={"key": "ID"})
    enabled: bool = field(default=False, metadata={"key": "Enabled"})
    status: str = field(default="", metadata={"key": "Status"})
    temperature: float = field(default=0.0, metadata={"key": "Temperature"})
    mhs_av: float = field(default=0.0, metadata={"key": "MHS av"})
    mhs_5s: float = field(default=0.0, metadata={"key": "MHS 5s"})
    accepted: int = field(default=0, metadata={"key": "Accepted"})
    rejected: int = field(default=0, metadata={"key": "Rejected"})
    hardware_errors: int = field(default=0, metadata={"key": "Hardware Errors"})
    utility: float = field(default=0.0, metadata={"key": "Utility"})
    last_share_pool: int = field(default=0, metadata={"key": "Last Share Pool"})
    last_share_time: int = field(default=0, metadata={"key": "Last Share Time"})
    total_mh: float = field(default=0.0, metadata={"key": "Total MH"})
    diff1_work: int = field(default=0, metadata={"key": "Diff1 Work"})
    difficulty_accepted: float = field(
        default=0.0, metadata={"key": "Difficulty Accepted"}
    )
    difficulty_rejected: float = field(
        default=0.0, metadata={"key": "Difficulty Rejected"}
    )
    last_share_difficulty: float = field(
        default=0.0, metadata={"key": "Last Share Difficulty"}
    )
    last_valid_work: int = field(default=0, metadata={"key": "Last Valid Work"})
    device_hardware_pct: float = field(
        default=0.0, metadata={"key": "Device Hardware%"}
    )
    device_rejected_pct: float = field(
        default=0.0, metadata={"key": "Device Rejected%"}
    )
    device_elapsed: int = field(default=0, metadata={"key": "Device Elapsed"})

    @property
    def index(self) -> int | None:
        for value in (self.asc, self.pga, self.gpu):
            if value is not None:
                return value
        return None

    @property
    def alive(self) -> bool:
        return self.status == "Alive"
