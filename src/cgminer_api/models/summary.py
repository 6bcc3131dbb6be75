"""Result record of the ``summary`` command."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Summary:
    """Miner-wide work and hashrate counters.

    cgminer reports ``MHS *`` rates; bmminer based firmware (Antminer)
    reports ``GHS *`` rates instead, often as strings.
    """

    elapsed: int = field(default=0, metadata={"key": "Elapsed"})
    mhs_av: float = field(default=0.0, metadata={"key": "MHS av"})
    mhs_5s: float = field(default=0.0, metadata={"key": "MHS 5s"})
    mhs_1m: float = field(default=0.0, metadata={"key": "MHS 1m"})
    mhs_5m: float = field(default=0.0, metadata={"key": "MHS 5m"})
    mhs_15m: float = field(default=0.0, metadata={"key": "MHS 15m"})
    ghs_5s: float | None = field(default=None, metadata={"key": "GHS 5s"})
    ghs_av: float | None = field(default=None, metadata={"key": "GHS av"})
    found_blocks: int = field(default=0, metadata={"key": "Found Blocks"})
    getworks: int = field(default=0, metadata={"key": "Getworks"})
    accepted: int = field(default=0, metadata={"key": "Accepted"})
    rejected: int = field(default=0, metadata={"key": "Rejected"})
    hardware_errors: int = field(default=0, metadata={"key": "Hardware Errors"})
    utility: float = field(default=0.0, metadata={"key": "Utility"})
    discarded: int = field(default=0, metadata={"key": "Discarded"})
    stale: int = field(default=0, metadata={"key": "Stale"})
    get_failures: int = field(default=0, metadata={"key": "Get Failures"})
    local_work: int = field(default=0, metadata={"key": "Local Work"})
    remote_failures: int = field(default=0, metadata={"key": "Remote Failures"})
    network_blocks: int = field(default=0, metadata={"key": "Network Blocks"})
    total_mh: float = field(default=0.0, metadata={"key": "Total MH"})
    work_utility: float = field(default=0.0, metadata={"key": "Work Utility"})
    difficulty_accepted: float = field(
        default=0.0, metadata={"key": "Difficulty Accepted"}
    )
    difficulty_rejected: float = field(
        default=0.0, metadata={"key": "Difficulty Rejected"}
    )
    difficulty_stale: float = field(default=0.0, metadata={"key": "Difficulty Stale"})
    best_share: int = field(default=0, metadata={"key": "Best Share"})
    device_hardware_pct: float = field(
        default=0.0, metadata={"key": "Device Hardware%"}
    )
    device_rejected_pct: float = field(
        default=0.0, metadata={"key": "Device Rejected%"}
    )
    pool_rejected_pct: float = field(default=0.0, metadata={"key": "Pool Rejected%"})
    pool_stale_pct: float = field(default=0.0, metadata={"key": "Pool Stale%"})
    last_getwork: int = field(default=0, metadata={"key": "Last getwork"})

    @property
    def hashrate_ghs(self) -> float:
        """Current 5s hashrate in GH/s regardless of firmware flavour."""
        if self.ghs_5s is not None:
            return self.ghs_5s
        return self.mhs_5s / 1000.0
