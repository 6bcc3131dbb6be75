"""Result record of the ``pools`` command."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Pool:
    """One configured mining pool."""

    index: int = field(default=0, metadata={"key": "POOL"})
    url: str = field(default="", metadata={"key": "URL"})
    status: str = field(default="", metadata={"key": "Status"})
    priority: int = field(default=0, metadata={"key": "Priority"})
    quota: int = field(default=0, metadata={"key": "Quota"})
    long_poll: bool = field(default=False, metadata={"key": "Long Poll"})
    getworks: int = field(default=0, metadata={"key": "Getworks"})
    accepted: int = field(default=0, metadata={"key": "Accepted"})
    rejected: int = field(default=0, metadata={"key": "Rejected"})
    works: int = field(default=0, metadata={"key": "Works"})
    discarded: int = field(default=0, metadata={"key": "Discarded"})
    stale: int = field(default=0, metadata={"key": "Stale"})
    get_failures: int = field(default=0, metadata={"key": "Get Failures"})
    remote_failures: int = field(default=0, metadata={"key": "Remote Failures"})
    user: str = field(default="", metadata={"key": "User"})
    last_share_time: int = field(default=0, metadata={"key": "Last Share Time"})
    diff1_shares: int = field(default=0, metadata={"key": "Diff1 Shares"})
    proxy_type: str = field(default="", metadata={"key": "Proxy Type"})
    proxy: str = field(default="", metadata={"key": "Proxy"})
    difficulty_accepted: float = field(
        default=0.0, metadata={"key": "Difficulty Accepted"}
    )
    difficulty_rejected: float = field(
        default=0.0, metadata={"key": "Difficulty Rejected"}
    )
    difficulty_stale: float = field(default=0.0, metadata={"key": "Difficulty Stale"})
    last_share_difficulty: float = field(
        default=0.0, metadata={"key": "Last Share Difficulty"}
    )
    has_stratum: bool = field(default=False, metadata={"key": "Has Stratum"})
    stratum_active: bool = field(default=False, metadata={"key": "Stratum Active"})
    stratum_url: str = field(default="", metadata={"key": "Stratum URL"})
    has_gbt: bool = field(default=False, metadata={"key": "Has GBT"})
    best_share: int = field(default=0, metadata={"key": "Best Share"})
    pool_rejected_pct: float = field(default=0.0, metadata={"key": "Pool Rejected%"})
    pool_stale_pct: float = field(default=0.0, metadata={"key": "Pool Stale%"})

    @property
    def alive(self) -> bool:
        return self.status == "Alive"
