from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def epoch_seconds(moment: datetime | None = None) -> int:
    return int((moment or utc_now()).timestamp())


def epoch_millis(moment: datetime | None = None) -> int:
    return int((moment or utc_now()).timestamp() * 1000)
