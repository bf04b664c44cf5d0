"""Builders for raw trace events and whole profiles."""

from __future__ import annotations

import gzip
import json
from pathlib import Path
from typing import Any

MAIN_TID = 1
CRITICAL_PATH_TID = 2
GC_TID = 3
PID = 1


def complete(
    name: str | None,
    cat: str | None,
    ts: int,
    dur: int,
    *,
    tid: int = MAIN_TID,
    pid: int = PID,
    args: dict[str, Any] | None = None,
) -> dict[str, Any]:
    event: dict[str, Any] = {"ph": "X", "ts": ts, "dur": dur, "tid": tid, "pid": pid}
    if name is not None:
        event["name"] = name
    if cat is not None:
        event["cat"] = cat
    if args is not None:
        event["args"] = args
    return event


def instant(name: str, cat: str, ts: int, *, tid: int = MAIN_TID, pid: int = PID) -> dict[str, Any]:
    return {"ph": "i", "name": name, "cat": cat, "ts": ts, "tid": tid, "pid": pid}


def counter(
    name: str, ts: int, args: dict[str, Any], *, tid: int | None = None, pid: int = PID
) -> dict[str, Any]:
    event: dict[str, Any] = {"ph": "C", "name": name, "ts": ts, "args": args, "pid": pid}
    if tid is not None:
        event["tid"] = tid
    return event


def thread_name(name: str, *, tid: int, pid: int = PID) -> dict[str, Any]:
    return {"ph": "M", "name": "thread_name", "tid": tid, "pid": pid, "args": {"name": name}}


class ProfileBuilder:
    """Assembles a profile dict with a main thread already in place."""

    def __init__(self, *, main_thread_name: str = "Main Thread") -> None:
        self.other_data: dict[str, Any] = {"build_id": "test"}
        self.events: list[dict[str, Any]] = [thread_name(main_thread_name, tid=MAIN_TID)]

    def add(self, *events: dict[str, Any]) -> ProfileBuilder:
        self.events.extend(events)
        return self

    def with_thread(self, name: str, tid: int, *events: dict[str, Any]) -> ProfileBuilder:
        self.events.append(thread_name(name, tid=tid))
        return self.add(*events)

    def with_launch_and_finish(
        self, launch_ts: int = 0, finish_ts: int = 10_000_000
    ) -> ProfileBuilder:
        return self.add(
            complete("Launch Blaze", "build phase marker", launch_ts, 1_000),
            instant("Finishing", "general information", finish_ts),
        )

    def with_critical_path(self, *events: dict[str, Any]) -> ProfileBuilder:
        return self.with_thread("Critical Path", CRITICAL_PATH_TID, *events)

    def with_garbage_collector(self, *events: dict[str, Any]) -> ProfileBuilder:
        return self.with_thread("Garbage Collector", GC_TID, *events)

    def build(self) -> dict[str, Any]:
        return {"otherData": dict(self.other_data), "traceEvents": list(self.events)}

    def write(self, path: Path) -> Path:
        payload = json.dumps(self.build())
        if path.suffix == ".gz":
            with gzip.open(path, "wt", encoding="utf-8") as fh:
                fh.write(payload)
        else:
            path.write_text(payload, encoding="utf-8")
        return path
