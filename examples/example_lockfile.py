"""Compare two dependency lock lists by package name.

Packages pinned twice in one file show up as ignored entries; the last pin
wins, as it would for most installers.
"""

from __future__ import annotations

import dataclasses

from keyedlist import count_duplicates, diff, keyed_by


@keyed_by(lambda pin: pin.name.lower())
@dataclasses.dataclass(frozen=True)
class Pin:
    name: str
    version: str

    @classmethod
    def parse(cls, line: str) -> Pin:
        name, _, version = line.partition("==")
        return cls(name.strip(), version.strip())


OLD = ["requests==2.31.0", "hypothesis==6.90.0", "idna==3.4", "idna==3.6"]
NEW = ["Requests==2.32.3", "hypothesis==6.90.0", "urllib3==2.2.1"]


def changes(old: list[str], new: list[str]) -> dict[str, list[str]]:
    d = diff([Pin.parse(x) for x in old], [Pin.parse(x) for x in new])
    return {
        "added": [p.name for p in d.right],
        "removed": [p.name for p in d.left],
        "upgraded": [f"{a.name} {a.version} -> {b.version}" for a, b in d.both if a.version != b.version],
        "shadowed": [f"{e.item.name}=={e.item.version}" for e in d.ignored],
    }


def pinned_twice(lines: list[str]) -> dict[str, int]:
    return count_duplicates([Pin.parse(x) for x in lines])


if __name__ == "__main__":
    for kind, entries in changes(OLD, NEW).items():
        for entry in entries:
            print(f"{kind:<9} {entry}")
