from typing import Iterable, List

from zones.models import Record


def format_failed(failed: Iterable[Record], sep: str = "\n") -> str:
    """
    Join the distinct owner names of `failed` with `sep`, in first-seen order.

    An empty input gives an empty string.
    """
    seen = set()
    names: List[str] = []
    for r in failed:
        if r.name in seen:
            continue
        seen.add(r.name)
        names.append(r.name)
    return sep.join(names)
