"""Group a range of ranked hits by parent directory."""

from __future__ import annotations

import logging
from typing import Dict, List, Protocol, Sequence

from sourcelens.models import DirectoryGroup, Hit

LOGGER = logging.getLogger(__name__)


class HitReader(Protocol):
    def get_document(self, doc_id: int) -> Hit: ...


def group_by_directory(
    reader: HitReader,
    hits: Sequence[int],
    start: int,
    stop: int,
    *,
    logger: logging.Logger = LOGGER,
) -> List[DirectoryGroup]:
    """Group ``hits[start:stop]`` by directory, in order of first appearance.

    Hits keep their rank order inside a group. Documents without a path
    are skipped; index errors from ``reader`` propagate.
    """
    groups: Dict[str, DirectoryGroup] = {}
    for index in range(max(start, 0), min(stop, len(hits))):
        doc_id = hits[index]
        hit = reader.get_document(doc_id)
        if hit.path is None:
            logger.warning("Document %s has no path field, skipping it", doc_id)
            continue
        group = groups.get(hit.parent)
        if group is None:
            group = groups[hit.parent] = DirectoryGroup(hit.parent)
        group.doc_ids.append(doc_id)
    return list(groups.values())
