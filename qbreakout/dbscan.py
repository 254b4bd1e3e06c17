"""DBSCAN density-based cluster analysis over a list of numbers."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field


@dataclass
class Clusters:
    """Clusters as lists of element indices."""

    groups: list[list[int]] = field(default_factory=list)

    def contains(self, element_idx: int) -> bool:
        """Whether any cluster holds ``element_idx``."""
        return any(element_idx in group for group in self.groups)

    def __iter__(self) -> Iterator[list[int]]:
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)


def _sort_key(value: float) -> tuple[int, float]:
    # NaN sorts before every other value
    if isinstance(value, float) and math.isnan(value):
        return (0, 0.0)
    return (1, value)


def _precision(max_neighbor_distance: float) -> int:
    for limit, digits in ((0.00001, 6), (0.0001, 5), (0.001, 4), (0.01, 3), (0.1, 2)):
        if max_neighbor_distance < limit:
            return digits
    return 1


@dataclass
class ClusterAnalysisResult:
    """Outcome of a cluster analysis: clusters and noise as element indices."""

    elements: Sequence[float]
    clusters: Clusters
    noise: list[int]
    max_neighbor_distance: float
    core_point_min_neighbors: int

    def cluster_values(self) -> Iterator[list[float]]:
        """Yield each cluster as the list of its element values."""
        for group in self.clusters:
            yield [self.elements[i] for i in group]

    def __str__(self) -> str:
        """Summary like ``4x(1.0..5.0), 2x(noise)``."""
        digits = _precision(self.max_neighbor_distance)
        parts = []
        for values in sorted(self.cluster_values(), key=lambda c: _sort_key(c[0])):
            low = min(values, key=_sort_key)
            high = max(values, key=_sort_key)
            parts.append(f"{len(values)}x({low:.{digits}f}..{high:.{digits}f})")
        text = ", ".join(parts)
        if self.noise:
            text += f", {len(self.noise)}x(noise)"
        return text


def magnitude(value: int) -> int:
    """Order of magnitude: 0-10 -> 1, 11-100 -> 2, 101-1000 -> 3, ..."""
    if value < 0:
        raise ValueError("value must not be negative")
    return len(str(max(value - 1, 0)))


def _region_query(elements: Sequence[float], p_idx: int, max_distance: float) -> list[int]:
    p = elements[p_idx]
    return [i for i, e in enumerate(elements) if abs(p - e) <= max_distance]


def cluster_analysis(
    elements: Sequence[float],
    max_neighbor_distance: float,
    core_point_min_neighbors: int,
) -> ClusterAnalysisResult:
    """Run DBSCAN on ``elements``.

    A point is a core point when it has more than ``core_point_min_neighbors``
    neighbours (itself included) within ``max_neighbor_distance``.
    """
    visited: set[int] = set()
    clusters = Clusters()
    noise: set[int] = set()

    for p in range(len(elements)):
        if p in visited:
            continue
        visited.add(p)
        neighbors = _region_query(elements, p, max_neighbor_distance)
        if len(neighbors) > core_point_min_neighbors:
            clusters.groups.append(
                _build_cluster(
                    elements,
                    p,
                    neighbors,
                    visited,
                    max_neighbor_distance,
                    core_point_min_neighbors,
                    clusters,
                    noise,
                )
            )
        else:
            noise.add(p)

    clusters.groups.sort(key=lambda group: group[0])
    return ClusterAnalysisResult(
        elements=elements,
        clusters=clusters,
        noise=sorted(noise),
        max_neighbor_distance=max_neighbor_distance,
        core_point_min_neighbors=core_point_min_neighbors,
    )


def _build_cluster(
    elements: Sequence[float],
    p: int,
    neighbors: list[int],
    visited: set[int],
    max_distance: float,
    min_neighbors: int,
    existing: Clusters,
    noise: set[int],
) -> list[int]:
    forming = [p]
    members = {p}
    queue = list(neighbors)
    queued = set(queue)

    for pn in queue:  # the queue grows while it is walked
        if pn not in visited:
            visited.add(pn)
            further = _region_query(elements, pn, max_distance)
            if len(further) > min_neighbors:
                for e in further:
                    if e not in queued:
                        queued.add(e)
                        queue.append(e)
        if pn not in members and not existing.contains(pn):
            forming.append(pn)
            members.add(pn)
            noise.discard(pn)

    return sorted(forming)