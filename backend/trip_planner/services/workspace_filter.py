"""
Predicates for the co-working space directory.

Every active filter must hold for a workspace to survive. Connectivity is a minimum
tier (asking for "good" also accepts "excellent"); noise is an exact match.
"""
from typing import Dict, Iterable, List, Optional

from trip_planner.core.errors import check_exhaustive
from trip_planner.schemas.workspace import NoiseLevel, WifiQuality, Workspace, WorkspaceFilters

_WIFI_RANK: Dict[WifiQuality, int] = {
    WifiQuality.MODERATE: 1,
    WifiQuality.GOOD: 2,
    WifiQuality.EXCELLENT: 3,
}
check_exhaustive(_WIFI_RANK, WifiQuality, "wifi ranks")


def _wifi_rank(value: Optional[str]) -> int:
    # Unknown labels ("slow", "poor") and missing values rank below every selectable tier.
    try:
        return _WIFI_RANK[WifiQuality(value)]
    except ValueError:
        return 0


def matches_search(workspace: Workspace, query: str) -> bool:
    if not query:
        return True
    needle = query.lower()
    haystacks = [workspace.name, workspace.city, workspace.country]
    if workspace.region:
        haystacks.append(workspace.region)
    return any(needle in text.lower() for text in haystacks)


def matches_wifi(workspace: Workspace, tier: Optional[WifiQuality]) -> bool:
    if tier is None:
        return True
    return _wifi_rank(workspace.wifi_quality) >= _WIFI_RANK[WifiQuality(tier)]


def matches_noise(workspace: Workspace, level: Optional[NoiseLevel]) -> bool:
    if level is None:
        return True
    return workspace.noise_level == NoiseLevel(level).value


def matches_power_outlets(workspace: Workspace, required: Optional[bool]) -> bool:
    if not required:
        return True
    return bool(workspace.has_power_outlets)


def matches_quiet_zones(workspace: Workspace, required: Optional[bool]) -> bool:
    if not required:
        return True
    return bool(workspace.has_quiet_zones)


def matches_country(workspace: Workspace, country: Optional[str]) -> bool:
    if not country:
        return True
    return workspace.country.lower() == country.lower()


def matches(workspace: Workspace, filters: WorkspaceFilters) -> bool:
    return (
        matches_search(workspace, filters.search)
        and matches_wifi(workspace, filters.wifi_quality)
        and matches_noise(workspace, filters.noise_level)
        and matches_power_outlets(workspace, filters.has_power_outlets)
        and matches_quiet_zones(workspace, filters.has_quiet_zones)
        and matches_country(workspace, filters.country)
    )


def filter_workspaces(workspaces: Iterable[Workspace], filters: WorkspaceFilters) -> List[Workspace]:
    return [workspace for workspace in workspaces if matches(workspace, filters)]


def group_by_country(workspaces: Iterable[Workspace]) -> Dict[str, List[Workspace]]:
    """Partition by country, countries in first-seen order, members in input order."""
    grouped: Dict[str, List[Workspace]] = {}
    for workspace in workspaces:
        grouped.setdefault(workspace.country, []).append(workspace)
    return grouped
