"""Preset deep-sky targets."""

from astroquality.astronomy.models import Target
from astroquality.core.exceptions import CatalogNotFoundError

GALACTIC_CENTER = Target(
    name="Milky Way Core (Sgr A*)",
    ra=266.42,
    dec=-29.0,
    aliases=["Sgr A*", "Galactic Center"],
)

PRESET_TARGETS: list[Target] = [
    Target(name="M42 - Orion Nebula", ra=83.82, dec=-5.39, aliases=["M42", "NGC 1976"]),
    Target(name="M31 - Andromeda Galaxy", ra=10.68, dec=41.27, aliases=["M31", "NGC 224"]),
    Target(name="M45 - Pleiades", ra=56.75, dec=24.12, aliases=["M45", "Seven Sisters"]),
    Target(name="M13 - Hercules Cluster", ra=250.42, dec=36.46, aliases=["M13", "NGC 6205"]),
    Target(name="M8 - Lagoon Nebula", ra=271.10, dec=-24.38, aliases=["M8", "NGC 6523"]),
    Target(name="NGC 7000 - North America Nebula", ra=314.75, dec=44.53, aliases=["NGC 7000"]),
    Target(name="M33 - Triangulum Galaxy", ra=23.46, dec=30.66, aliases=["M33", "NGC 598"]),
    GALACTIC_CENTER,
]


class TargetCatalog:
    """Lookup over the preset targets."""

    def __init__(self, targets: list[Target] | None = None):
        self._targets = list(targets) if targets is not None else list(PRESET_TARGETS)

    def __len__(self) -> int:
        return len(self._targets)

    def all(self) -> list[Target]:
        return list(self._targets)

    def search(self, query: str) -> Target | None:
        """Find a target by name or alias.

        Exact alias matches win over substring matches.
        """
        query_lower = query.lower().strip()
        for target in self._targets:
            if query_lower in (a.lower() for a in target.aliases):
                return target
        for target in self._targets:
            if target.matches_search(query):
                return target
        return None

    def get(self, query: str) -> Target:
        """Like search() but raises CatalogNotFoundError."""
        target = self.search(query)
        if target is None:
            raise CatalogNotFoundError(query)
        return target
