"""Calculator state held for an interactive session.

:class:`CarbonState` owns the current :class:`~ecotracker.models.CarbonData`,
recomputes the results after every change and mirrors the inputs into a
:class:`~ecotracker.storage.KeyValueStore`.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from pydantic import ValidationError

from .calculator import calculate_carbon_footprint
from .models import DEFAULT_CARBON_DATA, CarbonData, EmissionResult
from .schemas import CarbonDataSchema
from .storage import KeyValueStore, MemoryStore

LOGGER = logging.getLogger(__name__)

STORAGE_KEY = "ecotracker-data"


def load_carbon_data(store: KeyValueStore, key: str = STORAGE_KEY) -> CarbonData:
    """Load the mirrored inputs, falling back to the defaults.

    Args:
        store: Store to read from.
        key: Entry holding the JSON mirror.

    Returns:
        The stored data, or :data:`DEFAULT_CARBON_DATA` when the entry is
        missing, unparsable or does not match the schema.
    """

    payload = store.get_item(key)
    if not payload:
        return DEFAULT_CARBON_DATA
    try:
        return CarbonDataSchema.model_validate_json(payload).to_domain()
    except ValidationError:
        LOGGER.warning("Stored carbon data under %r is malformed; using defaults", key)
        return DEFAULT_CARBON_DATA


def save_carbon_data(
    store: KeyValueStore, data: CarbonData, key: str = STORAGE_KEY
) -> None:
    """Mirror ``data`` into ``store``."""

    store.set_item(key, CarbonDataSchema.from_domain(data).dump_json())


class CarbonState:
    """Mutable holder for the calculator inputs of one session."""

    def __init__(self, store: KeyValueStore | None = None, *, key: str = STORAGE_KEY) -> None:
        self._store: KeyValueStore = store if store is not None else MemoryStore()
        self._key = key
        self._data = load_carbon_data(self._store, key)
        self._results = calculate_carbon_footprint(self._data)
        save_carbon_data(self._store, self._data, key)

    @property
    def data(self) -> CarbonData:
        return self._data

    @property
    def results(self) -> EmissionResult:
        return self._results

    def set_data(self, data: CarbonData) -> EmissionResult:
        """Replace all inputs, recompute and persist."""

        self._data = data
        self._results = calculate_carbon_footprint(data)
        save_carbon_data(self._store, data, self._key)
        LOGGER.debug("Recomputed footprint: %s", self._results)
        return self._results

    def update_travel(self, **changes: object) -> EmissionResult:
        """Merge travel field changes, e.g. ``update_travel(distance=12)``.

        Raises:
            TypeError: If a keyword is not a travel field.
        """

        return self.set_data(
            replace(self._data, travel=replace(self._data.travel, **changes))
        )

    def update_food(self, **changes: object) -> EmissionResult:
        return self.set_data(replace(self._data, food=replace(self._data.food, **changes)))

    def update_energy(self, **changes: object) -> EmissionResult:
        return self.set_data(
            replace(self._data, energy=replace(self._data.energy, **changes))
        )

    def reset(self) -> EmissionResult:
        """Restore and persist the default inputs."""

        return self.set_data(DEFAULT_CARBON_DATA)
