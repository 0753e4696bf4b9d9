"""Export the JSON Schemas of the documents ecotracker keeps in its store."""

from __future__ import annotations

import json
from pathlib import Path

from ecotracker.schemas import JOB_LIST_ADAPTER, CarbonDataSchema


def main() -> None:
    """Write one JSON Schema file per stored document to the repository root."""

    root = Path(__file__).resolve().parent.parent
    schemas = {
        "carbon_data_schema.json": CarbonDataSchema.model_json_schema(by_alias=True),
        "job_applications_schema.json": JOB_LIST_ADAPTER.json_schema(by_alias=True),
    }
    for filename, schema in schemas.items():
        (root / filename).write_text(json.dumps(schema, indent=2), encoding="utf-8")


if __name__ == "__main__":
    main()
