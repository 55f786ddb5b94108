"""Export JSON schemas for Activity and AgentReply (camelCase wire format)."""

import json
from pathlib import Path

from backend.travelgpt.models import Activity, AgentReply


def main(schemas_dir: Path = Path("docs/schemas")) -> list[Path]:
    """Export schemas to docs/schemas/."""
    schemas_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for model in (Activity, AgentReply):
        path = schemas_dir / f"{model.__name__}.schema.json"
        with open(path, "w") as f:
            json.dump(model.model_json_schema(by_alias=True), f, indent=2)
        print(f"Exported {model.__name__} schema to {path}")
        written.append(path)
    return written


if __name__ == "__main__":
    main()
