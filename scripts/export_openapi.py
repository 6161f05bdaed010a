"""
Export OpenAPI schema to docs/api/ directory.

Generates both JSON and YAML versions of the OpenAPI specification
from the FastAPI application.

Usage:
    python scripts/export_openapi.py
"""

import json
import sys
from pathlib import Path

import yaml

# Add repository root to path
repo_dir = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(repo_dir))


def export_openapi(docs_dir: Path = repo_dir / "docs" / "api") -> dict:
    """Export OpenAPI schema to JSON and YAML files."""
    # Import app to trigger all route registrations
    from serviflex.main import app

    openapi_schema = app.openapi()

    docs_dir.mkdir(parents=True, exist_ok=True)
    json_path = docs_dir / "openapi.json"
    yaml_path = docs_dir / "openapi.yaml"

    with open(json_path, "w") as f:
        json.dump(openapi_schema, f, indent=2, ensure_ascii=False)
    print(f"OpenAPI JSON exported to: {json_path}")

    with open(yaml_path, "w") as f:
        yaml.dump(openapi_schema, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    print(f"OpenAPI YAML exported to: {yaml_path}")

    print("\nAPI Summary:")
    print(f"  Title: {openapi_schema['info']['title']}")
    print(f"  Version: {openapi_schema['info']['version']}")
    print(f"  Endpoints: {len(openapi_schema['paths'])}")
    print(f"  Schemas: {len(openapi_schema.get('components', {}).get('schemas', {}))}")
    return openapi_schema


if __name__ == "__main__":
    export_openapi()
