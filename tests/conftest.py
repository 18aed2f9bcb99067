"""Shared test fixtures."""

import json
import shutil
from datetime import date
from pathlib import Path

import pytest

from landing.common.settings import GeneratorSettings

FIXTURES_DIR = Path(__file__).parent / "fixtures"
PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def fixtures_dir():
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def today():
    """Fixed reference date so rendered output is deterministic."""
    return date(2025, 6, 1)


@pytest.fixture
def api_page_payload():
    """Load a landing API page fixture ({data, pagination})."""
    return json.loads((FIXTURES_DIR / "api_page.json").read_text(encoding="utf-8"))


@pytest.fixture
def full_product():
    """A product with localized text, attributes and compatibilities."""
    return {
        "id": "a1b2c3d4-0000-4000-8000-000000000001",
        "sku": "FA-208",
        "name": {"es": "Filtro de Aire", "en": "Air Filter"},
        "description": "Filtro de aire de alto flujo.",
        "brand": {"name": "Mann"},
        "category": {"name": {"es": "Filtros"}},
        "attributes": {"Largo": "210 mm", "Material": "Papel"},
        "image": {"alt": "Filtro Mann FA-208"},
        "compatibilities": [
            {
                "vehicleGeneration": {
                    "generationName": "I",
                    "yearStart": 2012,
                    "yearEnd": 2014,
                    "vehicleModel": {"name": "208", "vehicleBrand": {"name": "Peugeot"}},
                },
                "vehicleLocation": {"name": "Motor"},
            },
            {
                "vehicleGeneration": {
                    "generationName": "II",
                    "yearStart": 2023,
                    "yearEnd": None,
                    "vehicleModel": {"name": "Cronos", "vehicleBrand": {"name": "Fiat"}},
                },
                "vehicleLocation": {"name": "Motor"},
            },
        ],
        "updatedAt": "2025-03-10T12:00:00Z",
    }


@pytest.fixture
def minimal_product():
    """A product with only an id: every field falls back to its default."""
    return {"id": 42}


@pytest.fixture
def project_root(tmp_path):
    """Temporary project root with the real templates and config."""
    shutil.copytree(PROJECT_ROOT / "templates", tmp_path / "templates")
    shutil.copytree(PROJECT_ROOT / "config", tmp_path / "config")
    (tmp_path / "data").mkdir()
    return tmp_path


@pytest.fixture
def file_settings(project_root, full_product):
    """File-mode settings reading a one-product fixture."""
    input_path = project_root / "data" / "products.json"
    input_path.write_text(json.dumps([full_product]), encoding="utf-8")
    return GeneratorSettings(
        root_dir=project_root,
        site_url="https://discor.com.ar",
        image_base_url="https://cdn.discor.com.ar/img",
        input_path=input_path,
    )
