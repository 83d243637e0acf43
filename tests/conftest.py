"""
Pytest configuration and shared fixtures for the career dataset tests
"""

import pytest
import os
import sys
import json
import csv

# Add the project root to Python path
project_root = os.path.dirname(os.path.dirname(__file__))
sys.path.insert(0, project_root)

from career_data.data_structures import SyncConfig


@pytest.fixture
def sample_nodes():
    """Node objects as stored in career-nodes.json"""
    return [
        {
            "id": "zorgassistent",
            "label": "Zorgassistent",
            "department": "Verpleging",
            "level": "MBO 2",
            "description": "Basiszorg, onder begeleiding",
            "requirements": ["Diploma Zorgassistent", "BHV"],
            "salary": "FWG 25",
            "Care/non care": "Care",
        },
        {
            "id": "verpleegkundige",
            "label": "Verpleegkundige",
            "department": "Verpleging",
            "level": "MBO 4",
            "description": 'Zorgt voor "complexe" patiënten\nen rapporteert',
            "requirements": ["BIG-registratie", "  Diploma MBO 4 "],
            "salary": "FWG 45",
            "Care cluster": "Verpleging & verzorging",
        },
        {
            "id": "teamleider",
            "label": "Teamleider",
            "department": "Management",
            "level": "HBO",
            "description": "Geeft leiding",
            "requirements": [],
            "salary": "45-60",
        },
    ]


@pytest.fixture
def sample_paths():
    """Path objects as stored in career-paths.json"""
    return [
        {"from": "zorgassistent", "to": "verpleegkundige", "timeframe": "2-4 years"},
        {"from": "verpleegkundige", "to": "teamleider", "timeframe": "3-5 years"},
        {"from": "verpleegkundige", "to": "teamleider", "timeframe": "1-2 years"},
    ]


@pytest.fixture
def data_dir(tmp_path):
    directory = tmp_path / "data"
    directory.mkdir()
    return directory


@pytest.fixture
def sync_config(data_dir):
    return SyncConfig(data_dir=str(data_dir), log_level='DEBUG')


@pytest.fixture
def json_dataset(data_dir, sample_nodes, sample_paths):
    """Write career-nodes.json and career-paths.json into the data directory"""
    with open(data_dir / "career-nodes.json", 'w', encoding='utf-8') as f:
        json.dump({"nodes": sample_nodes}, f, indent=2)
    with open(data_dir / "career-paths.json", 'w', encoding='utf-8') as f:
        json.dump({"paths": sample_paths}, f, indent=2)
    return data_dir


@pytest.fixture
def csv_dataset(data_dir):
    """Write nodes.csv and paths.csv (with a dangling path endpoint) via the csv module"""
    with open(data_dir / "nodes.csv", 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(['id', 'label', 'department', 'level', 'salary',
                         'description', 'requirements'])
        writer.writerow(['arts-assistent', 'Arts-assistent', 'Medisch', 'WO', 'FWG 60',
                         'Werkt onder supervisie, "AIOS"', 'Artsexamen; BIG-registratie ;'])
        writer.writerow(['specialist', 'Medisch specialist', 'Medisch', 'WO', 'FWG 80+',
                         'Multi-line\ndescription', 'Specialisatie'])
        writer.writerow(['opleider', 'Opleider', 'Medisch', 'WO', '',
                         '', ''])

    with open(data_dir / "paths.csv", 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(['from', 'to', 'timeframe'])
        writer.writerow(['arts-assistent', 'specialist', '4-6 years'])
        writer.writerow(['ghost-id', 'opleider', ''])
        writer.writerow(['specialist', 'opleider', '5+ years'])
    return data_dir
