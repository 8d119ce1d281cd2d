"""
Collection file utilities
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import yaml

from core.models import ImageRecord

COLLECTION_EXTENSIONS = {'.json', '.yaml', '.yml'}

def load_collection(path: str) -> List[Dict[str, Any]]:
    """
    Load raw image rows from a JSON or YAML file

    The file holds either a list of rows or an object with an 'images' list.
    """
    file_path = Path(path)
    if file_path.suffix.lower() not in COLLECTION_EXTENSIONS:
        raise ValueError(f"Unsupported collection format: {file_path.suffix}")

    with open(file_path, 'r') as f:
        if file_path.suffix.lower() == '.json':
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    if isinstance(data, dict):
        data = data.get('images', [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of images in {path}")

    return data

def record_to_dict(record: ImageRecord) -> Dict[str, Any]:
    """Serialize a record back into the flat row shape"""
    row = dict(record.extra)
    row['id'] = record.id
    if record.has_metadata:
        row['tags'] = list(record.tags)
        row['description'] = record.description
        row['colors'] = list(record.colors)
        if record.status is not None:
            row['ai_processing_status'] = record.status
    return row

def save_results(records: List[ImageRecord], output_path: str, scores: List[float] = None):
    """Save ranked records to a JSON file"""
    rows = [record_to_dict(r) for r in records]
    if scores is not None:
        for row, score in zip(rows, scores):
            row['similarity'] = float(score)

    with open(output_path, 'w') as f:
        json.dump(rows, f, indent=2, default=str)
