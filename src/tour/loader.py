import json
import os
import re
from typing import Any, Dict, List, Optional

import pandas as pd


def load_jobs(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads search jobs from a file. Handles .parquet, .csv, .json and .jsonl formats.
    Returns a list of raw job dictionaries suitable for `SearchConfig.from_dict`.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    stem = os.path.splitext(os.path.basename(file_path))[0]

    def _is_missing(value: Any) -> bool:
        if value is None:
            return True
        # Parquet list columns arrive as numpy arrays.
        if isinstance(value, (list, tuple, dict)) or getattr(value, "ndim", 0):
            return False
        return bool(pd.isna(value))

    def _parse_start(value: Any) -> Optional[List[int]]:
        if isinstance(value, str):
            match = re.match(r"^\s*\(?\s*(-?\d+)\s*[,x ]\s*(-?\d+)\s*\)?\s*$", value)
            if match:
                return [int(match.group(1)), int(match.group(2))]
            return None
        if hasattr(value, "tolist"):
            value = value.tolist()
        return [int(v) for v in value]

    def _parse_moves(value: Any) -> Any:
        if isinstance(value, str):
            return json.loads(value)
        if hasattr(value, "tolist"):
            value = value.tolist()
        return [list(v) for v in value]

    def _normalize_record(record: Dict[str, Any], index: int) -> Dict[str, Any]:
        record = {k: v for k, v in record.items() if not _is_missing(v)}
        record.setdefault("id", f"{stem}-{index}")
        record["id"] = str(record["id"])

        # "size" such as "8x8" or "5*6" is accepted in place of width/height.
        size_value = record.get("size")
        if isinstance(size_value, str) and "width" not in record:
            match = re.match(r"^\s*(\d+)\s*[x*]\s*(\d+)\s*$", size_value)
            if match:
                record["width"] = int(match.group(1))
                record["height"] = int(match.group(2))

        if "start" in record:
            start = _parse_start(record["start"])
            if start is None:
                record.pop("start")
            else:
                record["start"] = start
        if "moves" in record:
            record["moves"] = _parse_moves(record["moves"])
        return record

    # Case 1: Parquet / CSV (tabular)
    if file_path.endswith(".parquet") or file_path.endswith(".csv"):
        try:
            if file_path.endswith(".parquet"):
                df = pd.read_parquet(file_path)
            else:
                df = pd.read_csv(file_path)
        except (ValueError, ImportError, OSError) as e:
            print(f"Error reading {file_path}: {e}")
            return []
        records = df.to_dict(orient="records")
        return [_normalize_record(r, i) for i, r in enumerate(records)]

    # Case 2: JSON File (Text; array or object)
    if file_path.endswith(".json"):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
            if isinstance(payload, list):
                return [_normalize_record(p, i) for i, p in enumerate(payload) if isinstance(p, dict)]
            if isinstance(payload, dict):
                return [_normalize_record(payload, 0)]
            return []
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL; fall back to line-delimited parsing.
            pass

    # Case 3: JSONL File (Text)
    data = []
    with open(file_path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(obj, dict):
                data.append(_normalize_record(obj, len(data)))
    return data
