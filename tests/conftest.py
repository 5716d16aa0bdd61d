import json
import pytest


@pytest.fixture
def collection_tree() -> dict:
    """
    A small collection payload: two named series, the second with a gap on 04-02.
    """
    return {
        "confirmed_cases": [
            {"date": "2020-04-01", "value": 5},
            {"date": "2020-04-02", "value": 8},
            {"date": "2020-04-03", "value": 13},
        ],
        "pcr_tested_persons": [
            {"date": "2020-04-01", "value": 120},
            {"date": "2020-04-03", "value": 98},
        ],
    }


@pytest.fixture
def write_payload(tmp_path):
    """
    Write an interchange tree (or raw text) to a JSON file under tmp_path and return its path.
    """

    def _write(content, name: str = "payload.json") -> str:
        path = tmp_path / name
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write
