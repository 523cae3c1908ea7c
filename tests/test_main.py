import json
from pathlib import Path

from main import run_demo

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yml"


def test_run_demo_uses_bundled_config(capsys) -> None:
    payloads = run_demo(CONFIG_PATH)

    by_query = {payload["query"]: payload for payload in payloads}
    assert [item["document_id"] for item in by_query["пушистый пёс"]["results"]] == [4, 1]
    assert [item["document_id"] for item in by_query["пушистый -хвост"]["results"]] == [4]
    assert [item["document_id"] for item in by_query["ухоженный скворец"]["results"]] == [5]
    assert by_query["--пушистый"] == {"query": "--пушистый", "error": "Invalid query"}

    printed = capsys.readouterr().out
    assert json.dumps(by_query["--пушистый"], ensure_ascii=False, indent=2) in printed


def test_run_demo_with_custom_config(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yml"
    config_file.write_text(
        """
documents:
  - id: 2
    text: пушистый пёс
    ratings: [3]
""".strip(),
        encoding="utf-8",
    )

    payloads = run_demo(config_file)

    assert payloads[0]["results"] == [{"document_id": 2, "relevance": 0.0, "rating": 3}]
