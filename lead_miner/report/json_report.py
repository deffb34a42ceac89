# lead_miner/report/json_report.py

"""
Генерация JSON-отчёта для проекта LeadMiner.

Сериализация объекта ScrapeResponse в файл.
"""
import json
from pathlib import Path

from lead_miner.aggregator import ScrapeResponse


def render_json(response: ScrapeResponse, output_path: Path | str) -> Path:
    """
    Сохраняет ответ response в формате JSON по указанному пути.

    :param response: объект ScrapeResponse с найденными контактами
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(response.to_dict(), f, ensure_ascii=False, indent=2)

    return output
