"""Exportación JSON del listado agregado.

Por qué JSON:
- Interoperabilidad con otras herramientas (jq, scripts, pipelines).
- Mismo formato camelCase que el API, para poder re-importarlo sin mapeos.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from core.domain.models import Task


def tasks_to_payload(tasks: Iterable[Task]) -> list[dict[str, object]]:
    return [task.model_dump(mode="json", by_alias=True) for task in tasks]


def dumps_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps(tasks_to_payload(tasks), ensure_ascii=False, indent=2, sort_keys=True)


def export_tasks_json(*, tasks: Iterable[Task], output_path: Path) -> Path:
    """Exporta las tareas a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps_tasks(tasks) + "\n", encoding="utf-8")
    return output_path
