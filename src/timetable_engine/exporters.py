"""Export functions for generation results."""

import json
from pathlib import Path

from .exceptions import TimetableError
from .models import GenerationResult


def export_result_json(result: GenerationResult, output_path: Path | str) -> None:
    """Export a generation result to a JSON file.

    Args:
        result: GenerationResult to export
        output_path: Path to output JSON file
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with open(output, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)


def load_result_json(input_path: Path | str) -> GenerationResult:
    """Load a generation result previously written by export_result_json.

    Args:
        input_path: Path to result JSON file

    Returns:
        GenerationResult with both timetables and the stored validation

    Raises:
        TimetableError: If the file is missing or not a result document
    """
    path = Path(input_path)
    if not path.exists():
        raise TimetableError(f"File not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return GenerationResult.from_dict(data)
    except json.JSONDecodeError as e:
        raise TimetableError(f"{path} is not valid JSON: {e}") from e
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise TimetableError(f"{path} is not a timetable result: {e}") from e
