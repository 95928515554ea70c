"""Bulk ingredient import from tab-separated text.

Each data row has the columns::

    Name  Price  Unit size  Calories  Total Fat  Saturated Fat  Carbs  Sugar
    Fiber  Protein  Salt  [Labels]

A line such as ``Labels: protein, meat`` sets the labels for the rows that
follow it, unless a row carries its own comma-separated labels column.
"""

from dataclasses import dataclass

from food_tracker.domain.errors import FoodTrackerError
from food_tracker.domain.ingredients import Ingredient
from food_tracker.domain.nutrition import NutrientVector

MIN_COLUMNS = 11
_LABELS_PREFIX = "labels:"


@dataclass(frozen=True)
class ParsedLine:
    """One parsed input line.

    ``kind`` is ``"labels"``, ``"ingredient"``, ``"error"`` or ``"skip"``.
    """

    kind: str
    ingredient: Ingredient | None = None
    labels: tuple[str, ...] = ()
    line: str = ""
    error: str | None = None


def parse_tsv_ingredients(text: str) -> list[ParsedLine]:
    """Parse TSV input into ingredients, label headers, and errors."""
    results: list[ParsedLine] = []
    current_labels: tuple[str, ...] = ()

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        parts = line.split("\t")

        if len(parts) == 1 or all(not part.strip() for part in parts[1:]):
            name = parts[0].strip()
            if name.lower().startswith(_LABELS_PREFIX):
                current_labels = _split_labels(name[len(_LABELS_PREFIX) :])
                results.append(ParsedLine(kind="labels", labels=current_labels))
                continue
            if name == "Name" or "Calories" in name:
                results.append(ParsedLine(kind="skip", line=line))
                continue

        if len(parts) < MIN_COLUMNS:
            results.append(
                ParsedLine(
                    kind="error",
                    line=line,
                    error=f"Expected at least {MIN_COLUMNS} columns, got {len(parts)}",
                )
            )
            continue

        name = parts[0].strip()
        if not name or name == "Name":
            results.append(ParsedLine(kind="skip", line=line))
            continue

        labels = current_labels
        if len(parts) > MIN_COLUMNS and parts[MIN_COLUMNS].strip():
            labels = _split_labels(parts[MIN_COLUMNS])

        try:
            ingredient = Ingredient(
                id=None,
                name=name,
                package_price=_parse_number(parts[1]),
                package_size_g=_parse_number(parts[2]),
                nutrients=NutrientVector(
                    calories=_parse_number(parts[3]),
                    fat_g=_parse_number(parts[4]),
                    saturated_fat_g=_parse_number(parts[5]),
                    carbs_g=_parse_number(parts[6]),
                    sugar_g=_parse_number(parts[7]),
                    fiber_g=_parse_number(parts[8]),
                    protein_g=_parse_number(parts[9]),
                    salt_g=_parse_number(parts[10]),
                ),
                labels=labels,
            )
        except FoodTrackerError as exc:
            results.append(ParsedLine(kind="error", line=line, error=str(exc)))
            continue
        results.append(ParsedLine(kind="ingredient", ingredient=ingredient, line=line))

    return results


def parsed_ingredients(lines: list[ParsedLine]) -> list[Ingredient]:
    """Return only the ingredients from parsed lines."""
    return [line.ingredient for line in lines if line.ingredient is not None]


def _split_labels(raw: str) -> tuple[str, ...]:
    labels: list[str] = []
    for chunk in raw.split(","):
        label = chunk.strip().lower()
        if label and label not in labels:
            labels.append(label)
    return tuple(labels)


def _parse_number(value: str) -> float:
    try:
        return float(value.strip())
    except ValueError:
        return 0.0
