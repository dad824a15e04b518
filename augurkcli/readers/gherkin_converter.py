"""
Conversion of gherkin-official AST nodes (plain dictionaries) into the Augurk data classes.

Keywords are classified with the keyword sets of the dialect the feature was written in,
so "Gegeven " (nl) and "Given " (en) both become StepKeyword.GIVEN.
"""
import enum
from functools import reduce
from beartype.typing import Any, Dict, Iterable, List, Optional, Tuple

from gherkin.dialect import Dialect

from augurkcli.data_classes.dataclass_augurk import (
    Background,
    BlockKeyword,
    ExampleSet,
    Feature,
    Scenario,
    SourceLocation,
    Step,
    StepKeyword,
    Table,
)

Node = Dict[str, Any]

BLOCK_FOR_STEP_KEYWORD = {
    StepKeyword.GIVEN: BlockKeyword.GIVEN,
    StepKeyword.WHEN: BlockKeyword.WHEN,
    StepKeyword.THEN: BlockKeyword.THEN,
}


class StepKeywordError(ValueError):
    """Raised when the block of a step cannot be determined from its keyword"""

    def __init__(self, message: str, keyword: str, location: Optional[SourceLocation] = None):
        self.keyword = keyword
        self.location = location
        if location is not None:
            message = f"({location.line}:{location.column}): {message}"
        super().__init__(message)


class ScenarioKind(enum.Enum):
    PLAIN = "plain"
    OUTLINE = "outline"


class StepArgumentKind(enum.Enum):
    DATA_TABLE = "dataTable"
    DOC_STRING = "docString"
    NONE = "none"


def convert_feature(feature: Optional[Node], dialect: Dialect) -> Feature:
    if feature is None:
        raise ValueError("feature must not be None")

    children = feature.get("children") or []
    background = next((child["background"] for child in children if "background" in child), None)

    return Feature(
        title=feature.get("name", ""),
        description=feature.get("description") or None,
        tags=convert_tags(feature.get("tags")),
        scenarios=[convert_scenario(scenario, dialect) for scenario in _scenario_definitions(children)],
        background=convert_background(background, dialect),
        location=convert_location(feature.get("location")),
    )


def _scenario_definitions(children: Iterable[Node]) -> List[Node]:
    """Scenarios in source order, including the ones grouped under a Rule"""
    scenarios = []
    for child in children:
        if "scenario" in child:
            scenarios.append(child["scenario"])
        elif "rule" in child:
            scenarios.extend(_scenario_definitions(child["rule"].get("children") or []))
    return scenarios


def convert_location(location: Optional[Node]) -> Optional[SourceLocation]:
    if location is None:
        return None
    return SourceLocation(line=location.get("line", 0), column=location.get("column", 0))


def convert_tags(tags: Optional[Iterable[Node]]) -> List[str]:
    if tags is None:
        return []
    # The parser keeps the @ in the tag name
    return [tag["name"][1:] for tag in tags]


def scenario_kind(scenario: Node, dialect: Dialect) -> ScenarioKind:
    if scenario.get("examples") or scenario.get("keyword") in dialect.scenario_outline_keywords:
        return ScenarioKind.OUTLINE
    return ScenarioKind.PLAIN


def convert_scenario(scenario: Optional[Node], dialect: Dialect) -> Scenario:
    if scenario is None:
        raise ValueError("scenario must not be None")

    kind = scenario_kind(scenario, dialect)
    if kind is ScenarioKind.OUTLINE:
        example_sets = convert_example_sets(scenario.get("examples") or [])
    else:
        example_sets = []

    return Scenario(
        title=scenario.get("name", ""),
        description=scenario.get("description") or None,
        tags=convert_tags(scenario.get("tags")),
        steps=convert_steps(scenario.get("steps"), dialect),
        example_sets=example_sets,
        location=convert_location(scenario.get("location")),
    )


def convert_background(background: Optional[Node], dialect: Dialect) -> Optional[Background]:
    if background is None:
        return None

    return Background(
        title=background.get("name", ""),
        keyword=background.get("keyword", ""),
        steps=convert_steps(background.get("steps"), dialect),
        location=convert_location(background.get("location")),
    )


def convert_example_sets(examples: Iterable[Node]) -> List[ExampleSet]:
    return [convert_example_set(example_set) for example_set in examples]


def convert_example_set(examples: Node) -> ExampleSet:
    header = examples.get("tableHeader") or {}
    return ExampleSet(
        title=examples.get("name", ""),
        description=examples.get("description") or None,
        keyword=examples.get("keyword", ""),
        tags=convert_tags(examples.get("tags")),
        columns=_cell_values(header),
        rows=[_cell_values(row) for row in examples.get("tableBody") or []],
        location=convert_location(examples.get("location")),
    )


def convert_steps(steps: Optional[Iterable[Node]], dialect: Dialect) -> List[Step]:
    """Converts steps, assigning every step the block (Given/When/Then) it belongs to.

    And/But steps belong to the block of the nearest Given/When/Then before them.
    """
    if steps is None:
        return []

    _, converted = reduce(
        lambda accumulated, step: _add_step(accumulated, step, dialect),
        steps,
        (None, ()),
    )
    return list(converted)


def _add_step(
    accumulated: Tuple[Optional[BlockKeyword], Tuple[Step, ...]], step: Node, dialect: Dialect
) -> Tuple[BlockKeyword, Tuple[Step, ...]]:
    current_block, converted = accumulated
    keyword = step.get("keyword", "")
    step_keyword = classify_step_keyword(keyword, dialect)
    location = convert_location(step.get("location"))

    if step_keyword in (StepKeyword.AND, StepKeyword.BUT):
        if current_block is None:
            raise StepKeywordError(
                f"Detected incorrect use of Gherkin syntax. Scenario cannot start with And or But ('{keyword}').",
                keyword,
                location,
            )
        block = current_block
    elif step_keyword in BLOCK_FOR_STEP_KEYWORD:
        block = BLOCK_FOR_STEP_KEYWORD[step_keyword]
    else:
        raise StepKeywordError(f"Unexpected step keyword '{keyword}'.", keyword, location)

    return block, converted + (_convert_step(step, step_keyword, block, location),)


def _convert_step(
    step: Node, step_keyword: StepKeyword, block: BlockKeyword, location: Optional[SourceLocation]
) -> Step:
    return Step(
        block_keyword=block,
        step_keyword=step_keyword,
        keyword=step.get("keyword", ""),
        content=step.get("text", ""),
        table_argument=convert_table(step),
        location=location,
    )


def classify_step_keyword(keyword: str, dialect: Dialect) -> StepKeyword:
    # And/But are checked first, "* " is part of every keyword set
    if keyword in dialect.and_keywords:
        return StepKeyword.AND
    if keyword in dialect.but_keywords:
        return StepKeyword.BUT
    if keyword in dialect.given_keywords:
        return StepKeyword.GIVEN
    if keyword in dialect.when_keywords:
        return StepKeyword.WHEN
    if keyword in dialect.then_keywords:
        return StepKeyword.THEN
    return StepKeyword.NONE


def step_argument_kind(step: Node) -> StepArgumentKind:
    if step.get("dataTable") is not None:
        return StepArgumentKind.DATA_TABLE
    if step.get("docString") is not None:
        return StepArgumentKind.DOC_STRING
    return StepArgumentKind.NONE


def convert_table(step: Node) -> Optional[Table]:
    """Converts the data table argument of a step, None for any other kind of argument"""
    if step_argument_kind(step) is not StepArgumentKind.DATA_TABLE:
        return None

    table = step["dataTable"]
    rows = table.get("rows") or []
    return Table(
        columns=_cell_values(rows[0]) if rows else [],
        # The first row holds the column headers
        rows=[_cell_values(row) for row in rows[1:]],
        location=convert_location(table.get("location")),
    )


def _cell_values(row: Node) -> List[str]:
    return [cell.get("value", "") for cell in row.get("cells") or []]
