import enum
from dataclasses import dataclass
from beartype.typing import List, Optional

from serde import field, serialize, deserialize

from augurkcli.data_classes.validation_exception import ValidationException


class StepKeyword(enum.Enum):
    """Keyword of a step as it was literally written"""

    NONE = "None"
    GIVEN = "Given"
    WHEN = "When"
    THEN = "Then"
    AND = "And"
    BUT = "But"


class BlockKeyword(enum.Enum):
    """Block (Given/When/Then) a step belongs to"""

    NONE = "None"
    GIVEN = "Given"
    WHEN = "When"
    THEN = "Then"


@serialize(rename_all="camelcase")
@deserialize(rename_all="camelcase")
@dataclass(frozen=True)
class SourceLocation:
    line: int
    column: int


@serialize(rename_all="camelcase")
@deserialize(rename_all="camelcase")
@dataclass(frozen=True)
class Table:
    """Data table argument of a step, header row excluded from the rows"""

    columns: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    location: Optional[SourceLocation] = field(default=None, skip_if_default=True)


@serialize(rename_all="camelcase")
@deserialize(rename_all="camelcase")
@dataclass(frozen=True)
class Step:
    block_keyword: BlockKeyword
    step_keyword: StepKeyword
    keyword: str
    content: str
    table_argument: Optional[Table] = field(default=None, skip_if_default=True)
    location: Optional[SourceLocation] = field(default=None, skip_if_default=True)


@serialize(rename_all="camelcase")
@deserialize(rename_all="camelcase")
@dataclass(frozen=True)
class ExampleSet:
    title: str
    keyword: str
    description: Optional[str] = field(default=None, skip_if_default=True)
    tags: List[str] = field(default_factory=list)
    columns: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    location: Optional[SourceLocation] = field(default=None, skip_if_default=True)

    def __post_init__(self):
        for row in self.rows:
            if len(row) != len(self.columns):
                raise ValidationException(
                    field_name="rows",
                    class_name=self.__class__.__name__,
                    reason=f"Row has {len(row)} cells but there are {len(self.columns)} columns.",
                )


@serialize(rename_all="camelcase")
@deserialize(rename_all="camelcase")
@dataclass(frozen=True)
class Scenario:
    title: str
    description: Optional[str] = field(default=None, skip_if_default=True)
    tags: List[str] = field(default_factory=list)
    steps: List[Step] = field(default_factory=list)
    example_sets: List[ExampleSet] = field(default_factory=list)
    location: Optional[SourceLocation] = field(default=None, skip_if_default=True)


@serialize(rename_all="camelcase")
@deserialize(rename_all="camelcase")
@dataclass(frozen=True)
class Background:
    title: str
    keyword: str
    steps: List[Step] = field(default_factory=list)
    location: Optional[SourceLocation] = field(default=None, skip_if_default=True)


@serialize(rename_all="camelcase")
@deserialize(rename_all="camelcase")
@dataclass(frozen=True)
class Feature:
    """Feature as it is published to Augurk"""

    title: str
    description: Optional[str] = field(default=None, skip_if_default=True)
    tags: List[str] = field(default_factory=list)
    scenarios: List[Scenario] = field(default_factory=list)
    background: Optional[Background] = field(default=None, skip_if_default=True)
    location: Optional[SourceLocation] = field(default=None, skip_if_default=True)
    source_filename: Optional[str] = field(default=None, skip_if_default=True)


@deserialize(rename_all="camelcase")
@dataclass
class FeatureDescription:
    """Feature summary as returned by Augurk when listing features"""

    title: str


@deserialize(rename_all="camelcase")
@dataclass
class FeatureGroup:
    """Group of features as returned by Augurk when listing the groups of a product"""

    name: str
    features: List[FeatureDescription] = field(default_factory=list)
