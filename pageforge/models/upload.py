from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pageforge.models.template import Row


class DatasetReport(BaseModel):
    """Structural health of an uploaded dataset.

    ``errors`` make the dataset unusable; ``warnings`` are advisory only
    (empty columns, sparsely populated rows, missing conventional columns).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_valid: bool = True
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class UploadResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    headers: List[str]
    preview: List[Row]
    total_rows: int
    validation: DatasetReport
