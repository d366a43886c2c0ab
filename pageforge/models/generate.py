from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pageforge.models.page import PageRef
from pageforge.models.template import PageTemplate


class GenerateRequest(BaseModel):
    rows: List[Dict[str, Any]] = Field(
        min_length=1,
        description="Data rows, one generated page per row.",
    )
    template: PageTemplate


class TemplateValidation(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_valid: bool
    missing: List[str] = Field(default_factory=list)
    error: Optional[str] = None


class RowFailure(BaseModel):
    row: int  # 1-based position in the submitted rows
    seed: str = ""
    error: str


class GenerationResult(BaseModel):
    """Outcome of one batch.

    A batch whose template failed validation has ``validation.is_valid``
    set to ``False`` and zero counts; partial batches are reported through
    ``errored`` and ``errors``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    template_key: str
    validation: TemplateValidation
    succeeded: int = 0
    errored: int = 0
    pages: List[PageRef] = Field(default_factory=list)
    errors: List[RowFailure] = Field(default_factory=list)


class GenerateResponse(BaseModel):
    success: bool
    message: str
    results: GenerationResult
