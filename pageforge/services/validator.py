"""Template-to-dataset contract check."""

from typing import Iterable

from pageforge.models.generate import TemplateValidation
from pageforge.models.template import PageTemplate


def validate_template(template: PageTemplate, available_fields: Iterable[str]) -> TemplateValidation:
    """Report which declared ``variables`` of *template* are not in *available_fields*.

    Validation trusts the template's ``variables`` manifest.  Placeholders
    used in the template text but not declared are not detected here, and
    declared variables that no placeholder uses are accepted.

    Never raises; an invalid template yields ``is_valid=False`` together with
    the missing names in declaration order.
    """
    available = set(available_fields)
    missing = [name for name in template.variables if name not in available]
    return TemplateValidation(
        is_valid=not missing,
        missing=missing,
        error=f"Missing CSV columns: {', '.join(missing)}" if missing else None,
    )
