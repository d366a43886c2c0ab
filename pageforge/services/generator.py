"""Batch page generation: one template, many rows, one page per row."""

import logging
from typing import List

from pageforge.errors import InputError
from pageforge.models.generate import GenerationResult, RowFailure
from pageforge.models.page import GeneratedPage, PageRef
from pageforge.models.template import PageTemplate, Row
from pageforge.services.slugs import allocate_slug, seed_for_row
from pageforge.services.store import PageStore
from pageforge.services.structured_data import build_faq_schema
from pageforge.services.substitution import render_template
from pageforge.services.validator import validate_template

logger = logging.getLogger(__name__)


def build_page(template: PageTemplate, row: Row, store: PageStore) -> GeneratedPage:
    """Fill *template* from *row* and give the result a slug that is free in *store*."""
    content = render_template(template, row)
    faq_schema = build_faq_schema(content.faq)
    slug = allocate_slug(seed_for_row(row), store.exists_by_slug)
    return GeneratedPage(
        slug=slug,
        title=content.title,
        meta_description=content.meta_description,
        h1=content.h1,
        sections=content.sections,
        faq=content.faq,
        faq_schema=faq_schema,
        vars=dict(row),
        template_key=content.template_key,
    )


def generate_pages(template: PageTemplate, rows: List[Row], store: PageStore) -> GenerationResult:
    """Generate and persist one page per row of *rows*.

    The template is validated once against the first row's fields; an
    invalid template stops the batch before anything is written and is
    reported through ``result.validation``.

    Rows are processed strictly one after another, in input order.  Each
    slug allocation therefore sees every page committed by earlier rows of
    the same batch.  Do not parallelise this loop without making the
    allocate-and-insert step transactional.

    A failing row (substitution, empty slug seed, duplicate slug from a
    concurrent batch, store error) is recorded in ``result.errors`` and the
    batch carries on.

    Raises:
        InputError: if *rows* is empty.
    """
    if not rows:
        raise InputError("No data rows provided")

    validation = validate_template(template, rows[0].keys())
    result = GenerationResult(template_key=template.template_key, validation=validation)
    if not validation.is_valid:
        logger.warning(
            "Template rejected",
            extra={"template_key": template.template_key, "missing": validation.missing},
        )
        return result

    logger.info(
        "Generating %d pages with template %s", len(rows), template.template_key
    )

    for index, row in enumerate(rows, start=1):
        try:
            page = store.insert(build_page(template, row, store))
        except Exception as exc:
            logger.warning("Error processing row %d: %s", index, exc)
            result.errored += 1
            result.errors.append(RowFailure(row=index, seed=seed_for_row(row), error=str(exc)))
            continue

        result.succeeded += 1
        result.pages.append(PageRef(slug=page.slug, title=page.title))
        logger.debug("Created page %s", page.slug)

    logger.info(
        "Batch finished",
        extra={
            "template_key": template.template_key,
            "succeeded": result.succeeded,
            "errored": result.errored,
        },
    )
    return result
