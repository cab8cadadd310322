import logging
from typing import Optional

from jobfill.adapters.base import SiteAdapter
from jobfill.adapters.generic import (
    BambooHRAdapter,
    GenericAdapter,
    SmartRecruitersAdapter,
    SuccessFactorsAdapter,
)
from jobfill.adapters.greenhouse import GreenhouseAdapter
from jobfill.adapters.lever import LeverAdapter
from jobfill.adapters.workday import WorkdayAdapter
from jobfill.config import settings
from jobfill.core.field_classifier import FieldClassifier
from jobfill.core.form_detector import Document, as_document

logger = logging.getLogger(__name__)


# Checked in order; the first match wins
ADAPTERS = (
    WorkdayAdapter,
    LeverAdapter,
    GreenhouseAdapter,
    SmartRecruitersAdapter,
    BambooHRAdapter,
    SuccessFactorsAdapter,
)


def select_adapter(
    document: Optional[Document],
    url: str = "",
    classifier: Optional[FieldClassifier] = None,
) -> SiteAdapter:
    """
    Pick the adapter for a page from its URL and markup.

    Falls back to the generic adapter when nothing matches or site adapters
    are switched off (JOBFILL_ENABLE_SITE_ADAPTERS=false).
    """
    root = as_document(document) if document is not None else None

    if settings.enable_site_adapters:
        for adapter_cls in ADAPTERS:
            if adapter_cls.matches(root, url):
                logger.debug(f"Using {adapter_cls.platform} adapter")
                return adapter_cls(classifier)

    logger.debug("Using generic form adapter")
    return GenericAdapter(classifier)
