"""UpdateCuratedList: replace the ids of a homepage list, creating it if needed."""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.showcase.curated_list import CuratedList, CuratedListKind

logger = structlog.get_logger(__name__)


@storefront.command(part_of="CuratedList")
class UpdateCuratedList:
    key = String(required=True, choices=CuratedListKind, max_length=50)
    product_ids = Text(required=True)  # JSON array


@storefront.command_handler(part_of=CuratedList)
class CuratedListHandler:
    @handle(UpdateCuratedList)
    def update_curated_list(self, command):
        repo = current_domain.repository_for(CuratedList)
        product_ids = json.loads(command.product_ids)

        try:
            curated = repo.get(command.key)
            curated.replace(product_ids)
        except ObjectNotFoundError:
            curated = CuratedList.create(CuratedListKind(command.key), product_ids)

        repo.add(curated)
        logger.info("curated_list_updated", key=command.key, count=len(curated.ids))
        return curated.ids
