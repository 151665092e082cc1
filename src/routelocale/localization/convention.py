"""Applies a ``RouteTranslationStore`` to the route table at freeze time."""

import logging

from routelocale.localization.store import RouteTranslationStore
from routelocale.routing.table import RouteTable

logger = logging.getLogger("routelocale.localization")


class LocalizationConvention:
    """Route-table convention that runs every stored pair in order.

    Registered on the app by ``App.localize()``::

        app.add_convention(LocalizationConvention(store))

    Each pair selects against the table as the previous pairs left it, so
    ``where_translated()`` sees the variants added earlier in the chain.
    """

    __slots__ = ("store",)

    def __init__(self, store: RouteTranslationStore) -> None:
        self.store = store

    def __call__(self, table: RouteTable) -> None:
        before = len(table.localized())
        for pair in self.store:
            routes = pair.selector.select(table)
            if not routes:
                logger.warning("%r selected no routes for %r", pair.selector, pair.processor)
                continue
            pair.processor.process(table, routes)
        logger.info(
            "Route localization applied %d rules: %d localized routes added, %d original routes left",
            len(self.store),
            len(table.localized()) - before,
            len(table.originals()),
        )
