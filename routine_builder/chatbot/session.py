"""
Advisor session - the explicit state object behind one widget instance.

Control flow:
    start()       -> catalog load -> restore saved selection -> render
    set_filters() -> re-derive visible products -> render
    toggle()      -> selection change -> persist + render (via subscription)
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Union

from routine_builder.catalog.filters import FilterCriteria, filter_products
from routine_builder.catalog.models import Product
from routine_builder.catalog.store import CatalogStore
from routine_builder.chatbot.advisor import RoutineAdvisor
from routine_builder.chatbot.relay import RelayClient
from routine_builder.chatbot.transcript import Transcript
from routine_builder.chatbot.view import NO_DESCRIPTION, build_view
from routine_builder.errors import UnknownProductError
from routine_builder.selection.persistence import DisplayPreferences, SelectionPersistence
from routine_builder.selection.selection_set import SelectionSet

logger = logging.getLogger(__name__)

RenderCallback = Callable[[Dict[str, Any]], None]


class AdvisorSession:
    def __init__(
        self,
        session_id: str,
        catalog: CatalogStore,
        store,
        relay: RelayClient,
        on_render: Optional[RenderCallback] = None,
    ) -> None:
        self.session_id = session_id
        self.catalog = catalog
        self.selection = SelectionSet()
        self.persistence = SelectionPersistence(store, scope=session_id)
        self.preferences = DisplayPreferences(store, scope=session_id)
        self.transcript = Transcript()
        self.advisor = RoutineAdvisor(relay, self.transcript)
        # None until the first filter input; the view shows a prompt instead of products
        self.criteria: Optional[FilterCriteria] = None
        self.render_count = 0
        self.last_view: Optional[Dict[str, Any]] = None
        self._on_render = on_render
        # separate listeners: a failed save must not suppress the render
        self.selection.subscribe(self._persist_selection)
        self.selection.subscribe(self._render_selection)

    # --- Lifecycle -----------------------------------------------------------

    async def start(self) -> Dict[str, Any]:
        await self.catalog.load()
        self.restore_selection()
        return self.request_render()

    def restore_selection(self) -> bool:
        saved = self.persistence.load()
        if not saved:
            return False
        return self.selection.restore(saved)

    # --- Rendering -----------------------------------------------------------

    def view(self) -> Dict[str, Any]:
        return build_view(self)

    def request_render(self) -> Dict[str, Any]:
        view = build_view(self)
        self.render_count += 1
        self.last_view = view
        if self._on_render is not None:
            self._on_render(view)
        return view

    def _persist_selection(self, selection: SelectionSet) -> None:
        self.persistence.save(selection.serialize())

    def _render_selection(self, selection: SelectionSet) -> None:
        self.request_render()

    # --- Catalog browsing ----------------------------------------------------

    async def set_filters(self, category: Optional[str] = None, search: Optional[str] = None) -> Dict[str, Any]:
        if not self.catalog.loaded:
            await self.catalog.load()
        self.criteria = FilterCriteria.from_inputs(category, search)
        logger.debug("Session %s filters: %s", self.session_id, self.criteria)
        return self.request_render()

    def visible_products(self) -> List[Product]:
        return filter_products(self.catalog.products, self.criteria or FilterCriteria())

    def product_details(self, product_id: Union[int, str]) -> Dict[str, Any]:
        product = self.catalog.get(product_id)
        if product is None:
            raise UnknownProductError(product_id)
        return {
            "id": product.id,
            "name": product.name,
            "brand": product.brand,
            "description": product.description or NO_DESCRIPTION,
        }

    # --- Selection -----------------------------------------------------------

    def toggle(self, product_id: Union[int, str]) -> Dict[str, Any]:
        product = self.catalog.get(product_id)
        if product is None:
            raise UnknownProductError(product_id)
        self.selection.toggle(product)
        return self.last_view

    def remove(self, product_id: Union[int, str]) -> Dict[str, Any]:
        # matches on the stored copy so products missing from the catalog can still be removed
        wanted = str(product_id)
        entry = next((p for p in self.selection if str(p.id) == wanted), None)
        if entry is None:
            raise UnknownProductError(product_id)
        self.selection.toggle(entry)
        return self.last_view

    def clear(self) -> Dict[str, Any]:
        self.selection.clear()
        return self.last_view

    # --- Chat ----------------------------------------------------------------

    async def generate_routine(self) -> Dict[str, Any]:
        await self.advisor.generate_routine(self.selection.items)
        return self.request_render()

    async def send_chat(self, text: str) -> Dict[str, Any]:
        await self.advisor.send_chat(text)
        return self.request_render()

    # --- Preferences ---------------------------------------------------------

    def toggle_rtl(self) -> Dict[str, Any]:
        enabled = self.preferences.toggle_rtl()
        logger.debug("Session %s rtl=%s", self.session_id, enabled)
        return self.request_render()
