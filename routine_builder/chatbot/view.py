"""
Build the widget view from session state.

``build_view`` is pure: it reads the session and returns a JSON-ready dict.
It is called after every state change; nothing here mutates state.
"""

from typing import TYPE_CHECKING, Any, Dict

from routine_builder.catalog.filters import FilterCriteria

if TYPE_CHECKING:  # pragma: no cover
    from routine_builder.chatbot.session import AdvisorSession

NO_FILTER_PLACEHOLDER = "Select a category to view products"
NO_RESULTS_PLACEHOLDER = "No products found for this category"
NO_SELECTION_PLACEHOLDER = "No products selected yet"
NO_DESCRIPTION = "No description available."


def build_products_view(session: "AdvisorSession") -> Dict[str, Any]:
    criteria = session.criteria
    if criteria is None:
        return {"items": [], "placeholder": NO_FILTER_PLACEHOLDER}

    visible = session.visible_products()
    items = [{**p.to_dict(), "selected": session.selection.contains(p.id)} for p in visible]
    return {
        "items": items,
        "placeholder": None if items else NO_RESULTS_PLACEHOLDER,
    }


def build_selection_view(session: "AdvisorSession") -> Dict[str, Any]:
    items = [{"id": p.id, "name": p.name} for p in session.selection]
    return {
        "items": items,
        "placeholder": None if items else NO_SELECTION_PLACEHOLDER,
        "can_clear": bool(items),
    }


def build_view(session: "AdvisorSession") -> Dict[str, Any]:
    criteria = session.criteria or FilterCriteria()
    return {
        "session_id": session.session_id,
        "catalog_loaded": session.catalog.loaded,
        "categories": session.catalog.categories(),
        "filters": {"category": criteria.category, "search": criteria.search_term},
        "products": build_products_view(session),
        "selected": build_selection_view(session),
        "chat": session.transcript.to_list(),
        "rtl": session.preferences.is_rtl(),
    }
